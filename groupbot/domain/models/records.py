"""
Record models for the points ledger and the picture catalog.

These are the documents exchanged with the persistent store and the
in-memory mirrors owned by the ledger and the catalog.
"""

from pydantic import BaseModel, Field


class PointsRecord(BaseModel):
    """Point balance of a single group member.

    One record exists per user who has ever earned points.
    """

    user_id: str = Field(..., min_length=1)
    points: int = Field(0, ge=0, description="Current balance, never negative")


class PictureEntry(BaseModel):
    """A submitted picture or video with its caption.

    ``id`` is assigned by the store on append; ``appearances`` counts how many
    times the entry was dispensed by caption lookup or least-shown selection.
    """

    id: str = Field(..., min_length=1)
    media_url: str = Field(..., min_length=1)
    caption: str = ""
    appearances: int = Field(0, ge=0)

    @property
    def is_video(self) -> bool:
        """GroupMe image service URLs carry the ``.jpeg`` marker; anything else is video."""
        return ".jpeg" not in self.media_url
