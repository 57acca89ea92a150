"""Domain services owning the ledger, catalog and rotation state."""

from .picture_catalog import PictureCatalog, clean_caption
from .points_ledger import EarnSignal, PointsLedger
from .rotation_cache import RotationCache

__all__ = [
    "EarnSignal",
    "PictureCatalog",
    "PointsLedger",
    "RotationCache",
    "clean_caption",
]
