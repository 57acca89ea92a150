"""Domain models for groupbot."""

from .records import PictureEntry, PointsRecord
from .results import TransferReceipt, WriteResult

__all__ = ["PictureEntry", "PointsRecord", "TransferReceipt", "WriteResult"]
