"""
Persistent store interface.

Defines the contract the ledger and the catalog depend on. The backing store
only needs key-value-with-list semantics: load-all, append-one,
update-one-by-id and replace-all over two collections.
"""

from abc import ABC, abstractmethod
from typing import Any


class IPersistentStore(ABC):
    """
    Durable backing store for the points and pictures collections.

    Documents are plain dictionaries shaped like ``PointsRecord`` and
    ``PictureEntry``. Write methods raise ``StoreWriteFailed`` on failure.
    """

    @abstractmethod
    async def load_points(self) -> list[dict[str, Any]]:
        """
        Load every points record.

        Returns:
            List of ``{"user_id", "points"}`` documents

        Raises:
            StoreWriteFailed: If the backing store cannot be reached
        """
        pass

    @abstractmethod
    async def replace_points(self, records: list[dict[str, Any]]) -> None:
        """
        Replace the whole points collection.

        Args:
            records: Full list of points documents

        Raises:
            StoreWriteFailed: If the write did not complete
        """
        pass

    @abstractmethod
    async def load_pictures(self) -> list[dict[str, Any]]:
        """
        Load every picture entry, each including its store-assigned ``id``.
        """
        pass

    @abstractmethod
    async def append_picture(self, entry: dict[str, Any]) -> str:
        """
        Append a picture entry and assign it an id.

        Args:
            entry: Picture document without ``id``

        Returns:
            The store-assigned id

        Raises:
            StoreWriteFailed: If the write did not complete
        """
        pass

    @abstractmethod
    async def update_picture(self, picture_id: str, entry: dict[str, Any]) -> None:
        """
        Overwrite a single picture entry by id.

        Raises:
            StoreWriteFailed: If the write did not complete
        """
        pass

    async def close(self) -> None:
        """Release connections held by the store (optional)."""
        pass
