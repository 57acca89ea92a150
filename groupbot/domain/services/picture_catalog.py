"""
Picture catalog service.

Owns the in-memory mirror of submitted media. Supports captioned lookup,
submission and least-shown selection, and keeps the ``appearances`` counter
of each entry: it goes up by exactly one per successful dispense.

Like the ledger, the catalog does no locking itself and is reached through
the ``StateOwner``.
"""

import random
import re

from groupbot.core.logging.logger import get_logger
from groupbot.domain.errors import PictureNotFound, StoreWriteFailed
from groupbot.domain.interfaces.store_interface import IPersistentStore
from groupbot.domain.models import PictureEntry, WriteResult

URL_PATTERN = re.compile(r"https?://\S+")


def clean_caption(caption: str) -> str:
    """Strip embedded links and surrounding whitespace from a caption."""
    return " ".join(URL_PATTERN.sub("", caption).split())


class PictureCatalog:
    """Authoritative collection of captioned media entries."""

    def __init__(self, store: IPersistentStore, rng: random.Random | None = None):
        self.store = store
        self._rng = rng or random.Random()
        self._entries: dict[str, PictureEntry] = {}
        self.last_write: WriteResult | None = None
        self.logger = get_logger(__name__)

    def __len__(self) -> int:
        return len(self._entries)

    async def load(self) -> int:
        """
        Replace the mirror with the store's pictures collection.

        Returns:
            Number of entries loaded
        """
        documents = await self.store.load_pictures()
        entries: dict[str, PictureEntry] = {}
        for document in documents:
            entry = PictureEntry.model_validate(document)
            entries[entry.id] = entry
        self._entries = entries
        self.logger.info(f"Loaded {len(entries)} pictures")
        return len(entries)

    async def submit(self, media_url: str | None, caption: str) -> PictureEntry | None:
        """
        Add a new picture with ``appearances = 0``.

        The entry is appended to the store and the mirror is then reloaded so
        the returned entry carries the store-assigned id.

        Returns:
            The stored entry, or None when there is no media to store or the
            append failed
        """
        if not media_url:
            return None

        document = {
            "media_url": media_url,
            "caption": clean_caption(caption),
            "appearances": 0,
        }
        try:
            picture_id = await self.store.append_picture(document)
        except StoreWriteFailed as e:
            self.logger.error(f"Picture submission failed: {e}")
            self.last_write = WriteResult.failure("submit", e)
            return None

        self.last_write = WriteResult.success("submit")
        try:
            await self.load()
        except (StoreWriteFailed, OSError, ValueError) as e:
            # Appended but not re-read; mirror the document as stored
            self.logger.error(f"Reload after submitting {picture_id} failed: {e}")
            self.last_write = WriteResult.failure("submit", e)
            entry = PictureEntry(id=picture_id, **document)
            self._entries[picture_id] = entry
            return entry.model_copy()

        entry = self._entries.get(picture_id)
        if entry is None:
            self.logger.warning(f"Submitted picture {picture_id} missing after reload")
            return None
        self.logger.info(f"Picture submitted: '{entry.caption}' ({picture_id})")
        return entry.model_copy()

    async def find_by_caption(self, caption: str) -> PictureEntry:
        """
        Look up a picture by exact caption, ignoring case.

        On a hit the entry's ``appearances`` goes up by one and the entry is
        persisted. The returned copy is taken before the increment.

        Raises:
            PictureNotFound: No caption matches the query
        """
        query = caption.strip().casefold()
        entry = next(
            (e for e in self._entries.values() if e.caption.casefold() == query),
            None,
        )
        if entry is None:
            raise PictureNotFound(caption)

        shown = entry.model_copy()
        await self._record_appearance(entry, "find_by_caption")
        return shown

    async def select_least_shown(self) -> PictureEntry | None:
        """
        Pick uniformly at random among the entries tied at the minimum
        ``appearances`` and count the appearance.

        Returns:
            A copy of the chosen entry (before the increment), or None when the
            catalog is empty
        """
        if not self._entries:
            return None

        fewest = min(e.appearances for e in self._entries.values())
        candidates = [e for e in self._entries.values() if e.appearances == fewest]
        entry = self._rng.choice(candidates)

        shown = entry.model_copy()
        await self._record_appearance(entry, "select_least_shown")
        return shown

    def list_captions_sorted(self) -> list[str]:
        captions = [e.caption for e in self._entries.values()]
        return sorted(captions, key=lambda c: (c.casefold(), c))

    def top_by_appearances(self, n: int = 10) -> list[PictureEntry]:
        shown = [e for e in self._entries.values() if e.appearances > 0]
        shown.sort(key=lambda e: e.appearances, reverse=True)
        return [e.model_copy() for e in shown[: max(n, 0)]]

    def snapshot(self) -> list[PictureEntry]:
        """Independent copies of every entry, in catalog order."""
        return [e.model_copy() for e in self._entries.values()]

    def get(self, picture_id: str) -> PictureEntry | None:
        entry = self._entries.get(picture_id)
        return entry.model_copy() if entry else None

    async def _record_appearance(self, entry: PictureEntry, operation: str) -> None:
        entry.appearances += 1
        try:
            await self.store.update_picture(
                entry.id, entry.model_dump(exclude={"id"})
            )
        except StoreWriteFailed as e:
            self.logger.error(f"Appearance write-through failed for {entry.id}: {e}")
            self.last_write = WriteResult.failure(operation, e)
            return
        self.last_write = WriteResult.success(operation)
