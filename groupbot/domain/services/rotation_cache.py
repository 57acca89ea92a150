"""
Rotation cache: a shuffled, draining queue over catalog snapshots.

Guarantees that no entry is dispensed twice before every entry of the cycle
has been dispensed once. When the queue runs dry a fresh snapshot of the
catalog is shuffled in. Dispensing here does not touch the catalog's
``appearances`` counters; the two selection flows are independent.
"""

import random
from collections import deque

from groupbot.core.logging.logger import get_logger
from groupbot.domain.models import PictureEntry
from groupbot.domain.services.picture_catalog import PictureCatalog


class RotationCache:
    def __init__(self, catalog: PictureCatalog, rng: random.Random | None = None):
        self.catalog = catalog
        self._rng = rng or random.Random()
        self._queue: deque[PictureEntry] = deque()
        self.cycles = 0
        self.logger = get_logger(__name__)

    @property
    def pending(self) -> int:
        """Entries left in the current cycle."""
        return len(self._queue)

    def next(self) -> PictureEntry | None:
        """Dispense the next entry, reshuffling when the cycle is exhausted.

        Returns None only when the catalog is empty.
        """
        if not self._queue:
            self._refill()
        if not self._queue:
            return None
        return self._queue.popleft()

    def _refill(self) -> None:
        entries = self.catalog.snapshot()
        # Fisher-Yates; every permutation equally likely
        self._rng.shuffle(entries)
        self._queue.extend(entries)
        if entries:
            self.cycles += 1
            self.logger.debug(f"Rotation cycle {self.cycles} with {len(entries)} entries")
