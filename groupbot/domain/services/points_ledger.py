"""
Points ledger service.

Owns the in-memory mirror of every member's point balance. The mirror is the
source of truth while the process runs; every mutation is written through to
the persistent store with replace-all semantics on a best-effort basis.

The ledger performs no locking of its own. Callers reach it through the
``StateOwner`` so read-modify-write-persist sequences never interleave.
"""

from collections.abc import Iterable
from enum import Enum
from typing import Protocol

from groupbot.core.logging.logger import get_logger
from groupbot.domain.errors import (
    InsufficientFunds,
    InvalidAmount,
    StoreWriteFailed,
    UserNotFound,
)
from groupbot.domain.interfaces.store_interface import IPersistentStore
from groupbot.domain.models import PointsRecord, TransferReceipt, WriteResult


class _MaybeMedia(Protocol):
    is_media: bool


class EarnSignal(int, Enum):
    """What the member did to earn points; the value is the award."""

    COMMAND_USED = 1
    TEXT_MESSAGE_SENT = 2
    MEDIA_ATTACHED = 3

    @property
    def points(self) -> int:
        return int(self.value)

    @classmethod
    def classify(
        cls, text: str, attachments: Iterable[_MaybeMedia], prefix: str = "/"
    ) -> "EarnSignal":
        """Pick the signal for an inbound message.

        A media attachment wins over everything else, then a prefixed message
        counts as a command, anything else is plain text.
        """
        if any(attachment.is_media for attachment in attachments):
            return cls.MEDIA_ATTACHED
        if text.startswith(prefix):
            return cls.COMMAND_USED
        return cls.TEXT_MESSAGE_SENT


class PointsLedger:
    """
    Authoritative mapping of user id to point balance.

    Invariants:
    - balances are never negative
    - a transfer updates both sides or neither
    - a failed write-through never rolls back the in-memory mutation
    """

    def __init__(self, store: IPersistentStore):
        self.store = store
        self._records: dict[str, PointsRecord] = {}
        self.logger = get_logger(__name__)

    def __len__(self) -> int:
        return len(self._records)

    async def load(self) -> int:
        """
        Replace the mirror with the store's points collection.

        Store errors propagate: starting with an empty mirror would overwrite
        the remote collection on the next write-through.

        Returns:
            Number of records loaded
        """
        documents = await self.store.load_points()
        records: dict[str, PointsRecord] = {}
        for document in documents:
            record = PointsRecord.model_validate(document)
            records[record.user_id] = record
        self._records = records
        self.logger.info(f"Loaded {len(records)} points records")
        return len(records)

    async def earn(self, user_id: str, signal: EarnSignal) -> WriteResult:
        """Award the points for ``signal``, creating the record on first sight."""
        record = self._records.get(user_id)
        if record is None:
            record = PointsRecord(user_id=user_id, points=0)
            self._records[user_id] = record
        record.points += signal.points
        self.logger.debug(
            f"{user_id} earned {signal.points} ({signal.name}), now {record.points}"
        )
        return await self._write_through("earn")

    def balance(self, user_id: str) -> int:
        record = self._records.get(user_id)
        if record is None:
            raise UserNotFound(user_id)
        return record.points

    async def transfer(self, from_id: str, to_id: str, amount: int) -> TransferReceipt:
        """
        Move ``amount`` points from one member to another.

        Raises:
            InvalidAmount: amount is negative
            UserNotFound: the sender has never earned points
            InsufficientFunds: the sender's balance would go negative

        Rejected transfers leave both balances untouched.
        """
        if amount < 0:
            raise InvalidAmount(amount)

        sender = self._records.get(from_id)
        if sender is None:
            raise UserNotFound(from_id)
        if sender.points - amount < 0:
            raise InsufficientFunds(from_id, sender.points, amount)

        recipient = self._records.get(to_id)
        if recipient is None:
            recipient = PointsRecord(user_id=to_id, points=0)
            self._records[to_id] = recipient

        # Self-transfer debits and credits the same record
        sender.points -= amount
        recipient.points += amount
        self.logger.info(f"Transferred {amount} points from {from_id} to {to_id}")

        write = await self._write_through("transfer")
        return TransferReceipt(
            from_id=from_id,
            to_id=to_id,
            amount=amount,
            from_balance=sender.points,
            to_balance=recipient.points,
            write=write,
        )

    def standings(self) -> list[PointsRecord]:
        """All records, highest balance first."""
        ordered = sorted(self._records.values(), key=lambda r: r.points, reverse=True)
        return [record.model_copy() for record in ordered]

    def snapshot(self) -> dict[str, int]:
        return {user_id: r.points for user_id, r in self._records.items()}

    async def _write_through(self, operation: str) -> WriteResult:
        documents = [record.model_dump() for record in self._records.values()]
        try:
            await self.store.replace_points(documents)
        except StoreWriteFailed as e:
            # Mirror stays authoritative until the next successful write
            self.logger.error(f"Points write-through failed during {operation}: {e}")
            return WriteResult.failure(operation, e)
        return WriteResult.success(operation)
