"""Tests for the points ledger: earning, balances and transfers."""

import pytest

from groupbot.domain.errors import (
    InsufficientFunds,
    InvalidAmount,
    StoreWriteFailed,
    UserNotFound,
)
from groupbot.domain.services import EarnSignal, PointsLedger
from groupbot.persistence.memory import MemoryStore
from groupbot.schemas.callback import InboundAttachment


class FailingPointsStore(MemoryStore):
    async def replace_points(self, records):
        raise StoreWriteFailed("replace_points", "store offline")


async def _ledger(points: dict[str, int], store_cls=MemoryStore) -> PointsLedger:
    store = store_cls(points=[{"user_id": u, "points": p} for u, p in points.items()])
    ledger = PointsLedger(store)
    await ledger.load()
    return ledger


class TestEarnSignal:
    def test_media_wins_over_command(self):
        attachments = [InboundAttachment(type="image", url="https://i.groupme.com/x.jpeg")]
        assert EarnSignal.classify("/pic", attachments) is EarnSignal.MEDIA_ATTACHED

    def test_prefixed_text_is_command(self):
        assert EarnSignal.classify("/bal", []) is EarnSignal.COMMAND_USED

    def test_plain_text(self):
        assert EarnSignal.classify("hello", []) is EarnSignal.TEXT_MESSAGE_SENT

    def test_mention_is_not_media(self):
        attachments = [InboundAttachment(type="mentions", user_ids=["1"], loci=[[0, 4]])]
        assert EarnSignal.classify("@bob", attachments) is EarnSignal.TEXT_MESSAGE_SENT

    def test_award_values(self):
        assert [s.points for s in EarnSignal] == [1, 2, 3]


class TestEarn:
    @pytest.mark.asyncio
    async def test_creates_record_lazily(self):
        ledger = await _ledger({})
        result = await ledger.earn("new", EarnSignal.MEDIA_ATTACHED)

        assert result.ok
        assert ledger.balance("new") == 3

    @pytest.mark.asyncio
    async def test_writes_through_all_records(self):
        ledger = await _ledger({"u1": 5})
        await ledger.earn("u2", EarnSignal.TEXT_MESSAGE_SENT)

        stored = {d["user_id"]: d["points"] for d in await ledger.store.load_points()}
        assert stored == {"u1": 5, "u2": 2}

    @pytest.mark.asyncio
    async def test_write_failure_keeps_mutation(self):
        ledger = await _ledger({"u1": 5}, FailingPointsStore)
        result = await ledger.earn("u1", EarnSignal.COMMAND_USED)

        assert not result.ok
        assert result.operation == "earn"
        assert "store offline" in result.error
        assert ledger.balance("u1") == 6


class TestBalance:
    @pytest.mark.asyncio
    async def test_unknown_user(self):
        ledger = await _ledger({"u1": 5})
        with pytest.raises(UserNotFound):
            ledger.balance("nobody")


class TestTransfer:
    @pytest.mark.asyncio
    async def test_scenario_valid_transfer(self):
        ledger = await _ledger({"u1": 5})
        receipt = await ledger.transfer("u1", "u2", 3)

        assert ledger.snapshot() == {"u1": 2, "u2": 3}
        assert receipt.from_balance == 2
        assert receipt.to_balance == 3
        assert receipt.write.ok

    @pytest.mark.asyncio
    async def test_scenario_insufficient_funds(self):
        ledger = await _ledger({"u1": 5})
        with pytest.raises(InsufficientFunds):
            await ledger.transfer("u1", "u2", 10)

        assert ledger.snapshot() == {"u1": 5}

    @pytest.mark.asyncio
    async def test_entire_balance_can_be_sent(self):
        ledger = await _ledger({"u1": 5, "u2": 1})
        await ledger.transfer("u1", "u2", 5)

        assert ledger.snapshot() == {"u1": 0, "u2": 6}

    @pytest.mark.asyncio
    async def test_negative_amount_rejected(self):
        ledger = await _ledger({"u1": 5, "u2": 1})
        with pytest.raises(InvalidAmount):
            await ledger.transfer("u1", "u2", -1)

        assert ledger.snapshot() == {"u1": 5, "u2": 1}

    @pytest.mark.asyncio
    async def test_sender_without_record(self):
        ledger = await _ledger({"u2": 1})
        with pytest.raises(UserNotFound):
            await ledger.transfer("u1", "u2", 0)

        assert ledger.snapshot() == {"u2": 1}

    @pytest.mark.asyncio
    async def test_self_transfer_keeps_balance(self):
        ledger = await _ledger({"u1": 5})
        await ledger.transfer("u1", "u1", 4)

        assert ledger.balance("u1") == 5

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", [0, 1, 4, 7])
    async def test_sum_is_conserved(self, amount):
        ledger = await _ledger({"u1": 7, "u2": 3})
        before = ledger.balance("u1") + ledger.balance("u2")
        await ledger.transfer("u1", "u2", amount)

        assert ledger.balance("u1") + ledger.balance("u2") == before
        assert ledger.balance("u1") >= 0

    @pytest.mark.asyncio
    async def test_failed_write_is_reported(self):
        ledger = await _ledger({"u1": 5}, FailingPointsStore)
        receipt = await ledger.transfer("u1", "u2", 2)

        assert not receipt.write.ok
        assert ledger.snapshot() == {"u1": 3, "u2": 2}


@pytest.mark.asyncio
async def test_standings_highest_first():
    ledger = await _ledger({"a": 1, "b": 9, "c": 4})
    assert [r.user_id for r in ledger.standings()] == ["b", "c", "a"]
