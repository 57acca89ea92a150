"""
Result models for ledger and catalog operations.

Persistence is best-effort: a failed write never undoes the in-memory
mutation, it is reported through ``WriteResult`` so callers and tests can
observe it without the core raising.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class WriteResult(BaseModel):
    """Outcome of a single write-through call to the persistent store."""

    ok: bool
    operation: str
    error: str | None = None
    attempted_at: datetime = Field(default_factory=datetime.utcnow)

    @classmethod
    def success(cls, operation: str) -> "WriteResult":
        return cls(ok=True, operation=operation)

    @classmethod
    def failure(cls, operation: str, error: Exception | str) -> "WriteResult":
        return cls(ok=False, operation=operation, error=str(error))


class TransferReceipt(BaseModel):
    """Balances after a successful transfer plus the write-through outcome."""

    from_id: str
    to_id: str
    amount: int
    from_balance: int
    to_balance: int
    write: WriteResult
