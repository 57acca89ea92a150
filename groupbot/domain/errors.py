"""
Error taxonomy for the engagement ledger and the media catalog.

Ledger and catalog errors are caught by the command handlers and turned into
user-facing replies. ``StoreWriteFailed`` is raised by store adapters and is
converted into a failed ``WriteResult`` by the services, never surfaced.
"""


class GroupBotError(Exception):
    """Base class for all groupbot domain errors."""


class UserNotFound(GroupBotError):
    """No points record exists for the user."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"No points record for user {user_id}")


class InvalidAmount(GroupBotError):
    """Transfer amount is negative."""

    def __init__(self, amount: int):
        self.amount = amount
        super().__init__(f"Invalid transfer amount: {amount}")


class InsufficientFunds(GroupBotError):
    """Sender balance would go negative."""

    def __init__(self, user_id: str, balance: int, amount: int):
        self.user_id = user_id
        self.balance = balance
        self.amount = amount
        super().__init__(
            f"User {user_id} has {balance} points, cannot transfer {amount}"
        )


class PictureNotFound(GroupBotError):
    """No catalog entry matches the requested caption."""

    def __init__(self, caption: str):
        self.caption = caption
        super().__init__(f"No picture with caption '{caption}'")


class StoreWriteFailed(GroupBotError):
    """A persistence call failed; the in-memory mirror stays authoritative."""

    def __init__(self, operation: str, cause: Exception | str | None = None):
        self.operation = operation
        self.cause = cause
        message = f"Store write failed during {operation}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
