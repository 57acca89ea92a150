"""
Callback context management using contextvars for automatic propagation.

The intake sets the group and sender once per callback; every logger created
while that callback is being processed picks them up without parameter passing.
"""

from contextvars import ContextVar

_group_context: ContextVar[str | None] = ContextVar(
    "group_id", default=None
)  # From callback JSON
_user_context: ContextVar[str | None] = ContextVar(
    "user_id", default=None
)  # From callback JSON


def set_request_context(
    group_id: str | None = None,
    user_id: str | None = None,
) -> None:
    """
    Set the callback context for the current async context.

    Args:
        group_id: GroupMe group the callback originated from
        user_id: GroupMe user id of the sender
    """
    if group_id is not None:
        _group_context.set(group_id)
    if user_id is not None:
        _user_context.set(user_id)


def get_current_group_context() -> str | None:
    """Get the current group ID from context variables."""
    return _group_context.get()


def get_current_user_context() -> str | None:
    """Get the current user ID from context variables."""
    return _user_context.get()


def get_context_info() -> dict[str, str | None]:
    """Get current context information for debugging."""
    return {
        "group_id": get_current_group_context(),
        "user_id": get_current_user_context(),
    }
