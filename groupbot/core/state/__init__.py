"""Serialized ownership of the bot's mutable state."""

from .state_owner import StateOwner

__all__ = ["StateOwner"]
