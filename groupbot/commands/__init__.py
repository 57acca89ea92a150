"""
Command parsing and dispatch.
"""

from .context import BotServices, CommandContext, MessageHistory
from .dispatcher import CommandDispatcher
from .names import CommandName
from .parser import Command, parse_command

__all__ = [
    "BotServices",
    "Command",
    "CommandContext",
    "CommandDispatcher",
    "CommandName",
    "MessageHistory",
    "parse_command",
]
