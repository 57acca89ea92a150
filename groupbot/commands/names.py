"""The closed set of commands the bot understands."""

from enum import Enum


class CommandName(str, Enum):
    # Economy
    BAL = "bal"
    PAY = "pay"
    LEADERBOARD = "leaderboard"

    # Pictures
    PIC = "pic"
    SUBMIT = "submit"
    LISTPICS = "listpics"
    PICSLIST = "picslist"
    TOPPICS = "toppics"
    SHUFFLE = "shuffle"

    # Group
    MENTION = "mention"
    SELECT = "select"

    # Text and fun
    COMMANDS = "commands"
    PING = "ping"
    SAY = "say"
    SHRUG = "shrug"
    POG = "pog"
    SHOUT = "shout"
    SHOUTPREV = "shoutprev"
    MOCK = "mock"
    MOCKPREV = "mockprev"
    UWU = "uwu"
    UWUPREV = "uwuprev"
    JOKE = "joke"
    WIKI = "wiki"

    # Anything unrecognised
    NOOP = "noop"

    @classmethod
    def resolve(cls, name: str) -> "CommandName":
        """Map a parsed command name to its variant; unknown names become NOOP."""
        try:
            return cls(name.casefold())
        except ValueError:
            return cls.NOOP

    @classmethod
    def public(cls) -> list["CommandName"]:
        """Every variant a user can invoke, alphabetically."""
        return sorted((c for c in cls if c is not cls.NOOP), key=lambda c: c.value)
