"""Command text parsing."""

from typing import NamedTuple


class Command(NamedTuple):
    """A parsed command: case-folded name plus whitespace-split arguments."""

    name: str
    args: tuple[str, ...] = ()

    @property
    def text(self) -> str:
        """Arguments joined back into free text."""
        return " ".join(self.args)


def parse_command(text: str | None, prefix: str = "/") -> Command | None:
    """
    Parse ``text`` as a command.

    A message is a command iff its first character is ``prefix`` and a name
    follows it directly. The rest is split on whitespace.

    >>> parse_command("/Pay @bob 5")
    Command(name='pay', args=('@bob', '5'))
    >>> parse_command("hello") is None
    True
    """
    if not text or len(text) < 2 or text[0] != prefix:
        return None
    parts = text[1:].split()
    if not parts:
        return None
    name, *args = parts
    return Command(name=name.casefold(), args=tuple(args))
