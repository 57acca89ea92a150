"""Assemble mention messages and their character ranges."""

from groupbot.messaging.models import GroupMember, MentionAttachment


def build_mentions(
    members: list[GroupMember], separator: str = " "
) -> tuple[str, MentionAttachment]:
    """
    Tag ``members`` as ``@nickname`` tokens joined by ``separator``.

    Ranges are computed by walking the assembled text, so each
    ``text[start:end]`` is exactly the ``@nickname`` of the matching user id.
    """
    tokens = [f"@{m.nickname}" for m in members]
    ranges: list[tuple[int, int]] = []
    offset = 0
    for i, token in enumerate(tokens):
        if i:
            offset += len(separator)
        ranges.append((offset, offset + len(token)))
        offset += len(token)
    attachment = MentionAttachment(
        user_ids=[m.user_id for m in members],
        ranges=ranges,
    )
    return separator.join(tokens), attachment


def members_with_tag(members: list[GroupMember], tag: str) -> list[GroupMember]:
    """Members whose nickname carries ``[tag]``, ignoring case; "all" matches everyone."""
    tag = tag.casefold()
    if tag == "all":
        return list(members)
    marker = f"[{tag}]"
    return [m for m in members if marker in m.nickname.casefold()]
