"""Tests for mention assembly and the text transforms."""

import random

from groupbot.commands import transforms
from groupbot.commands.mentions import build_mentions, members_with_tag
from groupbot.messaging.models import GroupMember


def test_mention_ranges_cover_each_token(members):
    text, attachment = build_mentions(members)

    assert text == "@Alice @[RED] Bob @Carol [red] @Dave"
    assert attachment.user_ids == ["u1", "u2", "u3", "u4"]
    tagged = [text[start:end] for start, end in attachment.ranges]
    assert tagged == ["@Alice", "@[RED] Bob", "@Carol [red]", "@Dave"]


def test_mention_wire_format_uses_offset_and_length():
    _, attachment = build_mentions(
        [GroupMember(user_id="1", nickname="ab"), GroupMember(user_id="2", nickname="c")]
    )
    assert attachment.to_groupme() == {
        "type": "mentions",
        "user_ids": ["1", "2"],
        "loci": [[0, 3], [4, 2]],
    }


def test_members_with_tag(members):
    assert [m.user_id for m in members_with_tag(members, "red")] == ["u2", "u3"]
    assert [m.user_id for m in members_with_tag(members, "RED")] == ["u2", "u3"]
    assert members_with_tag(members, "blue") == []
    assert len(members_with_tag(members, "all")) == 4


def test_shout():
    assert transforms.shout("hey there") == "HEY THERE"


def test_mock_keeps_letters():
    result = transforms.mock("Hello World", random.Random(0))
    assert result.lower() == "hello world"


def test_uwu():
    result = transforms.uwu("Really no more", random.Random(0))
    body = "Weawwy nyo myowe"

    assert result.startswith(body)
    assert result[len(body):] in transforms.UWU_FACES
