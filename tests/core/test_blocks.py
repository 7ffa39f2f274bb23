"""Response Blocks: tests for Block Kit shapes and status formatting."""

from statusbot.core import blocks
from statusbot.core.domain_types import UserId, UserRecord


def test_block_shapes():
    assert blocks.header("Eng Status") == {
        "type": "header", "text": {"type": "plain_text", "text": "Eng Status"},
    }
    assert blocks.divider() == {"type": "divider"}
    assert blocks.section("hi") == {
        "type": "section", "text": {"type": "mrkdwn", "text": "hi"},
    }


def test_status_line_with_status():
    user = UserRecord(id=UserId("U1"), status="telework")
    assert blocks.status_line(user) == "<@U1>: telework"


def test_status_line_without_status_differs_from_not_found():
    user = UserRecord(id=UserId("U1"))
    assert blocks.status_line(user) == "<@U1> has not set a status"
    assert blocks.user_not_found_line("U1") == "<@U1> not found"


def test_titled_with_no_lines_is_header_and_divider():
    result = blocks.titled("Eng Status", [])
    assert [b["type"] for b in result] == ["header", "divider"]


def test_titled_preserves_line_order():
    result = blocks.titled("Teams", ["• A", "• B"])
    assert [b["text"]["text"] for b in result[2:]] == ["• A", "• B"]


def test_payload_envelope():
    assert blocks.to_payload([blocks.divider()]) == {"blocks": [{"type": "divider"}]}
