"""Response Blocks: pure builders for the Slack Block Kit reply of `/location`.

Invariants:
    - Only three block shapes are produced: header, divider, mrkdwn section
    - Block order is the user-visible message order
    - status_line() is the single formatter for a user's status, used by both
      single-user and whole-team views
"""

from statusbot.core.domain_types import BlockType, TextType, UserRecord
from statusbot.core.mention import format_mention

Block = dict

BULLET = "•"
INVALID_COMMAND_HEADER = "Invalid command"
TEAMS_HEADER = "Teams"


def header(text: str) -> Block:
    return {
        "type": BlockType.HEADER.value,
        "text": {"type": TextType.PLAIN_TEXT.value, "text": text},
    }


def divider() -> Block:
    return {"type": BlockType.DIVIDER.value}


def section(text: str) -> Block:
    return {
        "type": BlockType.SECTION.value,
        "text": {"type": TextType.MRKDWN.value, "text": text},
    }


def status_line(user: UserRecord) -> str:
    """Format "<@id>: status", or the never-reported variant."""
    if user.status is None:
        return f"{format_mention(user.id)} has not set a status"
    return f"{format_mention(user.id)}: {user.status}"


def user_not_found_line(user_id: str) -> str:
    return f"{format_mention(user_id)} not found"


def team_status_header(team_name: str) -> str:
    return f"{team_name} Status"


def bullet(text: str) -> str:
    return f"{BULLET} {text}"


def titled(title: str, lines: list[str]) -> list[Block]:
    """Header + divider + one section per line (zero lines is valid)."""
    return [header(title), divider(), *(section(line) for line in lines)]


def message(text: str) -> list[Block]:
    return [section(text)]


def to_payload(blocks: list[Block]) -> dict:
    """Wrap blocks in the slash-command response envelope."""
    return {"blocks": blocks}
