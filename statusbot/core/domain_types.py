"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - UserId is always a bare platform id (never a "<@U123|name>" mention token)
    - TeamName is the user-chosen lookup key, used verbatim
    - All valid wire discriminators encoded as Enums (no raw string matching)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (Slack blocks are JSON)
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
TeamName = NewType("TeamName", str)


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class UserRecord:
    """A user and the last status they reported (None = never reported)."""
    id: UserId
    status: str | None = None


@dataclass(frozen=True)
class TeamRecord:
    """A team as seen by the core: surrogate key plus unique name."""
    id: int
    name: TeamName


# ─── Enums ───────────────────────────────────────────────────────

class BlockType(str, Enum):
    """Slack Block Kit block types produced by the bot."""
    HEADER = "header"
    DIVIDER = "divider"
    SECTION = "section"


class TextType(str, Enum):
    """Slack text object types."""
    PLAIN_TEXT = "plain_text"
    MRKDWN = "mrkdwn"


class CallbackType(str, Enum):
    """Top-level `type` discriminator of POST / bodies."""
    URL_VERIFICATION = "url_verification"
    EVENT_CALLBACK = "event_callback"


class EventType(str, Enum):
    """Inner event types the bot subscribes to."""
    APP_MENTION = "app_mention"
    MESSAGE = "message"
