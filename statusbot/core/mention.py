"""Mention and Status Text: pure helpers for Slack user references and status text.

Invariants:
    - normalize_mention is idempotent: a bare id is returned unchanged
    - "<@U123|bob>", "<@U123>", "@U123" and "U123" all normalize to "U123"
    - strip_invocation_prefix never returns None; text without the prefix is kept verbatim
"""

from statusbot.core.domain_types import UserId

_MENTION_MARKUP = "<>@"
_DISPLAY_NAME_SEPARATOR = "|"


def normalize_mention(token: str) -> UserId:
    """Recover the bare user id from a Slack mention token."""
    bare = token.strip(_MENTION_MARKUP)
    return UserId(bare.split(_DISPLAY_NAME_SEPARATOR, 1)[0])


def format_mention(user_id: str) -> str:
    """Render a user id as Slack mention markup."""
    return f"<@{user_id}>"


def strip_invocation_prefix(text: str, prefix: str) -> str:
    """Drop the bot's invocation prefix (e.g. "@statusbot ") when present."""
    if prefix and text.startswith(prefix):
        return text[len(prefix):]
    return text
