"""Slack Schemas: Pydantic models for slash commands and Events API payloads.

Invariants:
    - SlashCommand requires only `text`; Slack's other form fields are optional
    - EventCallback keeps `event` as a raw dict; parse_event() types it, returning
      None for event types the bot does not handle
    - Unknown extra fields are ignored (Slack adds fields without notice)

Design Decisions:
    - Literal discriminators over str enums: Pydantic validates the tag natively
    - TypeAdapter over a discriminated field on EventCallback: an unsubscribed
      event type is "ignored", not "malformed"
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter


class SlashCommand(BaseModel):
    """Form body of a slash command (e.g. `/location team list`)."""
    text: str
    command: str | None = None
    user_id: str | None = None
    user_name: str | None = None
    team_id: str | None = None
    channel_id: str | None = None
    response_url: str | None = None
    trigger_id: str | None = None
    api_app_id: str | None = None
    token: str | None = None


class UrlVerification(BaseModel):
    """One-time registration handshake."""
    type: Literal["url_verification"]
    token: str | None = None
    challenge: str


class AppMentionEvent(BaseModel):
    """Somebody mentioned the bot (@statusbot ...)."""
    type: Literal["app_mention"]
    user: str
    text: str
    channel: str
    ts: str
    event_ts: str


class MessageEvent(BaseModel):
    """A message posted in a channel the bot is a member of."""
    type: Literal["message"]
    channel: str
    ts: str
    event_ts: str | None = None
    user: str | None = None
    text: str = ""
    channel_type: str | None = None
    subtype: str | None = None
    bot_id: str | None = None


SlackEvent = Annotated[
    Union[AppMentionEvent, MessageEvent], Field(discriminator="type"),
]
_event_adapter: TypeAdapter[SlackEvent] = TypeAdapter(SlackEvent)

HANDLED_EVENT_TYPES = frozenset({"app_mention", "message"})


class EventCallback(BaseModel):
    """Envelope wrapping every Events API delivery."""
    type: Literal["event_callback"]
    event: dict[str, Any]
    token: str | None = None
    team_id: str | None = None
    api_app_id: str | None = None
    event_id: str | None = None
    event_time: int | None = None
    authed_users: list[str] = Field(default_factory=list)


def parse_event(raw: dict[str, Any]) -> AppMentionEvent | MessageEvent | None:
    """Type the inner event. None if the type is not handled.

    Raises:
        ValidationError: a handled event type with a malformed body.
    """
    if raw.get("type") not in HANDLED_EVENT_TYPES:
        return None
    return _event_adapter.validate_python(raw)

