"""Event Ingestor: turns Events API deliveries into status updates.

Invariants:
    - app_mention: invocation prefix stripped when present, status saved, then an
      Acknowledgement is returned for the caller to deliver after the write
    - message: text saved verbatim, never acknowledged (passive monitor)
    - Message subtypes (edits, deletions, bot posts) and user-less messages are ignored
    - With a configured status channel, messages from other channels are ignored
    - Storage failures are logged and reported as "not stored"; nothing is raised

Design Decisions:
    - The acknowledgement is a separate step (send_acknowledgement) so a Slack
      failure can never roll back or retry the status write
"""

import logging
from dataclasses import dataclass

from statusbot.core.errors import SlackAPIError, StatusBotError
from statusbot.core.mention import normalize_mention, strip_invocation_prefix
from statusbot.core.repository_protocols import UserRepository
from statusbot.infrastructure.slack_client import SlackClient
from statusbot.schemas.slack import AppMentionEvent, MessageEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Acknowledgement:
    """Reaction to post once a mention's status has been stored."""
    channel: str
    timestamp: str
    reaction: str


class EventIngestor:
    """Stores statuses reported through mentions and channel messages."""

    def __init__(
        self,
        users: UserRepository,
        mention_prefix: str,
        ack_reaction: str,
        status_channel_id: str | None = None,
    ):
        self._users = users
        self._mention_prefix = mention_prefix
        self._ack_reaction = ack_reaction
        self._status_channel_id = status_channel_id

    async def handle(
        self, event: AppMentionEvent | MessageEvent,
    ) -> Acknowledgement | None:
        if isinstance(event, AppMentionEvent):
            return await self.handle_mention(event)
        await self.handle_message(event)
        return None

    async def handle_mention(self, event: AppMentionEvent) -> Acknowledgement | None:
        status = strip_invocation_prefix(event.text, self._mention_prefix)
        if not await self._store(event.user, status, event.type):
            return None
        return Acknowledgement(
            channel=event.channel, timestamp=event.event_ts,
            reaction=self._ack_reaction,
        )

    async def handle_message(self, event: MessageEvent) -> bool:
        """Store a passive channel message as status. True if stored."""
        if event.subtype or event.bot_id or not event.user:
            logger.debug(
                f"Ignoring message (subtype={event.subtype})",
                extra={"event_type": event.type},
            )
            return False
        if self._status_channel_id and event.channel != self._status_channel_id:
            logger.debug(
                f"Ignoring message outside status channel: {event.channel}",
                extra={"event_type": event.type},
            )
            return False
        return await self._store(event.user, event.text, event.type)

    async def _store(self, user: str, status: str, event_type: str) -> bool:
        user_id = normalize_mention(user)
        try:
            await self._users.save_status(user_id, status)
        except StatusBotError as e:
            logger.error(
                f"Failed to store status: {e.message}",
                extra={
                    "user_id": user_id, "event_type": event_type,
                    "error_code": e.code,
                },
            )
            return False
        logger.info(
            "Status updated", extra={"user_id": user_id, "event_type": event_type},
        )
        return True


async def send_acknowledgement(slack: SlackClient, ack: Acknowledgement) -> None:
    """Best-effort reaction. Failures are logged, never raised."""
    try:
        await slack.add_reaction(ack.channel, ack.timestamp, ack.reaction)
    except SlackAPIError as e:
        logger.warning(
            f"Failed to acknowledge mention: {e.message}",
            extra={"error_code": e.code},
        )
