"""Webhook Route: POST / dispatches on the body's `type` field.

Invariants:
    - url_verification -> registration handshake (challenge echo)
    - event_callback -> Event Ingestor; mention acknowledgements run as background
      tasks after the status write
    - Unknown types, undecodable bodies and malformed or unhandled events -> bare 200,
      so Slack never sees the bot as failing
    - A handshake with a wrong verification token is the only non-200 reply
"""

import json
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from statusbot.config import Settings, get_settings
from statusbot.core.domain_types import CallbackType
from statusbot.core.errors import WebhookVerificationError
from statusbot.infrastructure.database import get_db
from statusbot.infrastructure.slack_client import SlackClient, get_slack_client
from statusbot.infrastructure.user_repository import SqlUserRepository
from statusbot.schemas.slack import EventCallback, UrlVerification, parse_event
from statusbot.services.handle_event import EventIngestor, send_acknowledgement

logger = logging.getLogger(__name__)
router = APIRouter(tags=["slack"])


def _ok() -> Response:
    return Response(status_code=status.HTTP_200_OK)


@router.post("/")
async def handle_post(
    request: Request,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    slack: SlackClient = Depends(get_slack_client),
    settings: Settings = Depends(get_settings),
):
    """Entry point for every Events API delivery."""
    try:
        payload = json.loads(await request.body())
    except ValueError as e:
        logger.error(f"Undecodable webhook body: {e}", extra={"path": request.url.path})
        return _ok()
    if not isinstance(payload, dict):
        return _ok()

    callback_type = payload.get("type")
    if callback_type == CallbackType.URL_VERIFICATION.value:
        return url_verification(payload, settings)
    if callback_type == CallbackType.EVENT_CALLBACK.value:
        return await event_callback(payload, db, slack, settings, background_tasks)

    logger.debug(f"Ignoring webhook type: {callback_type}")
    return _ok()


def url_verification(payload: dict, settings: Settings):
    """Answer Slack's one-time registration challenge."""
    try:
        form = UrlVerification.model_validate(payload)
    except ValidationError as e:
        logger.error(f"Malformed url_verification: {e}")
        return _ok()

    expected = settings.slack_verification_token
    if expected and form.token != expected:
        raise WebhookVerificationError()
    return {"challenge": form.challenge}


async def event_callback(
    payload: dict,
    db: AsyncSession,
    slack: SlackClient,
    settings: Settings,
    background_tasks: BackgroundTasks,
) -> Response:
    try:
        envelope = EventCallback.model_validate(payload)
        event = parse_event(envelope.event)
    except ValidationError as e:
        logger.error(f"Callback parse error: {e}")
        return _ok()

    if event is None:
        logger.debug(
            "Ignoring unhandled event",
            extra={"event_type": envelope.event.get("type")},
        )
        return _ok()

    ingestor = EventIngestor(
        SqlUserRepository(db),
        mention_prefix=settings.mention_prefix,
        ack_reaction=settings.ack_reaction,
        status_channel_id=settings.status_channel_id,
    )
    ack = await ingestor.handle(event)
    if ack is not None:
        background_tasks.add_task(send_acknowledgement, slack, ack)
    return _ok()
