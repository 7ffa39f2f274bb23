"""Slack Web API Client: thin async wrapper over httpx with error mapping.

Invariants:
    - Every call carries the bot token as a Bearer Authorization header
    - Transport errors, timeouts, non-2xx replies and {"ok": false} bodies all
      raise SlackAPIError (core/errors.py); nothing else escapes
    - A 2xx body that is not a JSON object is a decode error
    - No retries: callers of best-effort calls log the failure and move on

Design Decisions:
    - Slack answers most API errors with HTTP 200 and {"ok": false, "error": ...},
      so the body is checked as well as the status code
    - Injectable httpx transport for tests (httpx.MockTransport)
"""

import logging

import httpx

from statusbot.core.errors import ErrorContext, SlackAPIError

logger = logging.getLogger(__name__)


class SlackClient:
    """Minimal Slack Web API client for the calls the bot makes."""

    def __init__(
        self,
        bot_token: str,
        base_url: str = "https://slack.com/api",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/",
            timeout=timeout_seconds,
            headers={"Authorization": f"Bearer {bot_token}"},
            transport=transport,
        )

    async def add_reaction(
        self, channel: str, timestamp: str, name: str = "thumbsup",
    ) -> None:
        """Add an emoji reaction to the message at `timestamp` in `channel`."""
        await self._call(
            "reactions.add",
            {"channel": channel, "name": name, "timestamp": timestamp},
        )

    async def _call(self, method: str, payload: dict) -> dict:
        context = ErrorContext(debug_info={"method": method})
        try:
            response = await self.client.post(method, json=payload)
        except httpx.TimeoutException:
            raise SlackAPIError(f"{method} timed out", "timeout", context=context)
        except httpx.HTTPError as e:
            raise SlackAPIError(str(e), "connection", context=context)

        if response.is_error:
            raise SlackAPIError(
                f"{method} returned HTTP {response.status_code}",
                "http_status", context=context,
            )
        try:
            body = response.json()
        except ValueError:
            raise SlackAPIError(f"{method} returned invalid JSON", "decode", context=context)
        if not isinstance(body, dict):
            raise SlackAPIError(f"{method} returned a non-object body", "decode", context=context)
        if not body.get("ok", False):
            raise SlackAPIError(
                f"{method} rejected: {body.get('error', 'unknown_error')}",
                "api_error", context=context,
            )
        logger.debug(f"Slack {method} succeeded")
        return body

    async def aclose(self) -> None:
        await self.client.aclose()


# Singleton (initialized on startup)
slack_client: SlackClient | None = None


def init_slack(bot_token: str, **kwargs) -> SlackClient:
    global slack_client
    slack_client = SlackClient(bot_token, **kwargs)
    return slack_client


def get_slack_client() -> SlackClient:
    """FastAPI dependency for the Slack client."""
    if not slack_client:
        raise RuntimeError("Slack client not initialized")
    return slack_client
