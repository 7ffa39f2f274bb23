"""StatusBot API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map StatusBotError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and Slack client initialized on startup via lifespan context manager
    - A database that cannot be reached at startup aborts the process
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from statusbot.api.error_handlers import register_error_handlers
from statusbot.api.routes import command, health, webhook
from statusbot.config import get_settings
from statusbot.infrastructure.database import init_db
from statusbot.infrastructure.observability import setup_logging
from statusbot.infrastructure.slack_client import init_slack

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Starting StatusBot host={settings.host}, port={settings.port}")

    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if not settings.skip_migrations:
        await manager.create_schema()
    slack = init_slack(
        settings.slack_bot_token,
        base_url=settings.slack_api_base_url,
        timeout_seconds=settings.slack_timeout_seconds,
    )
    logger.info("StatusBot API started")
    yield
    logger.info("StatusBot API shutting down")
    await slack.aclose()
    await manager.dispose()


app = FastAPI(title="StatusBot API", version="0.1.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    allow_credentials=False,
)

app.include_router(health.router)
app.include_router(webhook.router)
app.include_router(command.router)

register_error_handlers(app)
