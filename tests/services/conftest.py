"""Service test fixtures: async DB, repositories, fake Slack, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB
    - db_manager patched for code that reaches it directly (readiness probe)
    - Slack client replaced by FakeSlack, which records reactions instead of calling Slack
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from statusbot.config import Settings, get_settings
from statusbot.core.errors import SlackAPIError
from statusbot.db.base import Base
from statusbot.infrastructure.database import get_db, DatabaseSessionManager
from statusbot.infrastructure.slack_client import get_slack_client
from statusbot.infrastructure.team_repository import SqlTeamRepository
from statusbot.infrastructure.user_repository import SqlUserRepository
import statusbot.infrastructure.database as db_module
import statusbot.models  # noqa: F401
from statusbot.main import app


class FakeSlack:
    """Records add_reaction calls; raises SlackAPIError when `fail` is set."""

    def __init__(self):
        self.reactions: list[dict] = []
        self.fail = False

    async def add_reaction(self, channel, timestamp, name="thumbsup"):
        if self.fail:
            raise SlackAPIError("channel_not_found", "api_error")
        self.reactions.append(
            {"channel": channel, "timestamp": timestamp, "name": name},
        )


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def teams(test_db):
    return SqlTeamRepository(test_db)


@pytest.fixture
def users(test_db):
    return SqlUserRepository(test_db)


@pytest.fixture
def fake_slack():
    return FakeSlack()


@pytest.fixture
def settings():
    """Settings seen by routes; tests may mutate fields before requests."""
    return Settings(
        slack_verification_token="verify-token",
        mention_prefix="@statusbot ",
        status_channel_id=None,
    )


@pytest.fixture
async def client(test_engine, test_session_factory, fake_slack, settings):
    """FastAPI test client with DB, Slack and settings dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_slack_client] = lambda: fake_slack
    app.dependency_overrides[get_settings] = lambda: settings

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
