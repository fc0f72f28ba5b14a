import os
import tempfile
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Settings are read at import time: keep logs out of the repo and auth off by default
os.environ["ADMIN_LOG_FILE"] = os.path.join(tempfile.gettempdir(), "nutrition_admin_tests", "admin.log")
os.environ["BOT_TOKEN"] = ""

from nutrition_admin.backend.db import Base, UserNutrition  # noqa: E402

TEST_BOT_TOKEN = "7000000000:TEST_TOKEN_for_init_data"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def make_user(chat_id: int, **overrides) -> UserNutrition:
    """User row with sensible defaults; any column can be overridden."""
    data = dict(
        chat_id=chat_id,
        username=f"user{chat_id}",
        first_name=f"Name{chat_id}",
        sex="male",
        age=25,
        weight=70.0,
        height=175.0,
        activity_level="moderate",
        goal="weight_loss",
        allergies=None,
        excluded_foods=None,
        calories=2000,
        protein=150,
        fats=60,
        carbs=200,
        funnel_stage=1,
        is_buyer=False,
        get_food=False,
        language="ru",
        created_at=utcnow() - timedelta(days=1),
    )
    data.update(overrides)
    return UserNutrition(**data)


class BrokenSession:
    """Stands in for an AsyncSession whose database is unreachable."""

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("Connection refused"))

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


@pytest_asyncio.fixture
async def test_engine(tmp_path):
    """On-disk SQLite so that concurrent sessions get their own connections."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'admin.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def seed(session_factory):
    """Insert ORM rows and commit them."""

    async def _seed(*rows):
        async with session_factory() as session:
            session.add_all(rows)
            await session.commit()

    return _seed


@pytest_asyncio.fixture(name="client")
async def client_fixture(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client with database dependencies pointed at the test engine."""
    from nutrition_admin.backend.database import get_db_session, get_session_factory
    from nutrition_admin.backend.main import app

    async def get_db_session_override() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = get_db_session_override
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def broken_db(client):
    """Every database call fails, as when PostgreSQL is down."""
    from nutrition_admin.backend.database import get_db_session, get_session_factory
    from nutrition_admin.backend.main import app

    async def get_db_session_override():
        yield BrokenSession()

    app.dependency_overrides[get_db_session] = get_db_session_override
    app.dependency_overrides[get_session_factory] = lambda: BrokenSession


@pytest.fixture
def bot_token(monkeypatch) -> str:
    """Turn initData verification on for the duration of a test."""
    from nutrition_admin.backend.config import admin_settings

    monkeypatch.setattr(admin_settings, "BOT_TOKEN", TEST_BOT_TOKEN)
    return TEST_BOT_TOKEN

