# tests/conftest.py

from __future__ import annotations

import os

# Settings() is built at import time and requires DATABASE_URL
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from taskboard.core.config import Settings
from taskboard.core.database import Base, create_session_factory
from taskboard.core.events import InvalidationSignal
from taskboard.main import create_app
from taskboard.repositories.task import TaskGateway
from taskboard.services.task import TaskService


@pytest_asyncio.fixture()
async def engine():
    """
    In-memory SQLite engine with the schema created.

    StaticPool keeps the single in-memory database alive across sessions.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture()
def gateway(session_factory) -> TaskGateway:
    return TaskGateway(session_factory)


@pytest.fixture()
def signal() -> InvalidationSignal:
    return InvalidationSignal()


@pytest.fixture()
def invalidations(signal: InvalidationSignal) -> list[str]:
    """Paths emitted on the signal, in order."""
    emitted: list[str] = []
    signal.subscribe("/", emitted.append)
    return emitted


@pytest.fixture()
def service(gateway: TaskGateway, signal: InvalidationSignal) -> TaskService:
    return TaskService(gateway, signal)


@pytest.fixture()
def settings() -> Settings:
    return Settings(DATABASE_URL="sqlite+aiosqlite://", LOG_LEVEL="WARNING")


@pytest.fixture()
def app(settings, session_factory):
    return create_app(settings, session_factory=session_factory)


@pytest_asyncio.fixture()
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
