"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from typing import Any

import httpx
import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

TEST_SECRET = "test-secret"


class FakeEmitter:
    """Records emits and delivers them to a set of connected sids."""

    def __init__(self):
        self.connected: set[str] = set()
        self.emitted: list[tuple[str, Any, str | None]] = []
        self.delivered: dict[str, list[tuple[str, Any]]] = {}

    def connect(self, sid: str) -> None:
        self.connected.add(sid)

    def disconnect(self, sid: str) -> None:
        self.connected.discard(sid)

    async def emit(self, event: str, data: Any = None, to: str | None = None) -> None:
        self.emitted.append((event, data, to))
        targets = self.connected if to is None else {to} & self.connected
        for sid in targets:
            self.delivered.setdefault(sid, []).append((event, data))


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from staffdir.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def tokens():
    from staffdir.auth import TokenService

    return TokenService(TEST_SECRET)


@pytest.fixture
def directory(storage, tokens):
    from staffdir.directory import EmployeeDirectory

    return EmployeeDirectory(storage, tokens)


@pytest.fixture
def conversations(storage):
    from staffdir.conversations import ConversationService

    return ConversationService(storage)


@pytest.fixture
def presence():
    from staffdir.presence import PresenceRegistry

    return PresenceRegistry()


@pytest.fixture
def emitter():
    return FakeEmitter()


@pytest.fixture
def dispatcher(emitter, presence, conversations, tokens):
    from staffdir.realtime import Dispatcher

    return Dispatcher(
        emitter=emitter,
        presence=presence,
        conversations=conversations,
        tokens=tokens,
    )


@pytest.fixture
def settings():
    from staffdir.config import Settings

    return Settings(jwt_secret=TEST_SECRET, database_url=":memory:")


@pytest_asyncio.fixture
async def application(settings):
    """Started Application on an in-memory database."""
    from staffdir.app import Application

    app = Application(settings)
    await app.start()
    yield app
    await app.stop()


@pytest_asyncio.fixture
async def client(application):
    """HTTP client against the REST API of a started Application."""
    from staffdir.api import create_fastapi_app

    transport = httpx.ASGITransport(app=create_fastapi_app(application))
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def employee_payload():
    return {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "department": "Engineering",
        "role": "Engineer",
        "password": "analytical-engine",
    }
