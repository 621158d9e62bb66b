"""
VaultChat Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Inventory:
    ├── mock_db_session: Mock AsyncSession (no real DB needed)
    ├── make_user / make_group / make_private_chat: transient ORM entities
    ├── user_store / group_store / private_chat_store / message_store / image_store:
    │       AsyncMock stores for service tests
    ├── jpeg_bytes / png_bytes / gif_bytes / webp_bytes: minimal signed payloads
    └── test_client: HTTPX AsyncClient bound to the FastAPI app
"""

import os

# Test settings must be in the environment BEFORE any vaultchat import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["MULTIPART_MAX_FILE_SIZE"] = ""
os.environ["EXPOSE_INTERNAL_ERRORS"] = "false"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from vaultchat.models.chat import Group, PrivateChat
from vaultchat.models.user import User


# ══════════════════════════════════════════════════════════════════════════
# Database
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.get.return_value = user
        store = UserStore(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Entities
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_user():
    def _make(user_id=1, username="alice", password="$2b$12$notarealhashnotarealhashnotarealhashnotarealhas"):
        return User(id=user_id, username=username, password=password)
    return _make


@pytest.fixture
def make_group():
    def _make(group_id=10, name="general"):
        return Group(id=group_id, name=name)
    return _make


@pytest.fixture
def make_private_chat():
    def _make(chat_id=20, user1_id=1, user2_id=2):
        return PrivateChat(id=chat_id, user1_id=user1_id, user2_id=user2_id)
    return _make


# ══════════════════════════════════════════════════════════════════════════
# Stores
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def user_store():
    store = MagicMock()
    store.get_by_id = AsyncMock(return_value=None)
    store.get_by_username = AsyncMock(return_value=None)
    store.exists_by_username = AsyncMock(return_value=False)
    store.list_all = AsyncMock(return_value=[])
    store.insert = AsyncMock()
    return store


@pytest.fixture
def group_store():
    store = MagicMock()
    store.get_by_id = AsyncMock(return_value=None)
    return store


@pytest.fixture
def private_chat_store():
    store = MagicMock()
    store.get_by_id = AsyncMock(return_value=None)
    return store


@pytest.fixture
def message_store():
    """Insert assigns an id, the way a flush would."""
    store = MagicMock()

    async def _insert(message):
        message.id = 100
        return message

    store.insert = AsyncMock(side_effect=_insert)
    return store


@pytest.fixture
def image_store():
    store = MagicMock()
    store.insert = AsyncMock(return_value=42)
    return store


# ══════════════════════════════════════════════════════════════════════════
# Image Payloads (12+ bytes, the shortest payload the sniffer inspects)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def jpeg_bytes():
    # Start of Image + JFIF APP0 marker
    return b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"


@pytest.fixture
def png_bytes():
    return b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR"


@pytest.fixture
def gif_bytes():
    return b"GIF89a" + b"\x01\x00\x01\x00\x80\x00"


@pytest.fixture
def webp_bytes():
    return b"RIFF" + b"\x24\x00\x00\x00" + b"WEBP" + b"VP8 "


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client():
    """
    Provides an async HTTP test client for endpoint testing.

    Dependency overrides set by a test are cleared afterwards.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
    """
    from vaultchat.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
