"""Shared test configuration and fixtures for backend tests.

Key principles:
- All HTTP calls go through the local ASGI app (no network).
- Each test gets its own in-memory Mongo database (mongomock-motor).
- httpx.AsyncClient(transport=ASGITransport(app)) is used for HTTP tests.
- AnyIO is the single async runner via @pytest.mark.anyio.
- Emails are captured by a recording notifier instead of going to Resend.
"""

from typing import Any, AsyncGenerator, Dict, Generator, List

import sys
import uuid
from pathlib import Path

import httpx
import pytest
from httpx import ASGITransport
from mongomock_motor import AsyncMongoMockClient

# Ensure backend root is on sys.path so that `server` module is importable
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from server import app
from parking.db import get_db
from parking.deps import get_notification_dispatcher
from parking.errors import NotificationError
from parking.services.notifications import NotificationDispatcher


class RecordingNotifier:
    """Notifier double: records every send, optionally failing."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: List[Dict[str, str]] = []

    async def send(self, *, to_email: str, subject: str, text: str) -> Dict[str, Any]:
        self.sent.append({"to_email": to_email, "subject": subject, "text": text})
        if self.fail:
            raise NotificationError("smtp down")
        return {"id": f"msg_{len(self.sent)}"}


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Force pytest-anyio to use asyncio event loop."""

    return "asyncio"


@pytest.fixture(scope="function")
def test_db() -> Any:
    """Function-scoped isolated in-memory database for each test."""

    client = AsyncMongoMockClient()
    db = client[f"parking_test_{uuid.uuid4().hex}"]
    return db


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def dispatcher(notifier: RecordingNotifier) -> NotificationDispatcher:
    return NotificationDispatcher(notifier)


@pytest.fixture(scope="function")
def app_with_overrides(test_db, dispatcher) -> Generator[Any, None, None]:
    """FastAPI app whose store and notifier dependencies point at test doubles."""

    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notification_dispatcher] = lambda: dispatcher
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def async_client(app_with_overrides) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app instance."""

    transport = ASGITransport(app=app_with_overrides)
    async with httpx.AsyncClient(transport=transport, base_url="http://test", timeout=30.0) as client:
        yield client


@pytest.fixture
def payment_payload() -> Dict[str, Any]:
    return {
        "userId": "u1",
        "slotNumber": 12,
        "paymentMethod": "Paytm",
        "amount": 50,
        "paymentNumber": "9876543210",
        "email": "driver@example.com",
    }
