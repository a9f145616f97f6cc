"""Pytest configuration and fixtures"""
import os

import httpx
import pytest

# Set test environment variables before eventhub reads them
os.environ.setdefault("EVENTHUB_API_URL", "http://events.test")
os.environ.setdefault("EVENTHUB_CART_BACKEND", "memory")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from eventhub.api.client import EventsApiClient  # noqa: E402
from eventhub.cart import CartStore  # noqa: E402
from eventhub.storage import MemoryStorage  # noqa: E402


@pytest.fixture
def memory_storage():
    """Empty in-memory storage"""
    return MemoryStorage()


@pytest.fixture
def cart_store(memory_storage):
    """Cart store over in-memory storage"""
    return CartStore(memory_storage)


@pytest.fixture
def sample_event():
    """Event 1 with a VIP and a Regular ticket type"""
    return {
        "id": 1,
        "name": "Event1",
        "description": "An evening of live music",
        "venue": "KICC Grounds",
        "poster": "https://img.test/event1.png",
        "status": "active",
        "category_id": 3,
        "start_date": "2025-06-01T18:00:00Z",
        "end_date": "2025-06-01T23:00:00Z",
        "created_at": "2025-01-01T00:00:00Z",
        "updated_at": "2025-01-01T00:00:00Z",
        "tickets": [
            {"id": 10, "name": "VIP", "price": 1000, "tickets_available": 5},
            {"id": 11, "name": "Regular", "price": 500, "tickets_available": 20},
        ],
        "category": {"id": 3, "name": "Music", "event_count": 4},
    }


@pytest.fixture
def sample_user():
    """Sample user data"""
    return {
        "id": 7,
        "name": "Jane Wanjiku",
        "phone": "+254712345678",
        "email": "jane@example.com",
        "role": "user",
        "created_at": "2025-01-01T00:00:00Z",
        "updated_at": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def make_api_client():
    """Build an EventsApiClient whose requests go to `handler`"""
    clients = []

    def _make(handler, **kwargs) -> EventsApiClient:
        client = EventsApiClient(base_url="http://events.test", **kwargs)
        client._http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    return _make
