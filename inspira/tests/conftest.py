"""
Pytest fixtures for backend tests.
"""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from inspira.config import state
from inspira.database import ContentGateway, InMemoryBackend
from inspira.server import app


class TickingClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def backend(clock):
    """In-memory backend sharing the test clock."""
    return InMemoryBackend(clock=clock)


@pytest.fixture
def gateway(backend, clock):
    """Gateway over an empty in-memory backend."""
    return ContentGateway(backend, clock=clock)


@pytest_asyncio.fixture
async def seeded(gateway) -> dict:
    """Populate the gateway with a small mix of content. Returns created ids."""
    draft = await gateway.add_article({
        "title": "Draft Article",
        "content": "Work in progress",
        "category": "Tutorial",
        "status": "draft",
    })
    first = await gateway.add_article({
        "title": "Teknik Dasar Menjahit",
        "content": "Mulai dari jahitan lurus.",
        "category": "Tutorial",
        "status": "published",
    })
    second = await gateway.add_article({
        "title": "Memilih Kain",
        "content": "Katun, linen, dan rayon.",
        "category": "Tutorial",
        "status": "published",
    })
    video = await gateway.add_video({"title": "Pola Dasar", "status": "published"})
    ebook = await gateway.add_ebook({"title": "Panduan Pola", "status": "published"})
    past = await gateway.add_event({"title": "Kelas Lalu", "date": "2024-05-01", "status": "past"})
    later = await gateway.add_event({"title": "Workshop Batik", "date": "2025-03-10", "status": "upcoming"})
    sooner = await gateway.add_event({"title": "Temu Belajar", "date": "2025-02-01", "status": "upcoming"})
    gallery = await gateway.add_gallery_item({
        "title": "Kebaya Modern",
        "category": "fashion",
        "tags": ["kebaya", "modern"],
        "image_url": "https://cdn.example.com/kebaya.jpg",
    })
    return {
        "draft_article": draft.id,
        "articles": [first.id, second.id],
        "video": video.id,
        "ebook": ebook.id,
        "events": {"past": past.id, "later": later.id, "sooner": sooner.id},
        "gallery": gallery.id,
    }


@pytest.fixture
def client(gateway):
    """Create a test client with an isolated in-memory gateway."""
    # Store original state
    original_gateway = state.gateway

    state.gateway = gateway

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    # Restore original state
    state.gateway = original_gateway


@pytest.fixture
def client_with_data(client):
    """Test client with some sample data pre-populated through the API."""
    draft = client.post("/articles", json={"title": "Draft Article", "status": "draft"}).json()
    published = client.post("/articles", json={
        "title": "Teknik Dasar Menjahit",
        "category": "Tutorial",
        "status": "published",
    }).json()
    event = client.post("/events", json={"title": "Workshop Batik", "date": "2025-03-10"}).json()
    item = client.post("/gallery", json={
        "title": "Kebaya Modern",
        "category": "fashion",
        "tags": ["kebaya"],
        "image_url": "https://cdn.example.com/kebaya.jpg",
    }).json()

    yield client, {
        "draft_article_id": draft["id"],
        "article_id": published["id"],
        "event_id": event["id"],
        "gallery_id": item["id"],
    }
