"""
Tests for page loading and the page routes.
"""

import asyncio
from datetime import datetime, timezone

import pytest

from inspira.database import ContentGateway, DBGalleryItem, InMemoryBackend
from inspira.services import PageService, category_counts, filter_gallery


class SlowBackend(InMemoryBackend):
    """Backend whose reads take longer than any page is willing to wait."""

    async def select(self, *args, **kwargs):
        await asyncio.sleep(1)
        return await super().select(*args, **kwargs)


def gallery_item(id, title, category, tags=(), description=""):
    return DBGalleryItem(
        id=id,
        title=title,
        uploaded_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        description=description,
        category=category,
        tags=list(tags),
    )


class TestGalleryFilters:
    """Tests for client-side gallery filtering."""

    ITEMS = [
        gallery_item("1", "Kebaya Modern", "fashion", ["kebaya"]),
        gallery_item("2", "Tas Anyaman", "accessories", ["tas", "anyaman"]),
        gallery_item("3", "Gaun Songket", "fashion", ["songket"], "Motif tradisional"),
    ]

    def test_all_category_keeps_everything(self):
        assert filter_gallery(self.ITEMS, "all") == self.ITEMS

    def test_category(self):
        assert [i.id for i in filter_gallery(self.ITEMS, "fashion")] == ["1", "3"]

    def test_query_matches_title_description_and_tags(self):
        assert [i.id for i in filter_gallery(self.ITEMS, query="KEBAYA")] == ["1"]
        assert [i.id for i in filter_gallery(self.ITEMS, query="tradisional")] == ["3"]
        assert [i.id for i in filter_gallery(self.ITEMS, query="anyaman")] == ["2"]

    def test_category_and_query(self):
        assert filter_gallery(self.ITEMS, "accessories", "songket") == []

    def test_category_counts(self):
        assert category_counts(self.ITEMS) == {"all": 3, "fashion": 2, "accessories": 1}


class TestPageService:
    """Tests for PageService."""

    @pytest.mark.asyncio
    async def test_learning_center_uses_featured_article(self, gateway, seeded):
        first_id, second_id = seeded["articles"]
        await gateway.set_article_featured(first_id, True)

        data = await PageService(gateway).load_learning_center()

        assert data.timed_out is False
        assert data["featured_article"].id == first_id
        assert len(data["articles"]) == 2
        assert len(data["videos"]) == 1
        assert len(data["ebooks"]) == 1

    @pytest.mark.asyncio
    async def test_learning_center_falls_back_to_newest(self, gateway, seeded):
        data = await PageService(gateway).load_learning_center()
        assert data["featured_article"].id == seeded["articles"][1]

    @pytest.mark.asyncio
    async def test_learning_center_empty(self, gateway):
        data = await PageService(gateway).load_learning_center()
        assert data["featured_article"] is None

    @pytest.mark.asyncio
    async def test_timeout_substitutes_empty_content(self, caplog):
        service = PageService(ContentGateway(SlowBackend()), load_timeout=0.05)

        data = await service.load_learning_center()

        assert data.timed_out is True
        assert data["articles"] == []
        assert data["videos"] == []
        assert data["ebooks"] == []
        assert data["featured_article"] is None
        assert "timed out" in caplog.text

    @pytest.mark.asyncio
    async def test_events_page(self, gateway, seeded):
        data = await PageService(gateway).load_events()
        assert [e.title for e in data["events"]] == ["Temu Belajar", "Workshop Batik"]

    @pytest.mark.asyncio
    async def test_find_article_by_id_and_slug(self, backend, clock):
        gateway = ContentGateway(backend, clock=clock, articles_have_slug=True)
        created = await gateway.add_article({"title": "Cara Menjahit Kancing", "status": "published"})
        assert created.slug == "cara-menjahit-kancing"

        service = PageService(gateway)
        by_slug = await service.find_article("cara-menjahit-kancing")
        by_id = await service.find_article(created.id)

        assert by_slug[0].id == created.id
        assert by_id[0].id == created.id
        assert await service.find_article("missing") is None

    @pytest.mark.asyncio
    async def test_related_articles_same_category_published(self, gateway, seeded):
        first_id, second_id = seeded["articles"]
        article, related = await PageService(gateway).find_article(first_id)
        assert [a.id for a in related] == [second_id]

    @pytest.mark.asyncio
    async def test_admin_dashboard_loads_everything(self, gateway, seeded):
        data = await PageService(gateway).load_admin_dashboard()
        assert len(data["articles"]) == 3
        assert len(data["events"]) == 3
        assert len(data["gallery"]) == 1
        assert data["users"] == []


class TestPageRoutes:
    """Tests for /pages endpoints."""

    def test_learning_center(self, client_with_data):
        client, data = client_with_data
        response = client.get("/pages/learning-center")
        assert response.status_code == 200
        body = response.json()
        assert body["featured_article"]["id"] == data["article_id"]
        assert body["timed_out"] is False

    def test_article_detail_not_found(self, client):
        assert client.get("/pages/articles/missing").status_code == 404

    def test_article_detail(self, client_with_data):
        client, data = client_with_data
        body = client.get(f"/pages/articles/{data['article_id']}").json()
        assert body["article"]["title"] == "Teknik Dasar Menjahit"

    def test_gallery_filters(self, client_with_data):
        client, data = client_with_data
        body = client.get("/pages/gallery", params={"category": "accessories"}).json()
        assert body["items"] == []
        assert body["categories"] == {"all": 1, "fashion": 1}

        body = client.get("/pages/gallery", params={"q": "kebaya"}).json()
        assert [i["id"] for i in body["items"]] == [data["gallery_id"]]

    def test_gallery_detail(self, client_with_data):
        client, data = client_with_data
        body = client.get(f"/pages/gallery/{data['gallery_id']}").json()
        assert body["item"]["title"] == "Kebaya Modern"
        assert body["related"] == []

    def test_events_page(self, client_with_data):
        client, data = client_with_data
        events = client.get("/pages/events").json()["events"]
        assert [e["id"] for e in events] == [data["event_id"]]

    def test_admin_dashboard(self, client_with_data):
        client, data = client_with_data
        body = client.get("/pages/admin").json()
        assert len(body["articles"]) == 2
        assert body["users"] == []
