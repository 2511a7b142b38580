"""
Tests for the content gateway over the in-memory backend.
"""

import logging

import pytest

from inspira.database import BackendError


class TestListPublished:
    """Tests for the live-content listings."""

    @pytest.mark.asyncio
    async def test_articles_only_published(self, gateway, seeded):
        """Drafts appear in the full list but never in the published one."""
        published = await gateway.get_articles()
        everything = await gateway.get_all_articles()

        assert all(a.status == "published" for a in published)
        assert seeded["draft_article"] not in [a.id for a in published]
        assert seeded["draft_article"] in [a.id for a in everything]

    @pytest.mark.asyncio
    async def test_articles_newest_first(self, gateway, seeded):
        published = await gateway.get_articles()
        first_id, second_id = seeded["articles"]
        assert [a.id for a in published] == [second_id, first_id]

    @pytest.mark.asyncio
    async def test_events_upcoming_soonest_first(self, gateway, seeded):
        events = await gateway.get_events()
        assert [e.id for e in events] == [seeded["events"]["sooner"], seeded["events"]["later"]]
        assert all(e.status == "upcoming" for e in events)

    @pytest.mark.asyncio
    async def test_all_events_latest_date_first(self, gateway, seeded):
        events = await gateway.get_all_events()
        assert [e.date for e in events] == ["2025-03-10", "2025-02-01", "2024-05-01"]

    @pytest.mark.asyncio
    async def test_gallery_has_no_status_filter(self, gateway, seeded):
        items = await gateway.get_gallery_items()
        assert [i.id for i in items] == [seeded["gallery"]]

    @pytest.mark.asyncio
    async def test_gallery_newest_upload_first(self, gateway):
        old = await gateway.add_gallery_item({"title": "Old", "image_url": "a.jpg"})
        new = await gateway.add_gallery_item({"title": "New", "image_url": "b.jpg"})
        items = await gateway.get_all_gallery_items()
        assert [i.id for i in items] == [new.id, old.id]

    @pytest.mark.asyncio
    async def test_videos_and_ebooks_filtered(self, gateway, seeded):
        await gateway.add_video({"title": "Hidden", "status": "archived"})
        await gateway.add_ebook({"title": "Hidden", "status": "draft"})

        videos = await gateway.get_videos()
        ebooks = await gateway.get_ebooks()

        assert [v.id for v in videos] == [seeded["video"]]
        assert [e.id for e in ebooks] == [seeded["ebook"]]


class TestReadFailures:
    """Read paths never raise."""

    @pytest.mark.asyncio
    async def test_published_returns_empty_on_failure(self, gateway, backend, seeded, caplog):
        backend.fail("articles", "select")
        with caplog.at_level(logging.ERROR):
            assert await gateway.get_articles() == []
        assert "Error getting published articles" in caplog.text

    @pytest.mark.asyncio
    async def test_all_returns_empty_on_failure(self, gateway, backend, seeded):
        backend.fail("events", "select")
        assert await gateway.get_all_events() == []

    @pytest.mark.asyncio
    async def test_failure_is_isolated_to_one_kind(self, gateway, backend, seeded):
        backend.fail("videos", "select")
        assert await gateway.get_videos() == []
        assert len(await gateway.get_ebooks()) == 1


class TestCreate:
    """Tests for create."""

    @pytest.mark.asyncio
    async def test_create_returns_backend_assigned_fields(self, gateway):
        article = await gateway.add_article({"title": "Cara Menjahit", "status": "draft"})
        assert article.id
        assert article.created_at is not None
        assert article.updated_at is None

    @pytest.mark.asyncio
    async def test_create_then_list_includes_it(self, gateway):
        article = await gateway.add_article({"title": "Baru", "status": "draft"})
        assert article.id in [a.id for a in await gateway.get_all_articles()]

    @pytest.mark.asyncio
    async def test_create_ignores_client_ids_and_timestamps(self, gateway, backend):
        video = await gateway.add_video({
            "id": "client-chosen",
            "title": "Video",
            "created_at": "1999-01-01T00:00:00+00:00",
            "status": "published",
        })
        assert video.id != "client-chosen"
        assert video.created_at.year != 1999

    @pytest.mark.asyncio
    async def test_create_strips_slug_without_slug_column(self, gateway, backend):
        await gateway.add_article({"title": "Judul", "slug": "judul", "status": "draft"})
        assert "slug" not in backend.rows("articles")[0]

    @pytest.mark.asyncio
    async def test_create_raises_and_logs_on_failure(self, gateway, backend, caplog):
        backend.fail("articles", "insert")
        with caplog.at_level(logging.ERROR):
            with pytest.raises(BackendError):
                await gateway.add_article({"title": "Gagal"})
        assert "Error adding article" in caplog.text
        assert "SIMULATED" in caplog.text


class TestUpdate:
    """Tests for partial update."""

    @pytest.mark.asyncio
    async def test_update_changes_only_given_field(self, gateway, backend):
        created = await gateway.add_article({
            "title": "Judul",
            "content": "Isi",
            "category": "Tutorial",
            "status": "draft",
        })
        before = backend.rows("articles")[0]

        await gateway.update_article(created.id, {"category": "Tips"})

        after = backend.rows("articles")[0]
        changed = {k for k in after if after[k] != before.get(k)}
        assert changed == {"category", "updated_at"}

    @pytest.mark.asyncio
    async def test_update_stamps_updated_at(self, gateway):
        created = await gateway.add_video({"title": "Video", "status": "draft"})
        updated = await gateway.update_video(created.id, {"title": "Video Baru"})
        assert updated.updated_at > updated.created_at

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, gateway):
        assert await gateway.update_event("no-such-id", {"title": "x"}) is None

    @pytest.mark.asyncio
    async def test_update_failure_returns_none(self, gateway, backend, caplog):
        created = await gateway.add_ebook({"title": "Buku", "status": "draft"})
        backend.fail("ebooks", "update")
        with caplog.at_level(logging.ERROR):
            assert await gateway.update_ebook(created.id, {"title": "x"}) is None
        assert "Error updating ebook" in caplog.text

    @pytest.mark.asyncio
    async def test_any_status_value_is_accepted(self, gateway):
        created = await gateway.add_article({"title": "A", "status": "archived"})
        updated = await gateway.update_article(created.id, {"status": "draft"})
        assert updated.status == "draft"


class TestDelete:
    """Tests for hard delete."""

    @pytest.mark.asyncio
    async def test_delete_removes_from_lists(self, gateway, seeded):
        article_id = seeded["articles"][0]
        assert await gateway.delete_article(article_id) is True
        assert article_id not in [a.id for a in await gateway.get_all_articles()]
        assert article_id not in [a.id for a in await gateway.get_articles()]

    @pytest.mark.asyncio
    async def test_repeat_delete_returns_false(self, gateway, seeded):
        assert await gateway.delete_gallery_item(seeded["gallery"]) is True
        assert await gateway.delete_gallery_item(seeded["gallery"]) is False

    @pytest.mark.asyncio
    async def test_delete_failure_returns_false(self, gateway, backend, seeded):
        backend.fail("videos", "delete")
        assert await gateway.delete_video(seeded["video"]) is False


class TestSetFeatured:
    """Tests for the single-spotlight invariant."""

    @pytest.mark.asyncio
    async def test_feature_makes_exactly_one(self, gateway, seeded):
        first_id, second_id = seeded["articles"]
        result = await gateway.set_article_featured(first_id, True)

        assert result.id == first_id
        assert result.featured is True
        featured = [a.id for a in await gateway.get_all_articles() if a.featured]
        assert featured == [first_id]

    @pytest.mark.asyncio
    async def test_feature_a_then_b_leaves_only_b(self, gateway):
        a = await gateway.add_article({"title": "A", "status": "published"})
        b = await gateway.add_article({"title": "B", "status": "published"})

        await gateway.set_article_featured(a.id, True)
        await gateway.set_article_featured(b.id, True)

        articles = {x.id: x for x in await gateway.get_all_articles()}
        assert articles[b.id].featured is True
        assert articles[a.id].featured is False

    @pytest.mark.asyncio
    async def test_unfeature_touches_only_target(self, gateway, backend):
        a = await gateway.add_video({"title": "A", "status": "published"})
        b = await gateway.add_video({"title": "B", "status": "published"})
        await gateway.set_video_featured(a.id, True)
        before = {r["id"]: r for r in backend.rows("videos")}

        await gateway.set_video_featured(a.id, False)

        after = {r["id"]: r for r in backend.rows("videos")}
        assert after[b.id] == before[b.id]
        assert after[a.id]["featured"] is False

    @pytest.mark.asyncio
    async def test_feature_stamps_only_target(self, gateway, backend):
        a = await gateway.add_ebook({"title": "A", "status": "published"})
        b = await gateway.add_ebook({"title": "B", "status": "published"})
        await gateway.set_ebook_featured(a.id, True)

        await gateway.set_ebook_featured(b.id, True)

        rows = {r["id"]: r for r in backend.rows("ebooks")}
        assert rows[a.id]["featured"] is False
        assert rows[b.id]["updated_at"] > rows[a.id]["updated_at"]

    @pytest.mark.asyncio
    async def test_feature_missing_returns_none(self, gateway, seeded):
        assert await gateway.set_article_featured("no-such-id", True) is None
        featured = [a for a in await gateway.get_all_articles() if a.featured]
        assert featured == []

    @pytest.mark.asyncio
    async def test_feature_failure_returns_none(self, gateway, backend, seeded):
        backend.fail("articles", "update")
        assert await gateway.set_article_featured(seeded["articles"][0], True) is None

    @pytest.mark.asyncio
    async def test_events_cannot_be_featured(self, gateway, seeded):
        with pytest.raises(TypeError):
            await gateway.events.set_featured(seeded["events"]["later"], True)


class TestUsers:
    """Tests for the user variant."""

    @pytest.mark.asyncio
    async def test_list_never_returns_password_hash(self, gateway, backend):
        await gateway.add_user({
            "username": "penulis",
            "password_hash": "$2b$10$abcdefghijklmnopqrstuv",
            "first_name": "Sari",
            "last_name": "Dewi",
            "role": "writer",
        })
        assert "password_hash" in backend.rows("users")[0]

        rows = await backend.select("users", columns=gateway.users.schema.columns)
        assert all("password_hash" not in r for r in rows)

        users = await gateway.get_all_users()
        assert len(users) == 1
        assert not hasattr(users[0], "password_hash")
        assert users[0].full_name == "Sari Dewi"

    @pytest.mark.asyncio
    async def test_update_does_not_stamp_updated_at(self, gateway, backend):
        user = await gateway.add_user({"username": "admin", "password_hash": "x", "role": "admin"})
        updated = await gateway.update_user(user.id, {"is_active": False})
        assert updated.is_active is False
        assert "updated_at" not in backend.rows("users")[0]

    @pytest.mark.asyncio
    async def test_users_have_no_featured(self, gateway):
        with pytest.raises(TypeError):
            await gateway.users.set_featured("any", True)


class TestPublishScenario:
    """Draft to published round trip."""

    @pytest.mark.asyncio
    async def test_draft_then_publish(self, gateway):
        created = await gateway.add_article({"title": "Cara Menjahit", "status": "draft"})
        assert created.id not in [a.id for a in await gateway.get_articles()]

        await gateway.update_article(created.id, {"status": "published"})

        published = {a.id: a for a in await gateway.get_articles()}
        article = published[created.id]
        assert article.title == "Cara Menjahit"
        assert article.updated_at > article.created_at

    @pytest.mark.asyncio
    async def test_featured_create_takes_the_spotlight(self, gateway):
        a = await gateway.add_article({"title": "A", "status": "published", "featured": True})
        b = await gateway.add_article({"title": "B", "status": "published", "featured": True})

        assert a.featured is True
        assert b.featured is True
        featured = [x.id for x in await gateway.get_all_articles() if x.featured]
        assert featured == [b.id]

    @pytest.mark.asyncio
    async def test_featured_update_takes_the_spotlight(self, gateway):
        a = await gateway.add_video({"title": "A", "status": "published", "featured": True})
        b = await gateway.add_video({"title": "B", "status": "published"})

        updated = await gateway.update_video(b.id, {"title": "B2", "featured": True})

        assert updated.title == "B2"
        assert updated.featured is True
        videos = {v.id: v for v in await gateway.get_all_videos()}
        assert videos[a.id].featured is False
        assert videos[b.id].title == "B2"

    @pytest.mark.asyncio
    async def test_featured_update_of_missing_returns_none(self, gateway):
        assert await gateway.update_ebook("no-such-id", {"featured": True}) is None
