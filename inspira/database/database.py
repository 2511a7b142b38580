"""
Content gateway - unified access to all content repositories.

One instance is built at application start and handed to callers; it holds
no state besides its repositories, which hold none besides the backend.
"""

from datetime import datetime
from typing import Callable

from .base import ContentBackend
from .models import DBArticle, DBEbook, DBEvent, DBGalleryItem, DBUser, DBVideo
from .repository import (
    EBOOK_SCHEMA,
    EVENT_SCHEMA,
    GALLERY_SCHEMA,
    USER_SCHEMA,
    VIDEO_SCHEMA,
    ContentRepository,
    article_schema,
)


class ContentGateway:
    """
    Typed content operations over a hosted backend.

    Exposes one method family per content kind; each delegates to a
    ContentRepository configured for that kind.
    """

    def __init__(
        self,
        backend: ContentBackend,
        clock: Callable[[], datetime] | None = None,
        articles_have_slug: bool = False,
    ):
        self.backend = backend

        # Initialize repositories
        self.articles: ContentRepository[DBArticle] = ContentRepository(
            backend, article_schema(articles_have_slug), clock
        )
        self.videos: ContentRepository[DBVideo] = ContentRepository(backend, VIDEO_SCHEMA, clock)
        self.events: ContentRepository[DBEvent] = ContentRepository(backend, EVENT_SCHEMA, clock)
        self.ebooks: ContentRepository[DBEbook] = ContentRepository(backend, EBOOK_SCHEMA, clock)
        self.users: ContentRepository[DBUser] = ContentRepository(backend, USER_SCHEMA, clock)
        self.gallery: ContentRepository[DBGalleryItem] = ContentRepository(
            backend, GALLERY_SCHEMA, clock
        )

    def repository(self, kind: str) -> ContentRepository:
        """Look up a repository by its plural route name (e.g. 'articles')."""
        repositories = {
            "articles": self.articles,
            "videos": self.videos,
            "events": self.events,
            "ebooks": self.ebooks,
            "users": self.users,
            "gallery": self.gallery,
        }
        try:
            return repositories[kind]
        except KeyError:
            raise ValueError(f"Unknown content kind: {kind}") from None

    async def close(self):
        await self.backend.aclose()

    # ─────────────────────────────────────────────────────────────
    # Articles
    # ─────────────────────────────────────────────────────────────

    async def get_articles(self) -> list[DBArticle]:
        return await self.articles.list_published()

    async def get_all_articles(self) -> list[DBArticle]:
        return await self.articles.list_all()

    async def add_article(self, fields: dict) -> DBArticle:
        return await self.articles.create(fields)

    async def update_article(self, article_id: str, updates: dict) -> DBArticle | None:
        return await self.articles.update(article_id, updates)

    async def delete_article(self, article_id: str) -> bool:
        return await self.articles.delete(article_id)

    async def set_article_featured(self, article_id: str, featured: bool) -> DBArticle | None:
        return await self.articles.set_featured(article_id, featured)

    # ─────────────────────────────────────────────────────────────
    # Videos
    # ─────────────────────────────────────────────────────────────

    async def get_videos(self) -> list[DBVideo]:
        return await self.videos.list_published()

    async def get_all_videos(self) -> list[DBVideo]:
        return await self.videos.list_all()

    async def add_video(self, fields: dict) -> DBVideo:
        return await self.videos.create(fields)

    async def update_video(self, video_id: str, updates: dict) -> DBVideo | None:
        return await self.videos.update(video_id, updates)

    async def delete_video(self, video_id: str) -> bool:
        return await self.videos.delete(video_id)

    async def set_video_featured(self, video_id: str, featured: bool) -> DBVideo | None:
        return await self.videos.set_featured(video_id, featured)

    # ─────────────────────────────────────────────────────────────
    # Events
    # ─────────────────────────────────────────────────────────────

    async def get_events(self) -> list[DBEvent]:
        return await self.events.list_published()

    async def get_all_events(self) -> list[DBEvent]:
        return await self.events.list_all()

    async def add_event(self, fields: dict) -> DBEvent:
        return await self.events.create(fields)

    async def update_event(self, event_id: str, updates: dict) -> DBEvent | None:
        return await self.events.update(event_id, updates)

    async def delete_event(self, event_id: str) -> bool:
        return await self.events.delete(event_id)

    # ─────────────────────────────────────────────────────────────
    # Ebooks
    # ─────────────────────────────────────────────────────────────

    async def get_ebooks(self) -> list[DBEbook]:
        return await self.ebooks.list_published()

    async def get_all_ebooks(self) -> list[DBEbook]:
        return await self.ebooks.list_all()

    async def add_ebook(self, fields: dict) -> DBEbook:
        return await self.ebooks.create(fields)

    async def update_ebook(self, ebook_id: str, updates: dict) -> DBEbook | None:
        return await self.ebooks.update(ebook_id, updates)

    async def delete_ebook(self, ebook_id: str) -> bool:
        return await self.ebooks.delete(ebook_id)

    async def set_ebook_featured(self, ebook_id: str, featured: bool) -> DBEbook | None:
        return await self.ebooks.set_featured(ebook_id, featured)

    # ─────────────────────────────────────────────────────────────
    # Gallery
    # ─────────────────────────────────────────────────────────────

    async def get_gallery_items(self) -> list[DBGalleryItem]:
        return await self.gallery.list_published()

    async def get_all_gallery_items(self) -> list[DBGalleryItem]:
        return await self.gallery.list_all()

    async def add_gallery_item(self, fields: dict) -> DBGalleryItem:
        return await self.gallery.create(fields)

    async def update_gallery_item(self, item_id: str, updates: dict) -> DBGalleryItem | None:
        return await self.gallery.update(item_id, updates)

    async def delete_gallery_item(self, item_id: str) -> bool:
        return await self.gallery.delete(item_id)

    # ─────────────────────────────────────────────────────────────
    # Users (no published view, no featuring)
    # ─────────────────────────────────────────────────────────────

    async def get_all_users(self) -> list[DBUser]:
        return await self.users.list_all()

    async def add_user(self, fields: dict) -> DBUser:
        return await self.users.create(fields)

    async def update_user(self, user_id: str, updates: dict) -> DBUser | None:
        return await self.users.update(user_id, updates)

    async def delete_user(self, user_id: str) -> bool:
        return await self.users.delete(user_id)
