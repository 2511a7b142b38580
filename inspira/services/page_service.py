"""
Page service: what the public pages and admin dashboard load.

The gateway returns full lists; everything page-specific lives here:
deadline-raced loading, slug-or-id lookup, and category/text filtering.
"""

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Awaitable

from ..database import ContentGateway, ContentStatus, DBArticle, DBGalleryItem

logger = logging.getLogger(__name__)

RELATED_LIMIT = 3


@dataclass
class PageData:
    """Lists loaded for one page, and whether the deadline cut the load short."""
    sections: dict[str, Any] = field(default_factory=dict)
    timed_out: bool = False

    def __getitem__(self, key: str) -> Any:
        return self.sections[key]


def filter_gallery(
    items: list[DBGalleryItem],
    category: str | None = None,
    query: str | None = None,
) -> list[DBGalleryItem]:
    """Filter by category ('all' or None keeps everything) and free text over title, description, tags."""
    result = items
    if category and category != "all":
        result = [i for i in result if i.category == category]
    if query:
        needle = query.lower()
        result = [
            i for i in result
            if needle in i.title.lower()
            or needle in (i.description or "").lower()
            or any(needle in tag.lower() for tag in i.tags)
        ]
    return result


def category_counts(items: list[DBGalleryItem]) -> dict[str, int]:
    counts = Counter(i.category for i in items if i.category)
    return {"all": len(items), **dict(counts)}


def _matches(entity, slug_or_id: str) -> bool:
    return entity.slug == slug_or_id or entity.id == slug_or_id


def _related(entities: list, target, limit: int = RELATED_LIMIT) -> list:
    return [
        e for e in entities
        if e.id != target.id and e.category and e.category == target.category
    ][:limit]


class PageService:
    """Loads page data from the gateway under a wall-clock deadline."""

    def __init__(self, gateway: ContentGateway, load_timeout: float = 8.0):
        self.gateway = gateway
        self.load_timeout = load_timeout

    async def _load(self, page: str, loaders: dict[str, Awaitable[list]]) -> PageData:
        """
        Run loaders concurrently, racing them against the deadline.

        On timeout every section falls back to an empty list; a marketing
        page shows empty state rather than an error.
        """
        names = list(loaders)
        try:
            results = await asyncio.wait_for(
                asyncio.gather(*loaders.values()),
                timeout=self.load_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Loading {page} page timed out after {self.load_timeout}s; showing empty content")
            return PageData({name: [] for name in names}, timed_out=True)
        return PageData(dict(zip(names, results)))

    # ─────────────────────────────────────────────────────────────
    # Public pages
    # ─────────────────────────────────────────────────────────────

    async def load_learning_center(self) -> PageData:
        """Published articles, videos and e-books, plus the spotlight article."""
        data = await self._load("learning center", {
            "articles": self.gateway.get_articles(),
            "videos": self.gateway.get_videos(),
            "ebooks": self.gateway.get_ebooks(),
        })
        articles: list[DBArticle] = data["articles"]
        featured = next((a for a in articles if a.featured), None)
        data.sections["featured_article"] = featured or (articles[0] if articles else None)
        return data

    async def load_events(self) -> PageData:
        return await self._load("events", {"events": self.gateway.get_events()})

    async def load_gallery(self, category: str | None = None, query: str | None = None) -> PageData:
        data = await self._load("gallery", {"items": self.gateway.get_gallery_items()})
        items = data["items"]
        data.sections["categories"] = category_counts(items)
        data.sections["items"] = filter_gallery(items, category, query)
        return data

    async def find_article(self, slug_or_id: str) -> tuple[DBArticle, list[DBArticle]] | None:
        """Article by slug, falling back to id, with related articles from the same category."""
        articles = await self.gateway.get_all_articles()
        article = next((a for a in articles if _matches(a, slug_or_id)), None)
        if article is None:
            return None
        published = [a for a in articles if a.status == ContentStatus.PUBLISHED.value]
        return article, _related(published, article)

    async def find_gallery_item(
        self, slug_or_id: str
    ) -> tuple[DBGalleryItem, list[DBGalleryItem]] | None:
        items = await self.gateway.get_all_gallery_items()
        item = next((i for i in items if _matches(i, slug_or_id)), None)
        if item is None:
            return None
        return item, _related(items, item)

    # ─────────────────────────────────────────────────────────────
    # Admin dashboard
    # ─────────────────────────────────────────────────────────────

    async def load_admin_dashboard(self) -> PageData:
        return await self._load("admin", {
            "articles": self.gateway.get_all_articles(),
            "videos": self.gateway.get_all_videos(),
            "events": self.gateway.get_all_events(),
            "ebooks": self.gateway.get_all_ebooks(),
            "gallery": self.gateway.get_gallery_items(),
            "users": self.gateway.get_all_users(),
        })
