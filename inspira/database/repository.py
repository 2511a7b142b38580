"""
Content repository - one generic CRUD implementation for every content kind.

Each kind is described by an EntitySchema (table, converter, status filter,
ordering, write hygiene). Failure policy:

- reads (list_published, list_all) log and return []
- create logs full detail and re-raises
- update, delete, set_featured log and return None / False
"""

import logging
import re
import unicodedata
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

from .base import BackendError, ContentBackend, Order, eq
from .converters import (
    row_to_article,
    row_to_ebook,
    row_to_event,
    row_to_gallery_item,
    row_to_user,
    row_to_video,
)
from .models import ContentStatus, EventStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Columns the backend owns; never sent in a write payload
SERVER_MANAGED_FIELDS = ("id", "created_at", "updated_at")

USER_PUBLIC_COLUMNS = "id, username, first_name, last_name, full_name, role, created_at, is_active"


def slugify(text: str) -> str:
    """URL slug from a title: ASCII, lowercase, hyphen-separated."""
    normalized = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", normalized.lower()).strip("-")
    return slug or "untitled"


@dataclass(frozen=True)
class EntitySchema(Generic[T]):
    """How one content kind maps onto its backend table."""
    kind: str
    table: str
    converter: Callable[[dict], T]
    live_status: str | None = None
    published_order: tuple[Order, ...] = (Order("created_at", descending=True),)
    all_order: tuple[Order, ...] = (Order("created_at", descending=True),)
    columns: str = "*"
    stamps_updated_at: bool = True
    supports_featured: bool = False
    stripped_fields: tuple[str, ...] = ()
    generates_slug: bool = False
    server_fields: tuple[str, ...] = SERVER_MANAGED_FIELDS

    @property
    def label(self) -> str:
        return self.kind.replace("_", " ")


def _default_clock() -> datetime:
    return datetime.now(timezone.utc)


class ContentRepository(Generic[T]):
    """Repository for one content kind."""

    def __init__(
        self,
        backend: ContentBackend,
        schema: EntitySchema[T],
        clock: Callable[[], datetime] | None = None,
    ):
        self._backend = backend
        self.schema = schema
        self._clock = clock or _default_clock

    # ─────────────────────────────────────────────────────────────
    # Reads
    # ─────────────────────────────────────────────────────────────

    async def list_published(self) -> list[T]:
        """Live entities in the kind's recency order. Empty list on failure."""
        filters = []
        if self.schema.live_status is not None:
            filters.append(eq("status", self.schema.live_status))
        return await self._select(filters, self.schema.published_order, "published")

    async def list_all(self) -> list[T]:
        """All entities regardless of status. Empty list on failure."""
        return await self._select([], self.schema.all_order, "all")

    async def _select(self, filters, order, scope: str) -> list[T]:
        try:
            rows = await self._backend.select(
                self.schema.table,
                columns=self.schema.columns,
                filters=filters,
                order=order,
            )
        except BackendError as e:
            logger.error(f"Error getting {scope} {self.schema.label}s: {e.to_dict()}")
            return []
        return [self.schema.converter(row) for row in rows]

    # ─────────────────────────────────────────────────────────────
    # Writes
    # ─────────────────────────────────────────────────────────────

    def _clean(self, fields: dict) -> dict:
        dropped = set(self.schema.server_fields) | set(self.schema.stripped_fields)
        return {k: _to_wire(v) for k, v in fields.items() if k not in dropped}

    def _now(self) -> str:
        return self._clock().isoformat()

    async def create(self, fields: dict) -> T:
        """
        Insert a new entity and return it as stored.

        Raises:
            BackendError: after logging, so the caller can tell the operator
        """
        row = self._clean(fields)
        if self.schema.generates_slug and not row.get("slug") and row.get("title"):
            row["slug"] = slugify(row["title"])
        # A featured insert goes through the exclusive write once the row exists
        wants_featured = self._takes_featured(row)

        try:
            stored = await self._backend.insert(self.schema.table, row, columns=self.schema.columns)
        except BackendError as e:
            logger.error(f"Error adding {self.schema.label}: {e}")
            logger.error(f"Error details: {e.to_dict()}")
            raise

        created = self.schema.converter(stored)
        if wants_featured:
            featured = await self.set_featured(stored["id"], True)
            if featured is not None:
                return featured
        return created

    async def update(self, entity_id: str, fields: dict) -> T | None:
        """
        Partial update. Returns the updated entity, or None on failure / no match.

        featured=True is applied through set_featured after the other fields.
        """
        values = self._clean(fields)
        if self._takes_featured(values):
            if values:
                updated = await self._update(entity_id, values)
                if updated is None:
                    return None
            return await self.set_featured(entity_id, True)
        return await self._update(entity_id, values)

    def _takes_featured(self, values: dict) -> bool:
        """Pop a truthy featured flag from a write payload; it is never written directly."""
        if not self.schema.supports_featured or not values.get("featured"):
            return False
        del values["featured"]
        return True

    async def _update(self, entity_id: str, values: dict) -> T | None:
        if self.schema.stamps_updated_at:
            values["updated_at"] = self._now()

        try:
            rows = await self._backend.update(
                self.schema.table,
                values,
                [eq("id", entity_id)],
                columns=self.schema.columns,
            )
        except BackendError as e:
            logger.error(f"Error updating {self.schema.label} {entity_id}: {e.to_dict()}")
            return None

        if not rows:
            logger.error(f"Error updating {self.schema.label} {entity_id}: not found")
            return None
        return self.schema.converter(rows[0])

    async def delete(self, entity_id: str) -> bool:
        """Hard delete. True only if a row was removed."""
        try:
            deleted = await self._backend.delete(self.schema.table, [eq("id", entity_id)])
        except BackendError as e:
            logger.error(f"Error deleting {self.schema.label} {entity_id}: {e.to_dict()}")
            return False

        if not deleted:
            logger.error(f"Error deleting {self.schema.label} {entity_id}: not found")
            return False
        return True

    async def set_featured(self, entity_id: str, featured: bool) -> T | None:
        """
        Toggle the spotlight flag.

        Featuring an entity un-features every other entity of the same kind in
        the same backend write. Un-featuring touches only the target.
        """
        if not self.schema.supports_featured:
            raise TypeError(f"{self.schema.label}s do not support featuring")

        if not featured:
            return await self.update(entity_id, {"featured": False})

        stamp = {"updated_at": self._now()} if self.schema.stamps_updated_at else None
        try:
            row = await self._backend.set_exclusive_flag(
                self.schema.table, "featured", entity_id, stamp=stamp
            )
        except BackendError as e:
            logger.error(f"Error featuring {self.schema.label} {entity_id}: {e.to_dict()}")
            return None

        if row is None:
            logger.error(f"Error featuring {self.schema.label} {entity_id}: not found")
            return None
        return self.schema.converter(row)


def _to_wire(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


# ─────────────────────────────────────────────────────────────
# Schemas for the six content kinds
# ─────────────────────────────────────────────────────────────

def article_schema(has_slug_column: bool = False) -> EntitySchema:
    return EntitySchema(
        kind="article",
        table="articles",
        converter=row_to_article,
        live_status=ContentStatus.PUBLISHED.value,
        supports_featured=True,
        stripped_fields=() if has_slug_column else ("slug",),
        generates_slug=has_slug_column,
    )


VIDEO_SCHEMA = EntitySchema(
    kind="video",
    table="videos",
    converter=row_to_video,
    live_status=ContentStatus.PUBLISHED.value,
    supports_featured=True,
)

EVENT_SCHEMA = EntitySchema(
    kind="event",
    table="events",
    converter=row_to_event,
    live_status=EventStatus.UPCOMING.value,
    published_order=(Order("date"),),
    all_order=(Order("date", descending=True),),
)

EBOOK_SCHEMA = EntitySchema(
    kind="ebook",
    table="ebooks",
    converter=row_to_ebook,
    live_status=ContentStatus.PUBLISHED.value,
    supports_featured=True,
)

USER_SCHEMA = EntitySchema(
    kind="user",
    table="users",
    converter=row_to_user,
    all_order=(Order("created_at", descending=True),),
    columns=USER_PUBLIC_COLUMNS,
    stamps_updated_at=False,
    # full_name is computed by the backend
    stripped_fields=("full_name",),
)

GALLERY_SCHEMA = EntitySchema(
    kind="gallery_item",
    table="gallery",
    converter=row_to_gallery_item,
    published_order=(Order("uploaded_at", descending=True),),
    all_order=(Order("uploaded_at", descending=True),),
    server_fields=SERVER_MANAGED_FIELDS + ("uploaded_at",),
)
