"""
Database row converters - convert backend rows (JSON dicts) to dataclasses.
"""

import json
from datetime import datetime, timezone

from .models import DBArticle, DBEbook, DBEvent, DBGalleryItem, DBUser, DBVideo


def parse_timestamp(value) -> datetime | None:
    """Parse an ISO-8601 timestamp from the backend. Returns None if unparseable."""
    if isinstance(value, datetime):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        # Python < 3.11 does not accept a trailing "Z"
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _created(value) -> datetime:
    return parse_timestamp(value) or datetime.now(timezone.utc)


def _int(value, default: int = 0) -> int:
    try:
        return int(value) if value is not None else default
    except (ValueError, TypeError):
        return default


def _optional_int(value) -> int | None:
    try:
        return int(value) if value is not None else None
    except (ValueError, TypeError):
        return None


def _tags(value) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        # Older rows stored tags as a JSON string
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            return [t.strip() for t in value.split(",") if t.strip()]
    if not isinstance(value, list):
        return []
    return [str(t) for t in value]


def _text(value) -> str | None:
    return None if value is None else str(value)


def row_to_article(row: dict) -> DBArticle:
    """Convert a backend row to a DBArticle."""
    return DBArticle(
        id=str(row["id"]),
        title=row.get("title") or "",
        content=row.get("content"),
        status=row.get("status") or "draft",
        created_at=_created(row.get("created_at")),
        slug=row.get("slug"),
        excerpt=row.get("excerpt"),
        category=row.get("category"),
        tags=_tags(row.get("tags")),
        author=row.get("author"),
        image_url=row.get("image_url"),
        read_time=_text(row.get("read_time")),
        views=_int(row.get("views")),
        likes=_int(row.get("likes")),
        featured=bool(row.get("featured")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )


def row_to_video(row: dict) -> DBVideo:
    """Convert a backend row to a DBVideo."""
    return DBVideo(
        id=str(row["id"]),
        title=row.get("title") or "",
        status=row.get("status") or "draft",
        created_at=_created(row.get("created_at")),
        duration=_text(row.get("duration")),
        category=row.get("category"),
        video_url=row.get("video_url"),
        thumbnail=row.get("thumbnail"),
        views=_int(row.get("views")),
        featured=bool(row.get("featured")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )


def row_to_event(row: dict) -> DBEvent:
    """Convert a backend row to a DBEvent."""
    return DBEvent(
        id=str(row["id"]),
        title=row.get("title") or "",
        status=row.get("status") or "upcoming",
        created_at=_created(row.get("created_at")),
        date=_text(row.get("date")),
        time=_text(row.get("time")),
        location=row.get("location"),
        category=row.get("category"),
        price=_text(row.get("price")),
        spots=_optional_int(row.get("spots")),
        description=row.get("description"),
        image_url=row.get("image_url"),
        updated_at=parse_timestamp(row.get("updated_at")),
    )


def row_to_ebook(row: dict) -> DBEbook:
    """Convert a backend row to a DBEbook."""
    return DBEbook(
        id=str(row["id"]),
        title=row.get("title") or "",
        status=row.get("status") or "draft",
        created_at=_created(row.get("created_at")),
        description=row.get("description"),
        category=row.get("category"),
        pages=_text(row.get("pages")),
        format=row.get("format"),
        size=_text(row.get("size")),
        file_url=row.get("file_url"),
        download_count=_int(row.get("download_count")),
        featured=bool(row.get("featured")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )


def row_to_user(row: dict) -> DBUser:
    """Convert a backend row to a DBUser. Credential columns are ignored."""
    first_name = row.get("first_name")
    last_name = row.get("last_name")
    full_name = row.get("full_name")
    if not full_name:
        full_name = " ".join(p for p in (first_name, last_name) if p) or None

    return DBUser(
        id=str(row["id"]),
        username=row.get("username") or "",
        role=row.get("role") or "writer",
        is_active=row.get("is_active") is not False,
        created_at=_created(row.get("created_at")),
        first_name=first_name,
        last_name=last_name,
        full_name=full_name,
    )


def row_to_gallery_item(row: dict) -> DBGalleryItem:
    """Convert a backend row to a DBGalleryItem."""
    return DBGalleryItem(
        id=str(row["id"]),
        title=row.get("title") or "",
        uploaded_at=_created(row.get("uploaded_at")),
        description=row.get("description"),
        category=row.get("category"),
        tags=_tags(row.get("tags")),
        image_url=row.get("image_url"),
        height=_text(row.get("height")),
        slug=row.get("slug"),
        updated_at=parse_timestamp(row.get("updated_at")),
    )
