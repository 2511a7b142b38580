"""
Database models - dataclasses for content entities.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ContentStatus(str, Enum):
    """Lifecycle of articles, videos and e-books. Transitions are not enforced."""
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class EventStatus(str, Enum):
    UPCOMING = "upcoming"
    PAST = "past"


class UserRole(str, Enum):
    ADMIN = "admin"
    WRITER = "writer"


@dataclass
class DBArticle:
    id: str
    title: str
    content: str | None
    status: str
    created_at: datetime
    slug: str | None = None
    excerpt: str | None = None
    category: str | None = None
    tags: list[str] = field(default_factory=list)
    author: str | None = None
    image_url: str | None = None
    read_time: str | None = None  # Display string, e.g. "15 min"
    views: int = 0
    likes: int = 0
    featured: bool = False
    updated_at: datetime | None = None


@dataclass
class DBVideo:
    id: str
    title: str
    status: str
    created_at: datetime
    duration: str | None = None
    category: str | None = None
    video_url: str | None = None
    thumbnail: str | None = None
    views: int = 0
    featured: bool = False
    updated_at: datetime | None = None


@dataclass
class DBEvent:
    id: str
    title: str
    status: str
    created_at: datetime
    date: str | None = None  # YYYY-MM-DD, sorted as text
    time: str | None = None
    location: str | None = None
    category: str | None = None
    price: str | None = None
    spots: int | None = None
    description: str | None = None
    image_url: str | None = None
    updated_at: datetime | None = None


@dataclass
class DBEbook:
    id: str
    title: str
    status: str
    created_at: datetime
    description: str | None = None
    category: str | None = None
    pages: str | None = None
    format: str | None = None
    size: str | None = None
    file_url: str | None = None
    download_count: int = 0
    featured: bool = False
    updated_at: datetime | None = None


@dataclass
class DBUser:
    """User as returned by the gateway. Never carries credential material."""
    id: str
    username: str
    role: str
    is_active: bool
    created_at: datetime
    first_name: str | None = None
    last_name: str | None = None
    full_name: str | None = None


@dataclass
class DBGalleryItem:
    id: str
    title: str
    uploaded_at: datetime
    description: str | None = None
    category: str | None = None
    tags: list[str] = field(default_factory=list)
    image_url: str | None = None
    height: str | None = None  # Layout hint, e.g. "400px"
    slug: str | None = None
    updated_at: datetime | None = None
