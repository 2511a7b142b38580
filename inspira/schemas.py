"""
Pydantic models for API request/response validation.
"""

from pydantic import BaseModel

from .database import DBArticle, DBEbook, DBEvent, DBGalleryItem, DBUser, DBVideo


def _iso(value) -> str | None:
    return value.isoformat() if value else None


class UpdateRequest(BaseModel):
    """Base for partial updates: only fields the client sent are written."""

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class FeaturedRequest(BaseModel):
    featured: bool = True


# ─────────────────────────────────────────────────────────────
# Article Schemas
# ─────────────────────────────────────────────────────────────

class ArticleResponse(BaseModel):
    id: str
    title: str
    slug: str | None = None
    content: str | None = None
    excerpt: str | None = None
    category: str | None = None
    tags: list[str] = []
    author: str | None = None
    image_url: str | None = None
    read_time: str | None = None
    status: str
    views: int = 0
    likes: int = 0
    featured: bool = False
    created_at: str
    updated_at: str | None = None

    @classmethod
    def from_db(cls, article: DBArticle) -> "ArticleResponse":
        return cls(
            id=article.id,
            title=article.title,
            slug=article.slug,
            content=article.content,
            excerpt=article.excerpt,
            category=article.category,
            tags=article.tags,
            author=article.author,
            image_url=article.image_url,
            read_time=article.read_time,
            status=article.status,
            views=article.views,
            likes=article.likes,
            featured=article.featured,
            created_at=article.created_at.isoformat(),
            updated_at=_iso(article.updated_at),
        )


class CreateArticleRequest(BaseModel):
    title: str
    slug: str | None = None
    content: str = ""
    excerpt: str = ""
    category: str = "Tutorial"
    tags: list[str] = []
    author: str = "Admin"
    image_url: str | None = None
    read_time: str | None = None
    status: str = "published"
    featured: bool = False


class UpdateArticleRequest(UpdateRequest):
    title: str | None = None
    slug: str | None = None
    content: str | None = None
    excerpt: str | None = None
    category: str | None = None
    tags: list[str] | None = None
    author: str | None = None
    image_url: str | None = None
    read_time: str | None = None
    status: str | None = None
    views: int | None = None
    likes: int | None = None


# ─────────────────────────────────────────────────────────────
# Video Schemas
# ─────────────────────────────────────────────────────────────

class VideoResponse(BaseModel):
    id: str
    title: str
    duration: str | None = None
    category: str | None = None
    video_url: str | None = None
    thumbnail: str | None = None
    views: int = 0
    status: str
    featured: bool = False
    created_at: str
    updated_at: str | None = None

    @classmethod
    def from_db(cls, video: DBVideo) -> "VideoResponse":
        return cls(
            id=video.id,
            title=video.title,
            duration=video.duration,
            category=video.category,
            video_url=video.video_url,
            thumbnail=video.thumbnail,
            views=video.views,
            status=video.status,
            featured=video.featured,
            created_at=video.created_at.isoformat(),
            updated_at=_iso(video.updated_at),
        )


class CreateVideoRequest(BaseModel):
    title: str
    duration: str | None = None
    category: str = "Tutorial"
    video_url: str | None = None
    thumbnail: str | None = None
    status: str = "published"
    featured: bool = False


class UpdateVideoRequest(UpdateRequest):
    title: str | None = None
    duration: str | None = None
    category: str | None = None
    video_url: str | None = None
    thumbnail: str | None = None
    views: int | None = None
    status: str | None = None


# ─────────────────────────────────────────────────────────────
# Event Schemas
# ─────────────────────────────────────────────────────────────

class EventResponse(BaseModel):
    id: str
    title: str
    date: str | None = None
    time: str | None = None
    location: str | None = None
    category: str | None = None
    price: str | None = None
    spots: int | None = None
    description: str | None = None
    image_url: str | None = None
    status: str
    created_at: str
    updated_at: str | None = None

    @classmethod
    def from_db(cls, event: DBEvent) -> "EventResponse":
        return cls(
            id=event.id,
            title=event.title,
            date=event.date,
            time=event.time,
            location=event.location,
            category=event.category,
            price=event.price,
            spots=event.spots,
            description=event.description,
            image_url=event.image_url,
            status=event.status,
            created_at=event.created_at.isoformat(),
            updated_at=_iso(event.updated_at),
        )


class CreateEventRequest(BaseModel):
    title: str
    date: str
    time: str | None = None
    location: str | None = None
    category: str = "Workshop"
    price: str | None = None
    spots: int | None = None
    description: str = ""
    image_url: str | None = None
    status: str = "upcoming"


class UpdateEventRequest(UpdateRequest):
    title: str | None = None
    date: str | None = None
    time: str | None = None
    location: str | None = None
    category: str | None = None
    price: str | None = None
    spots: int | None = None
    description: str | None = None
    image_url: str | None = None
    status: str | None = None


# ─────────────────────────────────────────────────────────────
# Ebook Schemas
# ─────────────────────────────────────────────────────────────

class EbookResponse(BaseModel):
    id: str
    title: str
    description: str | None = None
    category: str | None = None
    pages: str | None = None
    format: str | None = None
    size: str | None = None
    file_url: str | None = None
    download_count: int = 0
    status: str
    featured: bool = False
    created_at: str
    updated_at: str | None = None

    @classmethod
    def from_db(cls, ebook: DBEbook) -> "EbookResponse":
        return cls(
            id=ebook.id,
            title=ebook.title,
            description=ebook.description,
            category=ebook.category,
            pages=ebook.pages,
            format=ebook.format,
            size=ebook.size,
            file_url=ebook.file_url,
            download_count=ebook.download_count,
            status=ebook.status,
            featured=ebook.featured,
            created_at=ebook.created_at.isoformat(),
            updated_at=_iso(ebook.updated_at),
        )


class CreateEbookRequest(BaseModel):
    title: str
    description: str = ""
    category: str = "Panduan"
    pages: str | None = None
    format: str = "PDF"
    size: str | None = None
    file_url: str | None = None
    status: str = "published"
    featured: bool = False


class UpdateEbookRequest(UpdateRequest):
    title: str | None = None
    description: str | None = None
    category: str | None = None
    pages: str | None = None
    format: str | None = None
    size: str | None = None
    file_url: str | None = None
    download_count: int | None = None
    status: str | None = None


# ─────────────────────────────────────────────────────────────
# Gallery Schemas
# ─────────────────────────────────────────────────────────────

class GalleryItemResponse(BaseModel):
    id: str
    title: str
    slug: str | None = None
    description: str | None = None
    category: str | None = None
    tags: list[str] = []
    image_url: str | None = None
    height: str | None = None
    uploaded_at: str
    updated_at: str | None = None

    @classmethod
    def from_db(cls, item: DBGalleryItem) -> "GalleryItemResponse":
        return cls(
            id=item.id,
            title=item.title,
            slug=item.slug,
            description=item.description,
            category=item.category,
            tags=item.tags,
            image_url=item.image_url,
            height=item.height,
            uploaded_at=item.uploaded_at.isoformat(),
            updated_at=_iso(item.updated_at),
        )


class CreateGalleryItemRequest(BaseModel):
    title: str
    description: str = ""
    category: str = "fashion"
    tags: list[str] = []
    image_url: str
    height: str = "400px"


class UpdateGalleryItemRequest(UpdateRequest):
    title: str | None = None
    description: str | None = None
    category: str | None = None
    tags: list[str] | None = None
    image_url: str | None = None
    height: str | None = None


# ─────────────────────────────────────────────────────────────
# User Schemas
# ─────────────────────────────────────────────────────────────

class UserResponse(BaseModel):
    """User for the admin list. No credential fields."""
    id: str
    username: str
    first_name: str | None = None
    last_name: str | None = None
    full_name: str | None = None
    role: str
    is_active: bool
    created_at: str

    @classmethod
    def from_db(cls, user: DBUser) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            first_name=user.first_name,
            last_name=user.last_name,
            full_name=user.full_name,
            role=user.role,
            is_active=user.is_active,
            created_at=user.created_at.isoformat(),
        )


class CreateUserRequest(BaseModel):
    username: str
    password: str
    first_name: str = ""
    last_name: str = ""
    role: str = "writer"
    is_active: bool = True


class UpdateUserRequest(UpdateRequest):
    username: str | None = None
    password: str | None = None  # Empty or missing keeps the current hash
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None
    is_active: bool | None = None


# ─────────────────────────────────────────────────────────────
# Page Schemas
# ─────────────────────────────────────────────────────────────

class LearningCenterResponse(BaseModel):
    featured_article: ArticleResponse | None = None
    articles: list[ArticleResponse]
    videos: list[VideoResponse]
    ebooks: list[EbookResponse]
    timed_out: bool = False


class EventsPageResponse(BaseModel):
    events: list[EventResponse]
    timed_out: bool = False


class GalleryPageResponse(BaseModel):
    items: list[GalleryItemResponse]
    categories: dict[str, int]
    timed_out: bool = False


class GalleryDetailResponse(BaseModel):
    item: GalleryItemResponse
    related: list[GalleryItemResponse]


class ArticleDetailResponse(BaseModel):
    article: ArticleResponse
    related: list[ArticleResponse]


class AdminDashboardResponse(BaseModel):
    articles: list[ArticleResponse]
    videos: list[VideoResponse]
    events: list[EventResponse]
    ebooks: list[EbookResponse]
    gallery: list[GalleryItemResponse]
    users: list[UserResponse]
    timed_out: bool = False
