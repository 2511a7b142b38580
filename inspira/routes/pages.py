"""
Page routes: one response per public page, plus the admin dashboard.
"""

from fastapi import APIRouter, HTTPException

from ..schemas import (
    AdminDashboardResponse,
    ArticleDetailResponse,
    ArticleResponse,
    EbookResponse,
    EventResponse,
    EventsPageResponse,
    GalleryDetailResponse,
    GalleryItemResponse,
    GalleryPageResponse,
    LearningCenterResponse,
    UserResponse,
    VideoResponse,
)
from ..services import PageServiceDep

router = APIRouter(prefix="/pages", tags=["pages"])


@router.get("/learning-center")
async def learning_center(service: PageServiceDep) -> LearningCenterResponse:
    """Published articles, videos and e-books with the spotlight article."""
    data = await service.load_learning_center()
    featured = data["featured_article"]
    return LearningCenterResponse(
        featured_article=ArticleResponse.from_db(featured) if featured else None,
        articles=[ArticleResponse.from_db(a) for a in data["articles"]],
        videos=[VideoResponse.from_db(v) for v in data["videos"]],
        ebooks=[EbookResponse.from_db(e) for e in data["ebooks"]],
        timed_out=data.timed_out,
    )


@router.get("/articles/{slug_or_id}")
async def article_detail(slug_or_id: str, service: PageServiceDep) -> ArticleDetailResponse:
    found = await service.find_article(slug_or_id)
    if found is None:
        raise HTTPException(status_code=404, detail="Article not found")
    article, related = found
    return ArticleDetailResponse(
        article=ArticleResponse.from_db(article),
        related=[ArticleResponse.from_db(a) for a in related],
    )


@router.get("/events")
async def events_page(service: PageServiceDep) -> EventsPageResponse:
    data = await service.load_events()
    return EventsPageResponse(
        events=[EventResponse.from_db(e) for e in data["events"]],
        timed_out=data.timed_out,
    )


@router.get("/gallery")
async def gallery_page(
    service: PageServiceDep,
    category: str | None = None,
    q: str | None = None,
) -> GalleryPageResponse:
    """Gallery items, filtered by category and free-text search."""
    data = await service.load_gallery(category=category, query=q)
    return GalleryPageResponse(
        items=[GalleryItemResponse.from_db(i) for i in data["items"]],
        categories=data["categories"],
        timed_out=data.timed_out,
    )


@router.get("/gallery/{slug_or_id}")
async def gallery_detail(slug_or_id: str, service: PageServiceDep) -> GalleryDetailResponse:
    found = await service.find_gallery_item(slug_or_id)
    if found is None:
        raise HTTPException(status_code=404, detail="Gallery item not found")
    item, related = found
    return GalleryDetailResponse(
        item=GalleryItemResponse.from_db(item),
        related=[GalleryItemResponse.from_db(i) for i in related],
    )


@router.get("/admin")
async def admin_dashboard(service: PageServiceDep) -> AdminDashboardResponse:
    data = await service.load_admin_dashboard()
    return AdminDashboardResponse(
        articles=[ArticleResponse.from_db(a) for a in data["articles"]],
        videos=[VideoResponse.from_db(v) for v in data["videos"]],
        events=[EventResponse.from_db(e) for e in data["events"]],
        ebooks=[EbookResponse.from_db(e) for e in data["ebooks"]],
        gallery=[GalleryItemResponse.from_db(i) for i in data["gallery"]],
        users=[UserResponse.from_db(u) for u in data["users"]],
        timed_out=data.timed_out,
    )
