"""
Content routes: list, create, update, delete and feature for each content kind.

Every kind gets the same endpoints, so the routers are built from one factory:
    GET    /{kind}                published (or upcoming) items
    GET    /{kind}/all            everything, for the admin dashboard
    POST   /{kind}                create
    PUT    /{kind}/{id}           partial update
    DELETE /{kind}/{id}           hard delete
    POST   /{kind}/{id}/featured  spotlight toggle (articles, videos, ebooks)
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..config import get_gateway
from ..database import BackendError, ContentGateway
from ..exceptions import backend_failure, require_deleted, require_resource
from ..schemas import (
    ArticleResponse,
    CreateArticleRequest,
    CreateEbookRequest,
    CreateEventRequest,
    CreateGalleryItemRequest,
    CreateVideoRequest,
    EbookResponse,
    EventResponse,
    FeaturedRequest,
    GalleryItemResponse,
    UpdateArticleRequest,
    UpdateEbookRequest,
    UpdateEventRequest,
    UpdateGalleryItemRequest,
    UpdateVideoRequest,
    VideoResponse,
)

GatewayDep = Annotated[ContentGateway, Depends(get_gateway)]


def build_content_router(
    kind: str,
    label: str,
    response_model: type[BaseModel],
    create_model: type[BaseModel],
    update_model: type[BaseModel],
    featurable: bool = False,
) -> APIRouter:
    """Build the CRUD router for one content kind."""
    router = APIRouter(prefix=f"/{kind}", tags=[kind])
    not_found = f"{label.capitalize()} not found"

    @router.get("")
    async def list_published(gateway: GatewayDep) -> list[response_model]:
        """Live items for the public pages."""
        items = await gateway.repository(kind).list_published()
        return [response_model.from_db(i) for i in items]

    @router.get("/all")
    async def list_all(gateway: GatewayDep) -> list[response_model]:
        """All items regardless of status."""
        items = await gateway.repository(kind).list_all()
        return [response_model.from_db(i) for i in items]

    @router.post("")
    async def create(request: create_model, gateway: GatewayDep) -> response_model:
        try:
            item = await gateway.repository(kind).create(request.model_dump())
        except BackendError as e:
            raise backend_failure(e, f"create {label}")
        return response_model.from_db(item)

    @router.put("/{item_id}")
    async def update(item_id: str, request: update_model, gateway: GatewayDep) -> response_model:
        item = await gateway.repository(kind).update(item_id, request.changes())
        return response_model.from_db(require_resource(item, not_found))

    @router.delete("/{item_id}")
    async def delete(item_id: str, gateway: GatewayDep) -> dict:
        require_deleted(await gateway.repository(kind).delete(item_id), not_found)
        return {"success": True}

    if featurable:
        @router.post("/{item_id}/featured")
        async def set_featured(
            item_id: str, request: FeaturedRequest, gateway: GatewayDep
        ) -> response_model:
            """Feature this item (un-featuring all others) or un-feature it."""
            item = await gateway.repository(kind).set_featured(item_id, request.featured)
            return response_model.from_db(require_resource(item, not_found))

    return router


articles_router = build_content_router(
    "articles", "article", ArticleResponse, CreateArticleRequest, UpdateArticleRequest,
    featurable=True,
)
videos_router = build_content_router(
    "videos", "video", VideoResponse, CreateVideoRequest, UpdateVideoRequest,
    featurable=True,
)
events_router = build_content_router(
    "events", "event", EventResponse, CreateEventRequest, UpdateEventRequest,
)
ebooks_router = build_content_router(
    "ebooks", "ebook", EbookResponse, CreateEbookRequest, UpdateEbookRequest,
    featurable=True,
)
gallery_router = build_content_router(
    "gallery", "gallery item", GalleryItemResponse, CreateGalleryItemRequest, UpdateGalleryItemRequest,
)
