"""
Service layer for caller-side logic.

Services sit between routes and the content gateway, keeping routes as thin
HTTP adapters. Each service receives the gateway via constructor injection.

Usage in routes:
    from ..services import PageServiceDep

    @router.get("/pages/events")
    async def events_page(service: PageServiceDep):
        return await service.load_events()
"""

from typing import Annotated

from fastapi import Depends

from ..config import config, get_gateway
from ..database import ContentGateway

from .page_service import PageService, PageData, category_counts, filter_gallery
from .user_service import UserService, check_password, hash_password

__all__ = [
    # Services
    "PageService",
    "PageData",
    "UserService",
    # Helpers
    "category_counts",
    "filter_gallery",
    "hash_password",
    "check_password",
    # Dependency factories
    "get_page_service",
    "get_user_service",
    # Type aliases for dependency injection
    "PageServiceDep",
    "UserServiceDep",
]


def get_page_service(gateway: Annotated[ContentGateway, Depends(get_gateway)]) -> PageService:
    """Dependency to get PageService instance."""
    return PageService(gateway=gateway, load_timeout=config.CONTENT_LOAD_TIMEOUT)


def get_user_service(gateway: Annotated[ContentGateway, Depends(get_gateway)]) -> UserService:
    """Dependency to get UserService instance."""
    return UserService(gateway=gateway)


PageServiceDep = Annotated[PageService, Depends(get_page_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
