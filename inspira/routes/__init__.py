"""
API route modules.
"""

from .content import (
    articles_router,
    videos_router,
    events_router,
    ebooks_router,
    gallery_router,
)
from .users import router as users_router
from .pages import router as pages_router
from .misc import router as misc_router

__all__ = [
    "articles_router",
    "videos_router",
    "events_router",
    "ebooks_router",
    "gallery_router",
    "users_router",
    "pages_router",
    "misc_router",
]
