"""
Content API Server

FastAPI application providing endpoints for:
- Articles, videos, events, e-books and gallery items (list, create, update, delete, feature)
- Admin user management
- Page loads for the public site and the admin dashboard
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __version__
from .config import config, create_backend, state
from .database import ContentGateway
from .routes import (
    articles_router,
    videos_router,
    events_router,
    ebooks_router,
    gallery_router,
    users_router,
    pages_router,
    misc_router,
)

logger = logging.getLogger(__name__)


def memory_backend_warning(cfg) -> str:
    """Startup warning for the in-memory backend, naming why it was chosen."""
    if cfg.CONTENT_BACKEND.lower() == "memory":
        reason = "CONTENT_BACKEND=memory"
    else:
        reason = "SUPABASE_URL not set"
    return f"{reason}; content is kept in memory and lost on restart"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup application resources."""
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Startup - skip if already initialized (e.g., by tests)
    owns_gateway = state.gateway is None
    if owns_gateway:
        backend = create_backend(config)
        state.gateway = ContentGateway(backend, articles_have_slug=config.ARTICLES_HAVE_SLUG)
        logger.info(f"Content gateway initialized with {backend.name} backend")
        if backend.name == "memory":
            logger.warning(memory_backend_warning(config))

    yield

    # Shutdown
    if owns_gateway and state.gateway:
        try:
            await state.gateway.close()
        except Exception as e:
            logger.warning(f"Error closing content backend: {e}")
        state.gateway = None


app = FastAPI(
    title="Inspira Content API",
    version=__version__,
    lifespan=lifespan
)

# Include routers
app.include_router(misc_router)
app.include_router(articles_router)
app.include_router(videos_router)
app.include_router(events_router)
app.include_router(ebooks_router)
app.include_router(gallery_router)
app.include_router(users_router)
app.include_router(pages_router)
