"""
Database module - content gateway over the hosted backend.

Uses repository pattern: one generic repository per content kind, fronted by
the ContentGateway facade.
"""

from .base import BackendError, ContentBackend, Filter, Order
from .memory import InMemoryBackend
from .postgrest import PostgrestBackend
from .models import (
    ContentStatus,
    DBArticle,
    DBEbook,
    DBEvent,
    DBGalleryItem,
    DBUser,
    DBVideo,
    EventStatus,
    UserRole,
)
from .repository import ContentRepository, EntitySchema
from .database import ContentGateway

__all__ = [
    "ContentGateway",
    "ContentRepository",
    "EntitySchema",
    "ContentBackend",
    "BackendError",
    "Filter",
    "Order",
    "InMemoryBackend",
    "PostgrestBackend",
    "ContentStatus",
    "EventStatus",
    "UserRole",
    "DBArticle",
    "DBVideo",
    "DBEvent",
    "DBEbook",
    "DBUser",
    "DBGalleryItem",
]
