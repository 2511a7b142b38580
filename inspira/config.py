"""
Configuration and application state management.
"""

import os
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from fastapi import HTTPException

if TYPE_CHECKING:
    from .database import ContentBackend, ContentGateway

# Load environment variables
load_dotenv()


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse boolean from environment variable."""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


class Config:
    """Application configuration from environment."""
    # Hosted backend (Supabase project URL and key)
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")

    # "postgrest", "memory", or "auto" (postgrest when SUPABASE_URL is set)
    CONTENT_BACKEND: str = os.getenv("CONTENT_BACKEND", "auto")

    BACKEND_TIMEOUT: float = float(os.getenv("BACKEND_TIMEOUT", "10"))
    CONTENT_LOAD_TIMEOUT: float = float(os.getenv("CONTENT_LOAD_TIMEOUT", "8"))

    # The original articles table has no slug column
    ARTICLES_HAVE_SLUG: bool = _parse_bool(os.getenv("ARTICLES_HAVE_SLUG"), default=False)

    PORT: int = int(os.getenv("PORT", "5005"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def backend_kind(cls) -> str:
        """Resolve CONTENT_BACKEND=auto to a concrete backend name."""
        kind = cls.CONTENT_BACKEND.lower()
        if kind == "auto":
            return "postgrest" if cls.SUPABASE_URL else "memory"
        if kind not in ("postgrest", "memory"):
            raise ValueError(f"Unknown CONTENT_BACKEND: {cls.CONTENT_BACKEND}")
        return kind


config = Config()


def create_backend(cfg: Config = config) -> "ContentBackend":
    """Build the backend selected by configuration."""
    from .database import InMemoryBackend, PostgrestBackend

    if cfg.backend_kind() == "postgrest":
        return PostgrestBackend(cfg.SUPABASE_URL, cfg.SUPABASE_KEY, timeout=cfg.BACKEND_TIMEOUT)
    return InMemoryBackend()


class AppState:
    """Shared application state."""
    gateway: "ContentGateway | None" = None


state = AppState()


def get_gateway() -> "ContentGateway":
    """Dependency to get the content gateway instance."""
    if not state.gateway:
        raise HTTPException(status_code=500, detail="Content gateway not initialized")
    return state.gateway
