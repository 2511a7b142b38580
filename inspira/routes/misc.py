"""
Miscellaneous routes: health check.
"""

from fastapi import APIRouter

from .. import __version__
from ..config import state

router = APIRouter(tags=["misc"])


@router.get("/status")
async def health_check() -> dict:
    """API health check."""
    return {
        "status": "ok",
        "version": __version__,
        "backend": state.gateway.backend.name if state.gateway else None,
    }
