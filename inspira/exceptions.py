"""
HTTP exception utilities for common error patterns.

Translates the gateway's safe-default results (None / False) and its
re-raised create failures into HTTP errors.
"""

from typing import TypeVar

from fastapi import HTTPException

from .database import BackendError

T = TypeVar("T")


def require_resource(resource: T | None, detail: str = "Resource not found") -> T:
    """
    Raise 404 if resource is None, otherwise return the resource.

    Usage:
        article = require_resource(await gateway.update_article(id, fields), "Article not found")
    """
    if resource is None:
        raise HTTPException(status_code=404, detail=detail)
    return resource


def require_deleted(deleted: bool, detail: str = "Resource not found") -> None:
    """Raise 404 if a delete removed nothing (or failed)."""
    if not deleted:
        raise HTTPException(status_code=404, detail=detail)


def backend_failure(error: BackendError, action: str) -> HTTPException:
    """502 carrying the backend's message, for failed saves the operator must see."""
    detail = f"Failed to {action}: {error.message}"
    if error.hint:
        detail += f" ({error.hint})"
    return HTTPException(status_code=502, detail=detail)
