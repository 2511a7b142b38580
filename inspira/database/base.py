"""
Hosted backend interface.

Defines the request/response contract the content gateway consumes. Any
backend (the hosted PostgREST API, the in-memory double) implements it, so
the gateway can be moved onto a different store without touching callers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence


class BackendError(Exception):
    """A failed backend call, carrying whatever detail the backend reported."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        hint: str | None = None,
        details: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.hint = hint
        self.details = details
        self.status_code = status_code

    def to_dict(self) -> dict:
        """Full error detail, for logging."""
        return {
            "message": self.message,
            "code": self.code,
            "hint": self.hint,
            "details": self.details,
            "status_code": self.status_code,
        }


@dataclass(frozen=True)
class Filter:
    """A column predicate. Supported ops: eq, neq."""
    column: str
    op: str
    value: Any

    def matches(self, row: dict) -> bool:
        actual = row.get(self.column)
        if self.op == "eq":
            return actual == self.value
        if self.op == "neq":
            return actual != self.value
        raise ValueError(f"Unsupported filter op: {self.op}")


def eq(column: str, value: Any) -> Filter:
    return Filter(column, "eq", value)


def neq(column: str, value: Any) -> Filter:
    return Filter(column, "neq", value)


@dataclass(frozen=True)
class Order:
    """Sort key for a select."""
    column: str
    descending: bool = False


class ContentBackend(ABC):
    """
    Abstract hosted backend.

    Each method is a single round trip. Implementations raise BackendError on
    failure and never swallow errors; the failure policy belongs to the
    gateway.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name for logs (e.g., 'postgrest', 'memory')."""
        pass

    @abstractmethod
    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Sequence[Filter] = (),
        order: Sequence[Order] = (),
    ) -> list[dict]:
        """Return rows matching all filters, sorted by the given keys."""
        pass

    @abstractmethod
    async def insert(self, table: str, row: dict, columns: str = "*") -> dict:
        """Insert one row and return it as stored (with generated id/timestamps)."""
        pass

    @abstractmethod
    async def update(
        self,
        table: str,
        values: dict,
        filters: Sequence[Filter],
        columns: str = "*",
    ) -> list[dict]:
        """Apply values to every matching row. Returns the updated rows."""
        pass

    @abstractmethod
    async def delete(self, table: str, filters: Sequence[Filter]) -> list[dict]:
        """Delete matching rows. Returns the deleted rows."""
        pass

    @abstractmethod
    async def set_exclusive_flag(
        self,
        table: str,
        column: str,
        target_id: str,
        stamp: dict | None = None,
    ) -> dict | None:
        """
        Make target_id the only row with column = true, in one write.

        Args:
            table: Table name
            column: Boolean flag column
            target_id: Row that ends up flagged
            stamp: Extra values written to the target row only (e.g. updated_at)

        Returns:
            The target row, or None if no row has that id
        """
        pass

    async def aclose(self) -> None:
        """Release network resources. Default: nothing to release."""
        return None
