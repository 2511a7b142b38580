"""
In-memory backend - single-process stand-in for the hosted database.

Used by the test suite and for local development when no hosted backend is
configured. Rows round-trip as plain dicts with ISO-8601 timestamp strings,
the same shape the hosted API returns.
"""

import asyncio
import copy
import uuid
from datetime import datetime, timezone
from typing import Callable, Sequence

from .base import BackendError, ContentBackend, Filter, Order

# Column the backend stamps on insert, per table
CREATION_COLUMNS = {
    "gallery": "uploaded_at",
}
DEFAULT_CREATION_COLUMN = "created_at"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _project(row: dict, columns: str) -> dict:
    if columns.strip() == "*":
        return copy.deepcopy(row)
    wanted = [c.strip() for c in columns.split(",") if c.strip()]
    return {c: copy.deepcopy(row.get(c)) for c in wanted}


def _sort_rows(rows: list[dict], order: Sequence[Order]) -> list[dict]:
    # Stable sorts applied from the least significant key; nulls always last
    result = list(rows)
    for key in reversed(order):
        present = [r for r in result if r.get(key.column) is not None]
        missing = [r for r in result if r.get(key.column) is None]
        present.sort(key=lambda r: r[key.column], reverse=key.descending)
        result = present + missing
    return result


class InMemoryBackend(ContentBackend):
    """Dict-of-lists backend with the same contract as the hosted API."""

    def __init__(
        self,
        clock: Callable[[], datetime] | None = None,
        creation_columns: dict[str, str] | None = None,
    ):
        self._clock = clock or _utcnow
        self._creation_columns = dict(CREATION_COLUMNS)
        if creation_columns:
            self._creation_columns.update(creation_columns)
        self._tables: dict[str, list[dict]] = {}
        self._lock = asyncio.Lock()
        # table -> operation names that raise BackendError
        self.fail_on: dict[str, set[str]] = {}

    @property
    def name(self) -> str:
        return "memory"

    def fail(self, table: str, *operations: str):
        """Make the given operations on table raise BackendError."""
        self.fail_on.setdefault(table, set()).update(operations)

    def recover(self, table: str | None = None):
        """Clear injected failures for one table, or all tables."""
        if table is None:
            self.fail_on.clear()
        else:
            self.fail_on.pop(table, None)

    def rows(self, table: str) -> list[dict]:
        """Raw stored rows, for assertions."""
        return copy.deepcopy(self._tables.get(table, []))

    def _check(self, table: str, operation: str):
        if operation in self.fail_on.get(table, set()):
            raise BackendError(
                f"Simulated {operation} failure on {table}",
                code="SIMULATED",
                hint="Injected with InMemoryBackend.fail()",
                status_code=503,
            )

    def _matching(self, table: str, filters: Sequence[Filter]) -> list[dict]:
        return [
            row for row in self._tables.get(table, [])
            if all(f.matches(row) for f in filters)
        ]

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Sequence[Filter] = (),
        order: Sequence[Order] = (),
    ) -> list[dict]:
        self._check(table, "select")
        rows = _sort_rows(self._matching(table, filters), order)
        return [_project(r, columns) for r in rows]

    async def insert(self, table: str, row: dict, columns: str = "*") -> dict:
        self._check(table, "insert")
        stored = copy.deepcopy(row)
        stored["id"] = str(uuid.uuid4())
        creation_column = self._creation_columns.get(table, DEFAULT_CREATION_COLUMN)
        stored.setdefault(creation_column, self._clock().isoformat())
        self._tables.setdefault(table, []).append(stored)
        return _project(stored, columns)

    async def update(
        self,
        table: str,
        values: dict,
        filters: Sequence[Filter],
        columns: str = "*",
    ) -> list[dict]:
        self._check(table, "update")
        updated = []
        for row in self._matching(table, filters):
            row.update(copy.deepcopy(values))
            updated.append(_project(row, columns))
        return updated

    async def delete(self, table: str, filters: Sequence[Filter]) -> list[dict]:
        self._check(table, "delete")
        doomed = self._matching(table, filters)
        doomed_ids = {id(r) for r in doomed}
        self._tables[table] = [
            r for r in self._tables.get(table, []) if id(r) not in doomed_ids
        ]
        return [copy.deepcopy(r) for r in doomed]

    async def set_exclusive_flag(
        self,
        table: str,
        column: str,
        target_id: str,
        stamp: dict | None = None,
    ) -> dict | None:
        self._check(table, "update")
        async with self._lock:
            rows = self._tables.get(table, [])
            target = next((r for r in rows if r.get("id") == target_id), None)
            if target is None:
                return None
            for row in rows:
                if row is target:
                    row[column] = True
                elif row.get(column):
                    row[column] = False
            if stamp:
                target.update(copy.deepcopy(stamp))
            return copy.deepcopy(target)
