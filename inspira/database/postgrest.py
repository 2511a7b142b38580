"""
PostgREST backend - the hosted database's REST API over HTTPS.

Speaks the PostgREST dialect used by Supabase projects:
    GET    /rest/v1/articles?select=*&status=eq.published&order=created_at.desc
    POST   /rest/v1/articles            (Prefer: return=representation)
    PATCH  /rest/v1/articles?id=eq.<id>
    DELETE /rest/v1/articles?id=eq.<id>
    POST   /rest/v1/rpc/set_exclusive_flag
"""

import logging
from typing import Any, Sequence

import httpx

from .base import BackendError, ContentBackend, Filter, Order, eq, neq

logger = logging.getLogger(__name__)

EXCLUSIVE_FLAG_RPC = "set_exclusive_flag"

# PostgREST reports a missing RPC function with this code
MISSING_FUNCTION_CODE = "PGRST202"


def _encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_filter(f: Filter) -> tuple[str, str]:
    """Translate a Filter into a PostgREST query parameter."""
    if f.value is None:
        return f.column, "is.null" if f.op == "eq" else "not.is.null"
    return f.column, f"{f.op}.{_encode_value(f.value)}"


def encode_order(order: Sequence[Order]) -> str:
    """Translate sort keys into a PostgREST order parameter (nulls last)."""
    return ",".join(
        f"{o.column}.{'desc' if o.descending else 'asc'}.nullslast" for o in order
    )


class PostgrestBackend(ContentBackend):
    """Hosted backend client authenticated with a fixed project key."""

    def __init__(
        self,
        url: str,
        key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not url:
            raise ValueError("Backend URL is required")
        self.url = url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=f"{self.url}/rest/v1",
            headers={
                "apikey": key,
                "Authorization": f"Bearer {key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @property
    def name(self) -> str:
        return "postgrest"

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        params: list[tuple[str, str]] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> Any:
        headers = {"Prefer": prefer} if prefer else None
        try:
            response = await self._client.request(
                method, path, params=params, json=json, headers=headers
            )
        except httpx.HTTPError as e:
            raise BackendError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 400:
            raise self._error_from_response(response)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise BackendError(
                f"Invalid JSON from backend for {method} {path}",
                status_code=response.status_code,
            ) from e

    @staticmethod
    def _error_from_response(response: httpx.Response) -> BackendError:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        return BackendError(
            body.get("message") or f"HTTP {response.status_code}",
            code=body.get("code"),
            hint=body.get("hint"),
            details=body.get("details"),
            status_code=response.status_code,
        )

    @staticmethod
    def _params(
        columns: str | None = None,
        filters: Sequence[Filter] = (),
        order: Sequence[Order] = (),
    ) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        if columns:
            params.append(("select", columns.replace(" ", "")))
        params.extend(encode_filter(f) for f in filters)
        if order:
            params.append(("order", encode_order(order)))
        return params

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Sequence[Filter] = (),
        order: Sequence[Order] = (),
    ) -> list[dict]:
        data = await self._request("GET", f"/{table}", params=self._params(columns, filters, order))
        return data or []

    async def insert(self, table: str, row: dict, columns: str = "*") -> dict:
        data = await self._request(
            "POST",
            f"/{table}",
            params=self._params(columns),
            json=[row],
            prefer="return=representation",
        )
        if not data:
            raise BackendError(f"Insert into {table} returned no row")
        return data[0]

    async def update(
        self,
        table: str,
        values: dict,
        filters: Sequence[Filter],
        columns: str = "*",
    ) -> list[dict]:
        if not filters:
            raise ValueError("Refusing to update without filters")
        data = await self._request(
            "PATCH",
            f"/{table}",
            params=self._params(columns, filters),
            json=values,
            prefer="return=representation",
        )
        return data or []

    async def delete(self, table: str, filters: Sequence[Filter]) -> list[dict]:
        if not filters:
            raise ValueError("Refusing to delete without filters")
        data = await self._request(
            "DELETE",
            f"/{table}",
            params=self._params(None, filters),
            prefer="return=representation",
        )
        return data or []

    async def set_exclusive_flag(
        self,
        table: str,
        column: str,
        target_id: str,
        stamp: dict | None = None,
    ) -> dict | None:
        try:
            return await self._request(
                "POST",
                f"/rpc/{EXCLUSIVE_FLAG_RPC}",
                json={
                    "target_table": table,
                    "flag_column": column,
                    "target_id": target_id,
                    "stamp": stamp or {},
                },
            )
        except BackendError as e:
            if e.code != MISSING_FUNCTION_CODE and e.status_code != 404:
                raise
            logger.warning(
                f"RPC {EXCLUSIVE_FLAG_RPC} unavailable ({e.code or e.status_code}); "
                f"falling back to two-step update on {table}, which is not atomic"
            )

        await self.update(table, {column: False}, [neq("id", target_id), eq(column, True)])
        rows = await self.update(table, {column: True, **(stamp or {})}, [eq("id", target_id)])
        return rows[0] if rows else None
