"""Row store speaking PostgREST (Supabase) conventions over httpx."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from shopsync.db.remote import RowStore

logger = logging.getLogger(__name__)


class RestRowStore(RowStore):
    """``/rest/v1/<table>`` with ``apikey`` + bearer auth and ``eq.`` filters."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._client.headers.update(headers)
        self._base = base_url.rstrip("/") + "/rest/v1"

    def _url(self, table: str) -> str:
        return f"{self._base}/{table}"

    async def select_all(self, table: str) -> list[dict[str, Any]]:
        r = await self._client.get(self._url(table), params={"select": "*"})
        r.raise_for_status()
        rows = r.json() or []
        logger.debug("Fetched %d rows from %s", len(rows), table)
        return rows

    async def insert(self, table: str, row: Mapping[str, Any]) -> None:
        r = await self._client.post(
            self._url(table), json=[dict(row)], headers={"Prefer": "return=minimal"}
        )
        r.raise_for_status()

    async def update(
        self, table: str, key_column: str, key: str, values: Mapping[str, Any]
    ) -> None:
        r = await self._client.patch(
            self._url(table),
            params={key_column: f"eq.{key}"},
            json=dict(values),
            headers={"Prefer": "return=representation"},
        )
        r.raise_for_status()
        if not r.json():
            raise LookupError(f"no {table} row with {key_column}={key}")

    async def aclose(self) -> None:
        await self._client.aclose()
