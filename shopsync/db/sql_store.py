"""Row store over any SQLAlchemy async database."""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import Table, insert, select, update
from sqlalchemy.ext.asyncio import AsyncEngine

from shopsync.db.engine import make_session_factory
from shopsync.db.remote import RowStore
from shopsync.models import Base


class SqlRowStore(RowStore):
    def __init__(self, engine: AsyncEngine, *, dispose_on_close: bool = True) -> None:
        self._engine = engine
        self._factory = make_session_factory(engine)
        self._dispose_on_close = dispose_on_close

    def _table(self, name: str) -> Table:
        try:
            return Base.metadata.tables[name]
        except KeyError as exc:
            raise LookupError(f"unknown table {name!r}") from exc

    async def select_all(self, table: str) -> list[dict[str, Any]]:
        t = self._table(table)
        async with self._factory() as db:
            result = await db.execute(select(t))
            return [dict(row) for row in result.mappings().all()]

    async def insert(self, table: str, row: Mapping[str, Any]) -> None:
        async with self._factory() as db:
            await db.execute(insert(self._table(table)).values(**row))
            await db.commit()

    async def update(
        self, table: str, key_column: str, key: str, values: Mapping[str, Any]
    ) -> None:
        t = self._table(table)
        async with self._factory() as db:
            result = await db.execute(
                update(t).where(t.c[key_column] == key).values(**values)
            )
            if result.rowcount == 0:
                await db.rollback()
                raise LookupError(f"no {table} row with {key_column}={key}")
            await db.commit()

    async def aclose(self) -> None:
        if self._dispose_on_close:
            await self._engine.dispose()
