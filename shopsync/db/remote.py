"""Remote store boundary: row-store interface, write commands and the adapter."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from shopsync.db.field_map import ORDER_FIELDS, PART_FIELDS, FieldMap, check_field_maps
from shopsync.errors import RemoteReadFailed, RemoteWriteFailed
from shopsync.schemas.part import Part
from shopsync.schemas.repair_order import RepairOrder


class Resource(str, Enum):
    ORDERS = "repair_orders"
    PARTS = "master_inventory"


class WriteAction(str, Enum):
    INSERT = "insert"
    UPDATE = "update"


@dataclass(frozen=True)
class RemoteWrite:
    """A persistence intent. ``payload`` uses engine (camelCase) field names."""

    resource: Resource
    action: WriteAction
    key: str
    payload: Mapping[str, Any] = field(default_factory=dict)


class RowStore(ABC):
    """Generic key-rows CRUD store addressed by table name and snake_case columns."""

    @abstractmethod
    async def select_all(self, table: str) -> list[dict[str, Any]]: ...

    @abstractmethod
    async def insert(self, table: str, row: Mapping[str, Any]) -> None: ...

    @abstractmethod
    async def update(
        self, table: str, key_column: str, key: str, values: Mapping[str, Any]
    ) -> None:
        """Update one row by primary key. Must raise LookupError if no row matched."""

    async def aclose(self) -> None:
        return None


_FIELD_MAPS: dict[Resource, FieldMap] = {
    Resource.ORDERS: ORDER_FIELDS,
    Resource.PARTS: PART_FIELDS,
}


class RemoteStoreAdapter:
    """Translates engine records to rows and issues the row-store calls."""

    def __init__(self, store: RowStore, tables: Mapping[Resource, str] | None = None) -> None:
        check_field_maps()
        self.store = store
        self._tables = {r: r.value for r in Resource}
        self._tables.update(tables or {})

    def table(self, resource: Resource) -> str:
        return self._tables[resource]

    async def fetch_orders(self) -> list[RepairOrder]:
        return await self._fetch(Resource.ORDERS, RepairOrder)

    async def fetch_parts(self) -> list[Part]:
        return await self._fetch(Resource.PARTS, Part)

    async def _fetch(self, resource: Resource, model):
        fmap = _FIELD_MAPS[resource]
        try:
            rows = await self.store.select_all(self.table(resource))
            return [model.model_validate(fmap.from_row(row)) for row in rows]
        except Exception as exc:
            raise RemoteReadFailed(f"{resource.value}: {str(exc) or type(exc).__name__}") from exc

    async def execute(self, write: RemoteWrite) -> None:
        """Issue exactly one row-store call for ``write``."""
        fmap = _FIELD_MAPS[write.resource]
        table = self.table(write.resource)
        try:
            row = fmap.to_row(write.payload)
            if write.action is WriteAction.INSERT:
                await self.store.insert(table, row)
            else:
                await self.store.update(table, fmap.key_column, write.key, row)
        except Exception as exc:
            raise RemoteWriteFailed(
                write.resource.value, write.key, str(exc) or type(exc).__name__
            ) from exc

    async def aclose(self) -> None:
        await self.store.aclose()
