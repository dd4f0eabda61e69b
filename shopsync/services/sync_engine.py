"""Synchronization engine: optimistic local state mirrored to the remote store.

Every mutation is applied to the in-memory collections synchronously, then a
RemoteWrite is handed to the adapter as a background task (connected mode
only). Remote failures are logged and recorded as unsynced writes; they never
roll back local state and are not retried.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from functools import partial
from typing import Any, Callable, Iterable

from shopsync.db.remote import RemoteStoreAdapter, RemoteWrite, Resource, WriteAction
from shopsync.errors import DuplicateOrder, OrderNotFound, PartNotFound
from shopsync.schemas.alert import InventoryAlert
from shopsync.schemas.app_config import AppConfig
from shopsync.schemas.events import ChangeEvent
from shopsync.schemas.part import Part
from shopsync.schemas.repair_order import ROStatus, RepairOrder, Technician, TECH_HELD_STATUSES
from shopsync.services import status_rules
from shopsync.services.alerts import AlertLog
from shopsync.services.ledger import Consumption, InventoryLedger

logger = logging.getLogger(__name__)

Listener = Callable[[ChangeEvent], None]


class SessionMode(str, Enum):
    CONNECTED = "connected"
    SIMULATED = "simulated"


@dataclass(frozen=True)
class UnsyncedWrite:
    """A remote write that failed after its local mutation was applied."""

    write: RemoteWrite
    error: str
    failed_at: datetime


@dataclass(frozen=True)
class InventoryUpdate:
    consumption: Consumption
    alert: InventoryAlert | None
    write: asyncio.Task | None


@dataclass(frozen=True)
class EngineSnapshot:
    mode: SessionMode
    orders: tuple[RepairOrder, ...]
    parts: tuple[Part, ...]
    alerts: tuple[InventoryAlert, ...]
    technicians: tuple[Technician, ...]
    config: AppConfig
    unsynced: tuple[UnsyncedWrite, ...]
    taken_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class SyncEngine:
    """Sole owner of the session's orders, parts and alerts."""

    def __init__(
        self,
        mode: SessionMode | str,
        adapter: RemoteStoreAdapter | None = None,
        *,
        config: AppConfig | None = None,
        technicians: Iterable[Technician] = (),
        strict_transitions: bool = True,
        orders: Iterable[RepairOrder] = (),
        parts: Iterable[Part] = (),
    ) -> None:
        self._mode = SessionMode(mode)
        if self._mode is SessionMode.CONNECTED and adapter is None:
            raise ValueError("connected mode needs a remote store adapter")
        self._adapter = adapter if self._mode is SessionMode.CONNECTED else None
        self._config = config or AppConfig()
        self._technicians = tuple(technicians)
        self._strict = strict_transitions
        self._orders: dict[str, RepairOrder] = {o.id: o for o in orders}
        self._ledger = InventoryLedger(parts)
        self._alerts = AlertLog()
        self._pending: set[asyncio.Task] = set()
        self._unsynced: list[UnsyncedWrite] = []
        self._listeners: list[Listener] = []

    # ── Read side ─────────────────────────────────────────

    @property
    def mode(self) -> SessionMode:
        return self._mode

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def strict_transitions(self) -> bool:
        return self._strict

    def orders(self) -> tuple[RepairOrder, ...]:
        return tuple(self._orders.values())

    def get_order(self, order_id: str) -> RepairOrder | None:
        return self._orders.get(order_id)

    def parts(self) -> tuple[Part, ...]:
        return self._ledger.list()

    def get_part(self, part_number: str) -> Part | None:
        return self._ledger.get(part_number) if part_number in self._ledger else None

    def low_stock(self) -> tuple[Part, ...]:
        return self._ledger.low_stock()

    def alerts(self) -> tuple[InventoryAlert, ...]:
        return self._alerts.list()

    def technicians(self) -> tuple[Technician, ...]:
        return self._technicians

    def active_order_for(self, technician_id: str) -> RepairOrder | None:
        for order in self._orders.values():
            if order.technician_id == technician_id and order.status in TECH_HELD_STATUSES:
                return order
        return None

    def unsynced_writes(self) -> tuple[UnsyncedWrite, ...]:
        return tuple(self._unsynced)

    @property
    def pending_writes(self) -> int:
        return len(self._pending)

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            mode=self._mode,
            orders=self.orders(),
            parts=self.parts(),
            alerts=self.alerts(),
            technicians=self._technicians,
            config=self._config,
            unsynced=self.unsynced_writes(),
        )

    # ── Write side ────────────────────────────────────────

    def add_order(self, order: RepairOrder) -> asyncio.Task | None:
        if order.id in self._orders:
            raise DuplicateOrder(order.id)
        status_rules.check_technician_free(order, self._orders.values())
        self._orders[order.id] = order
        record = order.to_record()
        self._emit("order_added", order.id, record)
        return self._persist(RemoteWrite(Resource.ORDERS, WriteAction.INSERT, order.id, record))

    def update_order(self, order: RepairOrder) -> asyncio.Task | None:
        """Replace the whole record with the same id. Unknown ids are a no-op."""
        current = self._orders.get(order.id)
        if current is None:
            logger.warning("Ignoring update for unknown repair order %s", order.id)
            return None
        if order.status is not current.status:
            status_rules.apply_status_change(current, order.status, strict=self._strict)
        status_rules.check_technician_free(order, self._orders.values())
        self._orders[order.id] = order
        record = order.to_record()
        self._emit("order_updated", order.id, record)
        return self._persist(RemoteWrite(Resource.ORDERS, WriteAction.UPDATE, order.id, record))

    def advance_order(self, order_id: str, status: ROStatus | str) -> asyncio.Task | None:
        current = self._require_order(order_id)
        updated = status_rules.apply_status_change(current, status, strict=self._strict)
        return self.update_order(updated)

    def assign_technician(self, order_id: str, technician_id: str | None) -> asyncio.Task | None:
        current = self._require_order(order_id)
        return self.update_order(status_rules.assign_technician(current, technician_id))

    def update_inventory(
        self, part_number: str, delta: int, reason: str, order_id: str | None
    ) -> InventoryUpdate:
        """Apply ``delta`` to a part, raise an alert if at/below reorder point, push the quantity.

        Raises PartNotFound with no side effects for an unknown part.
        """
        try:
            consumption = self._ledger.consume(part_number, delta, reason, order_id)
        except PartNotFound:
            logger.warning("Inventory change for unknown part %s dropped (ro=%s)", part_number, order_id)
            raise
        quantity = consumption.part.quantity_on_hand
        self._emit("inventory_changed", part_number, {
            "quantityOnHand": quantity,
            "previousQuantity": consumption.previous_quantity,
            "roId": order_id,
        })
        alert = None
        if consumption.alert_due:
            alert = self._alerts.raise_alert(part_number, consumption.alert_message, order_id, reason)
            self._emit("alert_raised", alert.id, alert.to_record())
        task = self._persist(RemoteWrite(
            Resource.PARTS, WriteAction.UPDATE, part_number, {"quantityOnHand": quantity},
        ))
        return InventoryUpdate(consumption=consumption, alert=alert, write=task)

    def consume_for_order(
        self, order_id: str, part_number: str, quantity: int, reason: str = "install"
    ) -> InventoryUpdate:
        """Take ``quantity`` units of a part out of stock for an order."""
        self._require_order(order_id)
        return self.update_inventory(part_number, -quantity, reason, order_id)

    def upsert_part(self, part: Part) -> asyncio.Task | None:
        """Inventory-manager edit of a master record (insert when new)."""
        is_new = self._ledger.upsert(part)
        record = part.to_record()
        self._emit("part_upserted", part.part_number, record)
        action = WriteAction.INSERT if is_new else WriteAction.UPDATE
        return self._persist(RemoteWrite(Resource.PARTS, action, part.part_number, record))

    # ── Listeners ─────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: str, key: str, data: dict[str, Any]) -> None:
        evt = ChangeEvent(event=event, key=key, data=data)
        for listener in list(self._listeners):
            try:
                listener(evt)
            except Exception:
                logger.exception("Change listener failed for %s %s", event, key)

    # ── Persistence ───────────────────────────────────────

    def _require_order(self, order_id: str) -> RepairOrder:
        order = self._orders.get(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        return order

    def _persist(self, write: RemoteWrite) -> asyncio.Task | None:
        if self._adapter is None:
            return None
        task = asyncio.get_running_loop().create_task(
            self._adapter.execute(write),
            name=f"persist:{write.resource.value}:{write.action.value}:{write.key}",
        )
        self._pending.add(task)
        task.add_done_callback(partial(self._on_write_done, write))
        return task

    def _on_write_done(self, write: RemoteWrite, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            error = "cancelled"
        else:
            exc = task.exception()
            if exc is None:
                return
            error = str(exc)
        logger.error(
            "Remote %s of %s[%s] failed; local state is ahead of remote: %s",
            write.action.value, write.resource.value, write.key, error,
        )
        self._unsynced.append(UnsyncedWrite(write, error, datetime.now(timezone.utc)))

    async def drain(self) -> None:
        """Wait until every in-flight remote write has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def close(self) -> None:
        await self.drain()
        if self._adapter is not None:
            await self._adapter.aclose()
