"""Role-narrowed read models.

Each role sees only the slice of engine state its dashboard needs.
"""

from __future__ import annotations

from typing import Any

from shopsync.schemas.repair_order import ROStatus, RepairOrder
from shopsync.schemas.roles import UserRole
from shopsync.services.metrics import order_total, shop_metrics
from shopsync.services.sync_engine import EngineSnapshot, SyncEngine

PARTS_QUEUE_STATUSES = frozenset({ROStatus.AUTHORIZED, ROStatus.PARTS_PENDING})
BILLING_QUEUE_STATUSES = frozenset({ROStatus.COMPLETED, ROStatus.PENDING_INVOICE})


def _records(items) -> list[dict[str, Any]]:
    return [i.to_record() for i in items]


def _with_total(order: RepairOrder, hourly_rate: float) -> dict[str, Any]:
    record = order.to_record()
    record["total"] = order_total(order, hourly_rate)
    return record


def build_view(
    role: UserRole, engine: SyncEngine, technician_id: str | None = None
) -> dict[str, Any]:
    snap: EngineSnapshot = engine.snapshot()
    rate = snap.config.hourly_rate
    view: dict[str, Any] = {"role": role.value, "mode": snap.mode.value}

    if role is UserRole.SERVICE_MANAGER:
        view["repairOrders"] = _records(snap.orders)
        view["masterInventory"] = _records(snap.parts)
        view["technicians"] = _records(snap.technicians)
        view["hourlyRate"] = rate
    elif role is UserRole.PARTS_MANAGER:
        view["repairOrders"] = _records(o for o in snap.orders if o.status in PARTS_QUEUE_STATUSES)
        view["masterInventory"] = _records(snap.parts)
    elif role is UserRole.INVENTORY_MANAGER:
        view["inventory"] = _records(snap.parts)
        view["alerts"] = _records(snap.alerts)
    elif role is UserRole.TECHNICIAN:
        if technician_id is None:
            view["technicians"] = _records(snap.technicians)
            view["repairOrder"] = None
        else:
            active = engine.active_order_for(technician_id)
            view["technicianId"] = technician_id
            view["repairOrder"] = active.to_record() if active else None
    elif role is UserRole.BILLING:
        view["repairOrders"] = [
            _with_total(o, rate) for o in snap.orders if o.status in BILLING_QUEUE_STATUSES
        ]
        view["hourlyRate"] = rate
    elif role is UserRole.DATABASE:
        view["allROs"] = _records(snap.orders)
    elif role is UserRole.METRICS:
        view["metrics"] = shop_metrics(snap.orders, snap.parts, rate)
    elif role is UserRole.ADMIN:
        view["config"] = snap.config.to_record()
        view["unsyncedWrites"] = len(snap.unsynced)
    return view
