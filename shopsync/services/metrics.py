"""Order totals and shop-level metrics."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from shopsync.schemas.part import Part
from shopsync.schemas.repair_order import ROStatus, RepairOrder

BILLABLE_STATUSES = frozenset({ROStatus.COMPLETED, ROStatus.PENDING_INVOICE, ROStatus.CLOSED})


def parts_total(order: RepairOrder) -> float:
    return round(sum(item.quantity * item.unit_price for item in order.line_items), 2)


def labor_total(order: RepairOrder, hourly_rate: float) -> float:
    return round(order.labor_hours * hourly_rate, 2)


def order_total(order: RepairOrder, hourly_rate: float) -> float:
    return round(parts_total(order) + labor_total(order, hourly_rate), 2)


def shop_metrics(
    orders: Iterable[RepairOrder], parts: Iterable[Part], hourly_rate: float
) -> dict:
    orders = list(orders)
    parts = list(parts)
    by_status = Counter(o.status.value for o in orders)
    billable = [o for o in orders if o.status in BILLABLE_STATUSES]
    return {
        "ordersByStatus": {s.value: by_status.get(s.value, 0) for s in ROStatus},
        "openOrders": sum(1 for o in orders if o.status not in BILLABLE_STATUSES),
        "billedLabor": round(sum(labor_total(o, hourly_rate) for o in billable), 2),
        "billedParts": round(sum(parts_total(o) for o in billable), 2),
        "lowStockParts": sum(1 for p in parts if p.is_low),
        "backorderedParts": sum(1 for p in parts if p.quantity_on_hand < 0),
        # Backordered quantities do not count against stock value.
        "inventoryValue": round(
            sum(max(p.quantity_on_hand, 0) * p.unit_cost for p in parts), 2
        ),
    }
