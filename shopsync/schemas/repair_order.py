from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import Field
from ulid import ULID

from shopsync.schemas.base import DomainModel


class ROStatus(str, Enum):
    """Repair order workflow stages, declared in workflow order."""

    NEW = "NEW"
    AUTHORIZED = "AUTHORIZED"
    PARTS_PENDING = "PARTS_PENDING"
    READY_FOR_TECH = "READY_FOR_TECH"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    PENDING_INVOICE = "PENDING_INVOICE"
    CLOSED = "CLOSED"


# Statuses in which a technician "holds" the order.
TECH_HELD_STATUSES = frozenset({ROStatus.READY_FOR_TECH, ROStatus.ACTIVE})


def new_order_id() -> str:
    return f"RO-{ULID()}"


class LineItem(DomainModel):
    part_number: str
    description: str = ""
    quantity: int = 1
    unit_price: float = 0.0


class RepairOrder(DomainModel):
    id: str
    customer_name: str = ""
    customer_phone: str = ""
    vessel_name: str = ""
    complaint: str = ""
    status: ROStatus = ROStatus.NEW
    technician_id: str | None = None
    line_items: tuple[LineItem, ...] = ()
    labor_hours: float = 0.0
    notes: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Technician(DomainModel):
    id: str
    name: str
    specialty: str = ""
