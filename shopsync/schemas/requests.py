"""Request bodies for the HTTP API."""

from __future__ import annotations

from shopsync.schemas.base import DomainModel
from shopsync.schemas.repair_order import LineItem, ROStatus


class OrderCreate(DomainModel):
    id: str | None = None
    customer_name: str = ""
    customer_phone: str = ""
    vessel_name: str = ""
    complaint: str = ""
    technician_id: str | None = None
    line_items: tuple[LineItem, ...] = ()
    labor_hours: float = 0.0
    notes: str = ""


class StatusChange(DomainModel):
    status: ROStatus


class TechnicianAssignment(DomainModel):
    technician_id: str | None = None


class PartsConsumption(DomainModel):
    part_number: str
    quantity: int
    reason: str = "install"


class InventoryAdjustment(DomainModel):
    delta: int
    reason: str = ""
    ro_id: str | None = None
