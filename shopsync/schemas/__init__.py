"""Pydantic domain records and request schemas."""

from shopsync.schemas.base import DomainModel
from shopsync.schemas.repair_order import (
    LineItem, RepairOrder, ROStatus, Technician, TECH_HELD_STATUSES, new_order_id,
)
from shopsync.schemas.part import Part
from shopsync.schemas.alert import InventoryAlert
from shopsync.schemas.app_config import AppConfig, ThemeColors
from shopsync.schemas.roles import UserRole
from shopsync.schemas.events import ChangeEvent
from shopsync.schemas.requests import (
    InventoryAdjustment, OrderCreate, PartsConsumption, StatusChange, TechnicianAssignment,
)

__all__ = [
    "DomainModel",
    "LineItem", "RepairOrder", "ROStatus", "Technician", "TECH_HELD_STATUSES", "new_order_id",
    "Part",
    "InventoryAlert",
    "AppConfig", "ThemeColors",
    "UserRole",
    "ChangeEvent",
    "InventoryAdjustment", "OrderCreate", "PartsConsumption", "StatusChange", "TechnicianAssignment",
]
