from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    """View modes. A role is chosen by the client and is not a security boundary."""

    SERVICE_MANAGER = "SERVICE_MANAGER"
    PARTS_MANAGER = "PARTS_MANAGER"
    INVENTORY_MANAGER = "INVENTORY_MANAGER"
    TECHNICIAN = "TECHNICIAN"
    BILLING = "BILLING"
    DATABASE = "DATABASE"
    METRICS = "METRICS"
    ADMIN = "ADMIN"
