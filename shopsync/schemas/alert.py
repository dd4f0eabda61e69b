from __future__ import annotations

from datetime import datetime

from shopsync.schemas.base import DomainModel


class InventoryAlert(DomainModel):
    """Audit record of one low-stock threshold event. Never mutated."""

    id: str
    part_number: str
    message: str
    ro_id: str | None = None
    reason: str = ""
    timestamp: datetime
