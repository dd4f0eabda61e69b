from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import Field

from shopsync.schemas.base import DomainModel


class ChangeEvent(DomainModel):
    # order_added | order_updated | inventory_changed | part_upserted | alert_raised
    event: str
    key: str
    data: dict[str, Any] = {}
    at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
