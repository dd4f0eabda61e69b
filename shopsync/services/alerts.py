"""Low-stock alert log."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from ulid import ULID

from shopsync.schemas.alert import InventoryAlert

logger = logging.getLogger(__name__)


class AlertLog:
    """Append-only, newest-first log of InventoryAlerts for the session.

    There is no deduplication: every qualifying mutation is its own record.
    """

    def __init__(self) -> None:
        self._alerts: list[InventoryAlert] = []

    def __len__(self) -> int:
        return len(self._alerts)

    def raise_alert(
        self, part_number: str, message: str, order_id: str | None, reason: str
    ) -> InventoryAlert:
        alert = InventoryAlert(
            id=f"alert-{ULID()}",
            part_number=part_number,
            message=message,
            ro_id=order_id,
            reason=reason,
            timestamp=datetime.now(timezone.utc),
        )
        self._alerts.insert(0, alert)
        logger.info("Inventory alert %s: %s (ro=%s, reason=%s)", alert.id, message, order_id, reason)
        return alert

    def list(self) -> tuple[InventoryAlert, ...]:
        return tuple(self._alerts)
