"""Error taxonomy for the synchronization core."""

from __future__ import annotations


class ShopSyncError(Exception):
    """Base class for all shopsync errors."""


# ── Remote store ──────────────────────────────────────────

class RemoteUnconfigured(ShopSyncError):
    """Connection parameters for the remote store are missing.

    Recoverable by starting the session in simulated mode.
    """

    code = "REMOTE_UNCONFIGURED"


class RemoteReadFailed(ShopSyncError):
    """The bootstrap bulk read failed. Carries the underlying cause message."""

    code = "REMOTE_READ_FAILED"


class RemoteWriteFailed(ShopSyncError):
    """An insert/update issued after a local mutation failed.

    The local change is kept; local state is now ahead of the remote store.
    """

    def __init__(self, resource: str, key: str, message: str) -> None:
        super().__init__(f"{resource}[{key}]: {message}")
        self.resource = resource
        self.key = key
        self.message = message


# ── Domain ────────────────────────────────────────────────

class PartNotFound(ShopSyncError):
    def __init__(self, part_number: str) -> None:
        super().__init__(f"Part {part_number!r} not found in inventory")
        self.part_number = part_number


class OrderNotFound(ShopSyncError):
    def __init__(self, order_id: str) -> None:
        super().__init__(f"Repair order {order_id!r} not found")
        self.order_id = order_id


class DuplicateOrder(ShopSyncError):
    def __init__(self, order_id: str) -> None:
        super().__init__(f"Repair order {order_id!r} already exists")
        self.order_id = order_id


class InvalidTransition(ShopSyncError):
    def __init__(self, order_id: str, current: str, target: str) -> None:
        super().__init__(f"Repair order {order_id!r} cannot move from {current} to {target}")
        self.order_id = order_id
        self.current = current
        self.target = target


class TechnicianBusy(ShopSyncError):
    """A technician already holds a READY_FOR_TECH or ACTIVE order."""

    def __init__(self, technician_id: str, holding_order_id: str) -> None:
        super().__init__(
            f"Technician {technician_id!r} already holds active order {holding_order_id!r}"
        )
        self.technician_id = technician_id
        self.holding_order_id = holding_order_id
