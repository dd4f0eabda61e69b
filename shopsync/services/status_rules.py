"""Repair order status transition rules."""

from __future__ import annotations

from typing import Iterable

from shopsync.errors import InvalidTransition, TechnicianBusy
from shopsync.schemas.repair_order import ROStatus, RepairOrder, TECH_HELD_STATUSES

WORKFLOW: tuple[ROStatus, ...] = tuple(ROStatus)
_RANK = {status: i for i, status in enumerate(WORKFLOW)}


def can_transition(current: ROStatus, target: ROStatus) -> bool:
    """Staying put or moving to any later stage is allowed; going back is not."""
    return _RANK[target] >= _RANK[current]


def next_statuses(current: ROStatus) -> tuple[ROStatus, ...]:
    return WORKFLOW[_RANK[current] + 1:]


def apply_status_change(
    order: RepairOrder, new_status: ROStatus | str, *, strict: bool = True
) -> RepairOrder:
    """Return a copy of ``order`` with ``new_status``; the input is left untouched.

    With ``strict=False`` any jump is accepted.
    """
    target = ROStatus(new_status)
    if strict and not can_transition(order.status, target):
        raise InvalidTransition(order.id, order.status.value, target.value)
    return order.model_copy(update={"status": target})


def assign_technician(order: RepairOrder, technician_id: str | None) -> RepairOrder:
    """Side-channel field update; does not touch the status."""
    return order.model_copy(update={"technician_id": technician_id})


def check_technician_free(candidate: RepairOrder, orders: Iterable[RepairOrder]) -> None:
    """Raise TechnicianBusy if ``candidate`` would be a technician's second held order."""
    if candidate.technician_id is None or candidate.status not in TECH_HELD_STATUSES:
        return
    for other in orders:
        if (
            other.id != candidate.id
            and other.technician_id == candidate.technician_id
            and other.status in TECH_HELD_STATUSES
        ):
            raise TechnicianBusy(candidate.technician_id, other.id)
