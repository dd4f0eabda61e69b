import pytest

from shopsync.errors import InvalidTransition, TechnicianBusy
from shopsync.schemas import RepairOrder, ROStatus
from shopsync.services.status_rules import (
    WORKFLOW,
    apply_status_change,
    assign_technician,
    can_transition,
    check_technician_free,
    next_statuses,
)


def test_workflow_order():
    assert WORKFLOW[0] is ROStatus.NEW
    assert WORKFLOW[-1] is ROStatus.CLOSED
    assert WORKFLOW.index(ROStatus.READY_FOR_TECH) < WORKFLOW.index(ROStatus.ACTIVE)


def test_forward_step_returns_copy():
    order = RepairOrder(id="RO-1")
    updated = apply_status_change(order, ROStatus.AUTHORIZED)
    assert updated.status is ROStatus.AUTHORIZED
    assert order.status is ROStatus.NEW  # previous snapshot untouched
    assert updated is not order


def test_skipping_stages_is_allowed():
    order = RepairOrder(id="RO-1", status=ROStatus.AUTHORIZED)
    assert apply_status_change(order, "READY_FOR_TECH").status is ROStatus.READY_FOR_TECH


def test_same_status_is_allowed():
    order = RepairOrder(id="RO-1", status=ROStatus.ACTIVE)
    assert apply_status_change(order, ROStatus.ACTIVE).status is ROStatus.ACTIVE


def test_backwards_move_rejected():
    order = RepairOrder(id="RO-1", status=ROStatus.COMPLETED)
    with pytest.raises(InvalidTransition) as exc:
        apply_status_change(order, ROStatus.ACTIVE)
    assert exc.value.current == "COMPLETED"
    assert exc.value.target == "ACTIVE"


def test_permissive_mode_allows_backwards_move():
    order = RepairOrder(id="RO-1", status=ROStatus.CLOSED)
    assert apply_status_change(order, ROStatus.NEW, strict=False).status is ROStatus.NEW


def test_unknown_status_string_rejected():
    with pytest.raises(ValueError):
        apply_status_change(RepairOrder(id="RO-1"), "ON_HOLD")


def test_next_statuses():
    assert next_statuses(ROStatus.PENDING_INVOICE) == (ROStatus.CLOSED,)
    assert next_statuses(ROStatus.CLOSED) == ()
    assert can_transition(ROStatus.NEW, ROStatus.CLOSED)


def test_assign_technician_keeps_status():
    order = RepairOrder(id="RO-1", status=ROStatus.READY_FOR_TECH)
    updated = assign_technician(order, "tech-1")
    assert updated.technician_id == "tech-1"
    assert updated.status is ROStatus.READY_FOR_TECH
    assert order.technician_id is None


def test_technician_may_hold_only_one_order():
    held = RepairOrder(id="RO-1", status=ROStatus.ACTIVE, technician_id="tech-1")
    candidate = RepairOrder(id="RO-2", status=ROStatus.READY_FOR_TECH, technician_id="tech-1")
    with pytest.raises(TechnicianBusy) as exc:
        check_technician_free(candidate, [held])
    assert exc.value.holding_order_id == "RO-1"


def test_technician_check_ignores_unheld_orders():
    done = RepairOrder(id="RO-1", status=ROStatus.COMPLETED, technician_id="tech-1")
    candidate = RepairOrder(id="RO-2", status=ROStatus.ACTIVE, technician_id="tech-1")
    check_technician_free(candidate, [done, candidate])
    check_technician_free(RepairOrder(id="RO-3", status=ROStatus.ACTIVE), [candidate])
