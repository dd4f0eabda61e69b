import pytest

from shopsync.db.remote import Resource, WriteAction
from shopsync.errors import (
    DuplicateOrder,
    InvalidTransition,
    OrderNotFound,
    PartNotFound,
    RemoteWriteFailed,
    TechnicianBusy,
)
from shopsync.schemas import LineItem, Part, RepairOrder, ROStatus
from shopsync.services.sync_engine import SessionMode, SyncEngine


# ── Inventory scenarios ──────────────────────────────────────────────

async def test_consume_at_threshold_raises_one_alert(connected_engine):
    result = connected_engine.update_inventory("ENG-001", -1, "install", "RO-10")
    assert connected_engine.get_part("ENG-001").quantity_on_hand == 4
    alerts = connected_engine.alerts()
    assert len(alerts) == 1
    assert alerts[0].part_number == "ENG-001"
    assert alerts[0].ro_id == "RO-10"
    assert alerts[0].message == "Low stock: Impeller kit"
    assert result.alert == alerts[0]
    await connected_engine.drain()


async def test_consume_above_threshold_no_alert(simulated_engine):
    simulated_engine.upsert_part(Part(part_number="ENG-001", description="Impeller kit",
                                      quantity_on_hand=10, reorder_point=5))
    simulated_engine.update_inventory("ENG-001", -2, "install", "RO-10")
    assert simulated_engine.get_part("ENG-001").quantity_on_hand == 8
    assert simulated_engine.alerts() == ()


async def test_unknown_part_has_no_side_effects(connected_engine, store):
    before = connected_engine.parts()
    with pytest.raises(PartNotFound):
        connected_engine.update_inventory("UNKNOWN-PART", -1, "install", "RO-10")
    assert connected_engine.parts() == before
    assert connected_engine.alerts() == ()
    assert store.writes == []


async def test_same_consumption_twice_gives_two_alerts(simulated_engine):
    simulated_engine.update_inventory("ENG-001", -1, "install", "RO-10")
    simulated_engine.update_inventory("ENG-001", -1, "install", "RO-10")
    alerts = simulated_engine.alerts()
    assert len(alerts) == 2
    assert alerts[0].id != alerts[1].id
    assert simulated_engine.get_part("ENG-001").quantity_on_hand == 3


async def test_inventory_push_sends_only_quantity(connected_engine, store):
    task = connected_engine.update_inventory("ENG-001", -1, "install", "RO-10").write
    await task
    assert store.writes == [("update", "master_inventory", {"quantity_on_hand": 4})]
    assert store.tables["master_inventory"][0]["quantity_on_hand"] == 4


async def test_restock_above_threshold(simulated_engine):
    result = simulated_engine.update_inventory("ENG-001", 10, "restock", None)
    assert result.part.quantity_on_hand == 15
    assert result.alert is None


async def test_consume_for_order_requires_order(simulated_engine):
    with pytest.raises(OrderNotFound):
        simulated_engine.consume_for_order("RO-404", "ENG-001", 1)
    simulated_engine.add_order(RepairOrder(id="RO-1"))
    result = simulated_engine.consume_for_order("RO-1", "ENG-001", 2, "install")
    assert result.part.quantity_on_hand == 3
    assert result.alert.ro_id == "RO-1"


# ── Orders ───────────────────────────────────────────────────────────

async def test_update_replaces_status(connected_engine):
    connected_engine.add_order(RepairOrder(id="RO-1", status=ROStatus.NEW))
    connected_engine.update_order(RepairOrder(id="RO-1", status=ROStatus.AUTHORIZED, customer_name="Osei"))
    assert connected_engine.get_order("RO-1").status is ROStatus.AUTHORIZED
    await connected_engine.drain()


async def test_update_is_full_replace(simulated_engine):
    simulated_engine.add_order(RepairOrder(id="RO-1", notes="bring trailer", labor_hours=2.0))
    simulated_engine.update_order(RepairOrder(id="RO-1", customer_name="Osei"))
    order = simulated_engine.get_order("RO-1")
    assert order.customer_name == "Osei"
    assert order.notes == ""
    assert order.labor_hours == 0.0


async def test_update_unknown_id_is_noop(connected_engine, store):
    assert connected_engine.update_order(RepairOrder(id="RO-404")) is None
    assert connected_engine.orders() == ()
    assert store.writes == []


async def test_duplicate_order_rejected(simulated_engine):
    simulated_engine.add_order(RepairOrder(id="RO-1"))
    with pytest.raises(DuplicateOrder):
        simulated_engine.add_order(RepairOrder(id="RO-1"))
    assert len(simulated_engine.orders()) == 1


async def test_update_rejects_backwards_status(simulated_engine):
    simulated_engine.add_order(RepairOrder(id="RO-1", status=ROStatus.COMPLETED))
    with pytest.raises(InvalidTransition):
        simulated_engine.update_order(RepairOrder(id="RO-1", status=ROStatus.NEW))
    assert simulated_engine.get_order("RO-1").status is ROStatus.COMPLETED


async def test_permissive_engine_allows_backwards_status():
    engine = SyncEngine(SessionMode.SIMULATED, strict_transitions=False)
    engine.add_order(RepairOrder(id="RO-1", status=ROStatus.COMPLETED))
    engine.advance_order("RO-1", ROStatus.ACTIVE)
    assert engine.get_order("RO-1").status is ROStatus.ACTIVE


async def test_advance_and_assign(simulated_engine):
    simulated_engine.add_order(RepairOrder(id="RO-1", status=ROStatus.AUTHORIZED))
    simulated_engine.advance_order("RO-1", "READY_FOR_TECH")
    simulated_engine.assign_technician("RO-1", "tech-1")
    assert simulated_engine.active_order_for("tech-1").id == "RO-1"
    assert simulated_engine.active_order_for("tech-2") is None


async def test_one_held_order_per_technician(simulated_engine):
    simulated_engine.add_order(RepairOrder(id="RO-1", status=ROStatus.ACTIVE, technician_id="tech-1"))
    simulated_engine.add_order(RepairOrder(id="RO-2", status=ROStatus.READY_FOR_TECH))
    with pytest.raises(TechnicianBusy):
        simulated_engine.assign_technician("RO-2", "tech-1")
    assert simulated_engine.get_order("RO-2").technician_id is None
    with pytest.raises(TechnicianBusy):
        simulated_engine.add_order(RepairOrder(id="RO-3", status=ROStatus.ACTIVE, technician_id="tech-1"))

    simulated_engine.advance_order("RO-1", ROStatus.COMPLETED)
    simulated_engine.assign_technician("RO-2", "tech-1")
    assert simulated_engine.active_order_for("tech-1").id == "RO-2"


async def test_snapshots_are_not_affected_by_later_mutations(simulated_engine):
    simulated_engine.add_order(RepairOrder(id="RO-1"))
    before = simulated_engine.snapshot()
    simulated_engine.advance_order("RO-1", ROStatus.AUTHORIZED)
    simulated_engine.add_order(RepairOrder(id="RO-2"))
    assert [o.status for o in before.orders] == [ROStatus.NEW]


# ── Mode isolation ───────────────────────────────────────────────────

async def test_simulated_mode_makes_no_remote_calls(store):
    engine = SyncEngine(SessionMode.SIMULATED)
    assert engine.add_order(RepairOrder(id="RO-1")) is None
    engine.update_order(RepairOrder(id="RO-1", status=ROStatus.AUTHORIZED))
    engine.upsert_part(Part(part_number="ENG-001", quantity_on_hand=1, reorder_point=2))
    engine.update_inventory("ENG-001", -1, "install", "RO-1")
    await engine.drain()
    assert store.calls == []
    assert engine.pending_writes == 0


async def test_connected_mode_one_call_per_mutation(connected_engine, store):
    order = RepairOrder(
        id="RO-1", customer_name="Whitaker",
        line_items=(LineItem(part_number="ENG-001", quantity=1, unit_price=79.0),),
    )
    connected_engine.add_order(order)
    connected_engine.advance_order("RO-1", ROStatus.AUTHORIZED)
    connected_engine.update_inventory("ENG-001", -1, "install", "RO-1")
    connected_engine.upsert_part(Part(part_number="HUL-031", quantity_on_hand=20, reorder_point=6))
    await connected_engine.drain()

    assert [(op, table) for op, table, _ in store.writes] == [
        ("insert", "repair_orders"),
        ("update", "repair_orders"),
        ("update", "master_inventory"),
        ("insert", "master_inventory"),
    ]
    inserted = store.writes[0][2]
    assert inserted["customer_name"] == "Whitaker"
    assert inserted["line_items"][0]["part_number"] == "ENG-001"
    assert store.writes[1][2]["status"] == "AUTHORIZED"
    assert store.writes[3][2]["reorder_point"] == 6


async def test_local_state_visible_before_remote_write_completes(connected_engine, store):
    task = connected_engine.add_order(RepairOrder(id="RO-1"))
    assert connected_engine.get_order("RO-1") is not None
    assert not task.done()
    assert store.writes == []
    await task
    assert len(store.writes) == 1


# ── Write failures ───────────────────────────────────────────────────

async def test_failed_write_keeps_local_change(connected_engine, store, caplog):
    store.fail_writes = True
    connected_engine.add_order(RepairOrder(id="RO-1"))
    connected_engine.update_inventory("ENG-001", -1, "install", "RO-1")
    await connected_engine.drain()

    assert connected_engine.get_order("RO-1") is not None
    assert connected_engine.get_part("ENG-001").quantity_on_hand == 4
    unsynced = connected_engine.unsynced_writes()
    assert [(u.write.resource, u.write.action) for u in unsynced] == [
        (Resource.ORDERS, WriteAction.INSERT),
        (Resource.PARTS, WriteAction.UPDATE),
    ]
    assert "connection reset" in unsynced[0].error
    assert "local state is ahead of remote" in caplog.text
    # not retried
    assert len(store.writes) == 2


async def test_awaiting_failed_write_raises(connected_engine, store):
    store.fail_writes = True
    task = connected_engine.add_order(RepairOrder(id="RO-1"))
    with pytest.raises(RemoteWriteFailed) as exc:
        await task
    assert exc.value.resource == "repair_orders"
    assert exc.value.key == "RO-1"


async def test_further_mutations_proceed_after_failure(connected_engine, store):
    store.fail_writes = True
    connected_engine.add_order(RepairOrder(id="RO-1"))
    await connected_engine.drain()
    store.fail_writes = False
    connected_engine.add_order(RepairOrder(id="RO-2"))
    await connected_engine.drain()
    assert [o.id for o in connected_engine.orders()] == ["RO-1", "RO-2"]
    assert len(connected_engine.unsynced_writes()) == 1


async def test_close_drains_and_closes_store(connected_engine, store):
    connected_engine.add_order(RepairOrder(id="RO-1"))
    await connected_engine.close()
    assert len(store.writes) == 1
    assert store.closed


def test_connected_mode_requires_adapter():
    with pytest.raises(ValueError):
        SyncEngine(SessionMode.CONNECTED)


# ── Listeners ────────────────────────────────────────────────────────

async def test_listeners_receive_change_events(simulated_engine):
    events = []
    unsubscribe = simulated_engine.subscribe(events.append)
    simulated_engine.add_order(RepairOrder(id="RO-1"))
    simulated_engine.update_inventory("ENG-001", -1, "install", "RO-1")
    assert [e.event for e in events] == ["order_added", "inventory_changed", "alert_raised"]
    assert events[1].data["quantityOnHand"] == 4

    unsubscribe()
    simulated_engine.add_order(RepairOrder(id="RO-2"))
    assert len(events) == 3


async def test_failing_listener_does_not_block_mutation(simulated_engine):
    def boom(event):
        raise RuntimeError("view crashed")

    simulated_engine.subscribe(boom)
    simulated_engine.add_order(RepairOrder(id="RO-1"))
    assert simulated_engine.get_order("RO-1") is not None
