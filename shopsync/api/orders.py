"""Repair order API: intake, replace, status changes, assignment and parts."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from shopsync.dependencies import get_engine
from shopsync.schemas import (
    OrderCreate, PartsConsumption, ROStatus, RepairOrder, StatusChange,
    TechnicianAssignment, new_order_id,
)
from shopsync.services.sync_engine import SyncEngine

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("")
async def list_orders(status: ROStatus | None = None, engine: SyncEngine = Depends(get_engine)):
    return [
        o.to_record() for o in engine.orders()
        if status is None or o.status is status
    ]


@router.get("/{order_id}")
async def get_order(order_id: str, engine: SyncEngine = Depends(get_engine)):
    order = engine.get_order(order_id)
    if not order:
        raise HTTPException(404, "Repair order not found")
    return order.to_record()


@router.post("", status_code=201)
async def create_order(body: OrderCreate, engine: SyncEngine = Depends(get_engine)):
    fields = body.model_dump(exclude={"id"})
    order = RepairOrder(id=body.id or new_order_id(), status=ROStatus.NEW, **fields)
    engine.add_order(order)
    return order.to_record()


@router.put("/{order_id}")
async def replace_order(
    order_id: str, body: RepairOrder, engine: SyncEngine = Depends(get_engine)
):
    if engine.get_order(order_id) is None:
        raise HTTPException(404, "Repair order not found")
    order = body.model_copy(update={"id": order_id})
    engine.update_order(order)
    return order.to_record()


@router.post("/{order_id}/status")
async def change_status(
    order_id: str, body: StatusChange, engine: SyncEngine = Depends(get_engine)
):
    engine.advance_order(order_id, body.status)
    return engine.get_order(order_id).to_record()


@router.post("/{order_id}/assign")
async def assign_technician(
    order_id: str, body: TechnicianAssignment, engine: SyncEngine = Depends(get_engine)
):
    engine.assign_technician(order_id, body.technician_id)
    return engine.get_order(order_id).to_record()


@router.post("/{order_id}/parts")
async def consume_parts(
    order_id: str, body: PartsConsumption, engine: SyncEngine = Depends(get_engine)
):
    result = engine.consume_for_order(order_id, body.part_number, body.quantity, body.reason)
    return {
        "part": result.consumption.part.to_record(),
        "alert": result.alert.to_record() if result.alert else None,
    }
