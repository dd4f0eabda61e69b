"""Master inventory API."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from shopsync.dependencies import get_engine
from shopsync.schemas import InventoryAdjustment, Part
from shopsync.services.sync_engine import SyncEngine

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("")
async def list_parts(low: bool = False, engine: SyncEngine = Depends(get_engine)):
    parts = engine.low_stock() if low else engine.parts()
    return [p.to_record() for p in parts]


@router.put("/{part_number}")
async def upsert_part(part_number: str, body: Part, engine: SyncEngine = Depends(get_engine)):
    part = body.model_copy(update={"part_number": part_number})
    engine.upsert_part(part)
    return part.to_record()


@router.post("/{part_number}/adjust")
async def adjust_part(
    part_number: str, body: InventoryAdjustment, engine: SyncEngine = Depends(get_engine)
):
    result = engine.update_inventory(part_number, body.delta, body.reason, body.ro_id)
    return {
        "part": result.consumption.part.to_record(),
        "alert": result.alert.to_record() if result.alert else None,
    }
