from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from shopsync.dependencies import get_engine
from shopsync.services.export import build_export, export_filename
from shopsync.services.sync_engine import SyncEngine

router = APIRouter(prefix="/api/export", tags=["export"])


@router.get("")
async def export_data(engine: SyncEngine = Depends(get_engine)):
    return JSONResponse(
        build_export(engine),
        headers={"Content-Disposition": f"attachment; filename={export_filename()}"},
    )
