from __future__ import annotations

from fastapi import APIRouter, Depends

from shopsync.dependencies import get_engine
from shopsync.services.sync_engine import SyncEngine

router = APIRouter(prefix="/api/alerts", tags=["alerts"])


@router.get("")
async def list_alerts(engine: SyncEngine = Depends(get_engine)):
    """Newest first."""
    return [a.to_record() for a in engine.alerts()]
