"""Role dashboards. Each role gets only its slice of state."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from shopsync.dependencies import get_engine
from shopsync.schemas import UserRole
from shopsync.services.sync_engine import SyncEngine
from shopsync.services.views import build_view

router = APIRouter(prefix="/api/views", tags=["views"])


@router.get("/{role}")
async def role_view(
    role: UserRole,
    technician_id: str | None = None,
    engine: SyncEngine = Depends(get_engine),
):
    return build_view(role, engine, technician_id)
