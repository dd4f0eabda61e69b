"""Session API: bootstrap status, retry, and fallback into simulated mode."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from shopsync.dependencies import get_session_state
from shopsync.services.session_state import SessionState

router = APIRouter(prefix="/api/session", tags=["session"])


@router.get("")
async def session_status(state: SessionState = Depends(get_session_state)):
    return state.status()


@router.post("/retry")
async def retry_session(state: SessionState = Depends(get_session_state)):
    if not await state.start():
        raise HTTPException(503, state.status())
    return state.status()


@router.post("/simulate")
async def simulate_session(state: SessionState = Depends(get_session_state)):
    if state.engine is not None:
        raise HTTPException(409, f"Session already running in {state.engine.mode.value} mode")
    await state.start(simulate=True)
    return state.status()
