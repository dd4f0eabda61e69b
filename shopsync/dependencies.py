"""FastAPI dependency providers for settings and the session engine."""

from __future__ import annotations

from functools import lru_cache

from fastapi import HTTPException, Request

from shopsync.config import Settings, get_settings
from shopsync.logging_setup import session_mode_var
from shopsync.services.session_state import SessionState
from shopsync.services.sync_engine import SyncEngine


@lru_cache
def get_settings_dep() -> Settings:
    return get_settings()


def get_session_state(request: Request) -> SessionState:
    return request.app.state.session


async def get_engine(request: Request) -> SyncEngine:
    """The running engine, or 503 carrying the bootstrap failure and recovery actions."""
    state: SessionState = request.app.state.session
    if state.engine is None:
        status = state.status()
        raise HTTPException(503, {
            "error": status["error"] or "SESSION_NOT_STARTED",
            "message": status["message"] or "No session is running",
            "actions": status["actions"],
        })
    session_mode_var.set(state.engine.mode.value)
    return state.engine
