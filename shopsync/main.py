"""FastAPI application entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shopsync import __version__
from shopsync.api.router import api_router
from shopsync.config import Settings
from shopsync.db.remote import RowStore
from shopsync.dependencies import get_settings_dep
from shopsync.errors import (
    DuplicateOrder, InvalidTransition, OrderNotFound, PartNotFound, ShopSyncError, TechnicianBusy,
)
from shopsync.services.session_state import SessionState

_ERROR_STATUS: tuple[tuple[type[ShopSyncError], int], ...] = (
    (OrderNotFound, 404),
    (PartNotFound, 404),
    (DuplicateOrder, 409),
    (InvalidTransition, 409),
    (TechnicianBusy, 409),
)


def create_app(
    settings: Settings | None = None,
    store_factory: Callable[[], RowStore] | None = None,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # A failed bootstrap leaves the app up so clients can retry or simulate.
        state = SessionState(settings or get_settings_dep(), store_factory)
        app.state.session = state
        await state.start()
        yield
        await state.stop()

    app = FastAPI(
        title="ShopSync",
        description="Repair-order workflow and parts inventory with optimistic remote sync.",
        version=__version__,
        lifespan=lifespan,
    )

    @app.exception_handler(ShopSyncError)
    async def shopsync_error(request: Request, exc: ShopSyncError):
        status = next((code for cls, code in _ERROR_STATUS if isinstance(exc, cls)), 400)
        return JSONResponse(
            status_code=status,
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    app.include_router(api_router)
    return app


app = create_app()
