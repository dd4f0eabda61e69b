"""Session start: decide connected vs simulated mode and seed local state."""

from __future__ import annotations

import logging

from shopsync.config import Settings
from shopsync.db.remote import RemoteStoreAdapter, Resource, RowStore
from shopsync.errors import RemoteUnconfigured
from shopsync.schemas.app_config import AppConfig
from shopsync.schemas.repair_order import Technician
from shopsync.services.sync_engine import SessionMode, SyncEngine

logger = logging.getLogger(__name__)


def build_row_store(settings: Settings) -> RowStore:
    """Construct the configured row store, or raise RemoteUnconfigured."""
    backend = settings.remote_backend.lower()
    if backend == "rest":
        if not settings.remote_url or not settings.remote_key:
            raise RemoteUnconfigured("REMOTE_URL and REMOTE_KEY must both be set")
        from shopsync.db.rest_store import RestRowStore
        return RestRowStore(
            settings.remote_url, settings.remote_key, timeout=settings.remote_timeout_seconds,
        )
    if backend == "sql":
        if not settings.database_url:
            raise RemoteUnconfigured("DATABASE_URL must be set for the sql backend")
        from shopsync.db.engine import make_engine
        from shopsync.db.sql_store import SqlRowStore
        return SqlRowStore(make_engine(settings.database_url))
    raise RemoteUnconfigured(f"Unknown remote backend {settings.remote_backend!r}")


def _engine_kwargs(settings: Settings) -> dict:
    return {
        "config": AppConfig.from_settings(settings),
        "technicians": [Technician(**t.model_dump()) for t in settings.technicians],
        "strict_transitions": settings.strict_transitions,
    }


async def start_session(
    settings: Settings, *, simulate: bool = False, store: RowStore | None = None
) -> SyncEngine:
    """Return a ready engine.

    Simulated sessions start empty and never read remote configuration.
    Connected sessions bulk-read orders then parts; failures surface as
    RemoteUnconfigured or RemoteReadFailed and no engine is returned.
    """
    if simulate or settings.simulate:
        logger.info("Starting simulated session; remote store disabled")
        return SyncEngine(SessionMode.SIMULATED, **_engine_kwargs(settings))

    if store is None:
        store = build_row_store(settings)
    adapter = RemoteStoreAdapter(store, {
        Resource.ORDERS: settings.remote_tables.repair_orders,
        Resource.PARTS: settings.remote_tables.master_inventory,
    })
    try:
        orders = await adapter.fetch_orders()
        parts = await adapter.fetch_parts()
    except Exception:
        await adapter.aclose()
        raise

    logger.info("Connected session seeded with %d orders and %d parts", len(orders), len(parts))
    return SyncEngine(
        SessionMode.CONNECTED, adapter, orders=orders, parts=parts, **_engine_kwargs(settings),
    )
