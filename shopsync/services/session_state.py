"""Process-wide session holder used by the HTTP app.

Keeps either a running engine or the bootstrap failure that prevented one,
so callers can offer retry or a fallback into simulated mode.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from shopsync.config import Settings
from shopsync.db.remote import RowStore
from shopsync.errors import RemoteReadFailed, RemoteUnconfigured, ShopSyncError
from shopsync.schemas.events import ChangeEvent
from shopsync.services.bootstrap import start_session
from shopsync.services.sync_engine import SyncEngine
from shopsync.services.ws_manager import ws_manager

logger = logging.getLogger(__name__)

EVENTS_CHANNEL = "events"


class SessionState:
    def __init__(
        self, settings: Settings, store_factory: Callable[[], RowStore] | None = None
    ) -> None:
        self.settings = settings
        self.engine: SyncEngine | None = None
        self.error: ShopSyncError | None = None
        self._store_factory = store_factory
        self._broadcasts: set[asyncio.Task] = set()

    @property
    def ready(self) -> bool:
        return self.engine is not None

    async def start(self, *, simulate: bool = False) -> bool:
        """Bootstrap an engine unless one is already running. Returns readiness."""
        if self.engine is not None:
            return True
        store = None
        if not simulate and not self.settings.simulate and self._store_factory is not None:
            store = self._store_factory()
        try:
            self.engine = await start_session(self.settings, simulate=simulate, store=store)
        except (RemoteUnconfigured, RemoteReadFailed) as exc:
            logger.error("Session bootstrap failed (%s): %s", exc.code, exc)
            self.error = exc
            return False
        self.error = None
        self.engine.subscribe(self._broadcast)
        return True

    def _broadcast(self, event: ChangeEvent) -> None:
        task = asyncio.get_running_loop().create_task(
            ws_manager.broadcast(EVENTS_CHANNEL, event.to_record())
        )
        self._broadcasts.add(task)
        task.add_done_callback(self._broadcasts.discard)

    def status(self) -> dict:
        engine = self.engine
        return {
            "ready": engine is not None,
            "mode": engine.mode.value if engine else None,
            "error": getattr(self.error, "code", None),
            "message": str(self.error) if self.error else None,
            "actions": [] if engine else ["retry", "simulate"],
            "pendingWrites": engine.pending_writes if engine else 0,
            "unsyncedWrites": [
                {
                    "resource": u.write.resource.value,
                    "action": u.write.action.value,
                    "key": u.write.key,
                    "error": u.error,
                    "failedAt": u.failed_at.isoformat(),
                }
                for u in (engine.unsynced_writes() if engine else ())
            ],
        }

    async def stop(self) -> None:
        if self.engine is not None:
            await self.engine.close()
            self.engine = None
