"""Data export: full snapshot of orders, inventory and configuration."""

from __future__ import annotations

import json
import time
from pathlib import Path

from shopsync.services.sync_engine import SyncEngine


def build_export(engine: SyncEngine) -> dict:
    """Read-only: built from a snapshot, never touches engine state."""
    snap = engine.snapshot()
    return {
        "repairOrders": [o.to_record() for o in snap.orders],
        "masterInventory": [p.to_record() for p in snap.parts],
        "config": snap.config.to_record(),
        "exportedAt": snap.taken_at.isoformat(),
    }


def export_filename() -> str:
    return f"SCC-DATA-EXPORT-{int(time.time() * 1000)}.json"


def write_export(engine: SyncEngine, path: str | Path | None = None) -> Path:
    out = Path(path) if path else Path(export_filename())
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(build_export(engine), indent=2))
    return out
