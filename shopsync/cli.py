"""ShopSync CLI: uplink check, data export and SQL store setup."""

from __future__ import annotations

import argparse
import asyncio
import sys

from shopsync.config import get_settings
from shopsync.errors import RemoteReadFailed, RemoteUnconfigured
from shopsync.logging_setup import configure_logging, session_mode_var

EXIT_UNCONFIGURED = 2
EXIT_READ_FAILED = 3


async def cmd_check(args):
    """Bootstrap a connected session and report what was loaded."""
    from shopsync.services.bootstrap import start_session

    settings = get_settings()
    try:
        engine = await start_session(settings)
    except RemoteUnconfigured as exc:
        print(f"Remote store unconfigured: {exc}")
        print("Set REMOTE_URL/REMOTE_KEY (or DATABASE_URL with REMOTE_BACKEND=sql), or use --simulate.")
        sys.exit(EXIT_UNCONFIGURED)
    except RemoteReadFailed as exc:
        print(f"Uplink failed: {exc}")
        sys.exit(EXIT_READ_FAILED)
    session_mode_var.set(engine.mode.value)

    print(f"Connected ({settings.remote_backend})")
    print(f"  Repair orders: {len(engine.orders())}")
    print(f"  Parts: {len(engine.parts())}")
    print(f"  Low stock: {len(engine.low_stock())}")
    await engine.close()


async def cmd_export(args):
    """Write the full data export document to a JSON file."""
    from shopsync.services.bootstrap import start_session
    from shopsync.services.export import write_export

    settings = get_settings()
    try:
        engine = await start_session(settings, simulate=args.simulate)
    except (RemoteUnconfigured, RemoteReadFailed) as exc:
        print(f"Cannot export: {exc}")
        sys.exit(EXIT_UNCONFIGURED if isinstance(exc, RemoteUnconfigured) else EXIT_READ_FAILED)
    session_mode_var.set(engine.mode.value)

    out = write_export(engine, args.out or None)
    await engine.close()
    print(f"Exported {len(engine.orders())} orders and {len(engine.parts())} parts to {out}")


async def cmd_init_db(args):
    """Create the repair_orders and master_inventory tables for the sql backend."""
    from shopsync.db.engine import create_tables, make_engine

    settings = get_settings()
    url = args.database_url or settings.database_url
    if not url:
        print("No database URL: pass --database-url or set DATABASE_URL")
        sys.exit(EXIT_UNCONFIGURED)
    engine = make_engine(url)
    await create_tables(engine)
    await engine.dispose()
    print(f"Tables ready at {url}")


def cmd_serve(args):
    import uvicorn

    uvicorn.run("shopsync.main:app", host=args.host, port=args.port, reload=args.reload)


def main():
    parser = argparse.ArgumentParser(description="ShopSync CLI")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("check", help="Bootstrap against the remote store and report")

    ex = subparsers.add_parser("export", help="Write the JSON data export")
    ex.add_argument("--out", default="", help="Output path (default SCC-DATA-EXPORT-<ms>.json)")
    ex.add_argument("--simulate", action="store_true", help="Export an empty simulated session")

    idb = subparsers.add_parser("init-db", help="Create SQL store tables")
    idb.add_argument("--database-url", default="", help="SQLAlchemy async URL")

    sv = subparsers.add_parser("serve", help="Run the HTTP API")
    sv.add_argument("--host", default="127.0.0.1")
    sv.add_argument("--port", type=int, default=8000)
    sv.add_argument("--reload", action="store_true")

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(get_settings().log_level)

    if args.command == "check":
        asyncio.run(cmd_check(args))
    elif args.command == "export":
        asyncio.run(cmd_export(args))
    elif args.command == "init-db":
        asyncio.run(cmd_init_db(args))
    elif args.command == "serve":
        cmd_serve(args)


if __name__ == "__main__":
    main()
