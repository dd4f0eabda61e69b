"""Seed the SQL remote store with demo parts and repair orders.

Usage: DATABASE_URL=sqlite+aiosqlite:///data/shop.db python scripts/seed_demo.py
"""

import asyncio
import sys

from shopsync.config import get_settings
from shopsync.db.engine import create_tables, make_engine
from shopsync.db.remote import RemoteStoreAdapter, RemoteWrite, Resource, WriteAction
from shopsync.db.sql_store import SqlRowStore
from shopsync.schemas import LineItem, Part, RepairOrder, ROStatus

DEMO_PARTS = [
    Part(part_number="ENG-001", description="Impeller kit", quantity_on_hand=5, reorder_point=5, unit_cost=42.5, bin_location="A1"),
    Part(part_number="ENG-014", description="Fuel/water separator", quantity_on_hand=12, reorder_point=4, unit_cost=18.0, bin_location="A3"),
    Part(part_number="ELE-220", description="Bilge pump 1100 GPH", quantity_on_hand=3, reorder_point=2, unit_cost=64.0, bin_location="C2"),
    Part(part_number="HUL-031", description="Zinc anode set", quantity_on_hand=20, reorder_point=6, unit_cost=11.25, bin_location="B4"),
]

DEMO_ORDERS = [
    RepairOrder(
        id="RO-1001", customer_name="J. Whitaker", vessel_name="Grady-White 25",
        complaint="Overheating at idle", status=ROStatus.AUTHORIZED,
        line_items=(LineItem(part_number="ENG-001", description="Impeller kit", quantity=1, unit_price=79.0),),
        labor_hours=1.5,
    ),
    RepairOrder(
        id="RO-1002", customer_name="M. Osei", vessel_name="Boston Whaler 170",
        complaint="Bilge pump not cycling", status=ROStatus.NEW,
    ),
]


async def seed():
    settings = get_settings()
    if not settings.database_url:
        print("Set DATABASE_URL to an async SQLAlchemy URL first.")
        sys.exit(1)

    engine = make_engine(settings.database_url)
    await create_tables(engine)
    adapter = RemoteStoreAdapter(SqlRowStore(engine))

    existing = {p.part_number for p in await adapter.fetch_parts()}
    for part in DEMO_PARTS:
        if part.part_number in existing:
            continue
        await adapter.execute(RemoteWrite(Resource.PARTS, WriteAction.INSERT, part.part_number, part.to_record()))
        print(f"Created part: {part.part_number} ({part.description})")

    existing = {o.id for o in await adapter.fetch_orders()}
    for order in DEMO_ORDERS:
        if order.id in existing:
            continue
        await adapter.execute(RemoteWrite(Resource.ORDERS, WriteAction.INSERT, order.id, order.to_record()))
        print(f"Created repair order: {order.id} ({order.vessel_name})")

    await adapter.aclose()
    print("\nSeed complete. Start the API with: REMOTE_BACKEND=sql python -m shopsync.cli serve")


if __name__ == "__main__":
    asyncio.run(seed())
