"""Shared engine fixtures."""

from __future__ import annotations

import pytest

from shopsync.db.remote import RemoteStoreAdapter
from shopsync.schemas import AppConfig, Part, Technician
from shopsync.services.sync_engine import SessionMode, SyncEngine

from tests.fakes import ENG_001, RecordingStore

TECHS = (Technician(id="tech-1", name="Dale"), Technician(id="tech-2", name="Marisol"))


@pytest.fixture
def store():
    return RecordingStore({"repair_orders": [], "master_inventory": [ENG_001]})


@pytest.fixture
def connected_engine(store):
    return SyncEngine(
        SessionMode.CONNECTED,
        RemoteStoreAdapter(store),
        config=AppConfig(company_name="Test Marine", hourly_rate=100.0),
        technicians=TECHS,
        parts=[Part.model_validate({
            "partNumber": "ENG-001", "description": "Impeller kit",
            "quantityOnHand": 5, "reorderPoint": 5, "unitCost": 42.5, "binLocation": "A1",
        })],
    )


@pytest.fixture
def simulated_engine():
    return SyncEngine(
        SessionMode.SIMULATED,
        config=AppConfig(company_name="Test Marine", hourly_rate=100.0),
        technicians=TECHS,
        parts=[Part(part_number="ENG-001", description="Impeller kit", quantity_on_hand=5, reorder_point=5)],
    )
