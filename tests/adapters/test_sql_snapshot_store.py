"""
Test suite for SqlSnapshotStore.

Runs against an in-memory SQLite database built from the ORM metadata.
"""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from desguace_catalog.adapters.sql_snapshot_store import SqlSnapshotStore
from desguace_catalog.infra.db.models import EntitySnapshotRow
from desguace_catalog.infra.db.models.base import Base
from desguace_catalog.ports.snapshot_store import Snapshot


@pytest.fixture
def session_factory() -> sessionmaker[Session]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, class_=Session, expire_on_commit=False)


@pytest.fixture
def store(session_factory: sessionmaker[Session]) -> SqlSnapshotStore:
    return SqlSnapshotStore(session_factory)


def test_load_missing_slot_returns_none(store: SqlSnapshotStore) -> None:
    assert store.load("kacum_vehiculos_data") is None


def test_save_then_load_returns_snapshot(store: SqlSnapshotStore) -> None:
    snapshot = Snapshot(
        data=[{"id": 1, "marca": "Toyota"}],
        timestamp_ms=1_700_000_000_000,
        pagination={"page": 1, "limit": 15, "total": 1, "totalPages": 1},
    )

    store.save("kacum_vehiculos_data", snapshot)

    assert store.load("kacum_vehiculos_data") == snapshot


def test_save_replaces_slot_in_place(
    store: SqlSnapshotStore, session_factory: sessionmaker[Session]
) -> None:
    store.save("slot", Snapshot(data=[{"id": 1}], timestamp_ms=1))
    store.save("slot", Snapshot(data=[{"id": 2}, {"id": 3}], timestamp_ms=2))

    loaded = store.load("slot")
    assert loaded is not None
    assert loaded.data == [{"id": 2}, {"id": 3}]
    assert loaded.timestamp_ms == 2
    assert loaded.pagination is None

    with session_factory() as session:
        assert session.execute(select(func.count()).select_from(EntitySnapshotRow)).scalar_one() == 1


def test_slots_are_independent(store: SqlSnapshotStore) -> None:
    store.save("kacum_vehiculos_data", Snapshot(data=[{"id": 1}], timestamp_ms=1))
    store.save("kacum_clientes_data", Snapshot(data=[{"id": 9}], timestamp_ms=2))

    vehicles = store.load("kacum_vehiculos_data")
    clients = store.load("kacum_clientes_data")
    assert vehicles is not None and vehicles.data == [{"id": 1}]
    assert clients is not None and clients.data == [{"id": 9}]
