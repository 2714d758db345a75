"""
Test suite for MirrorCache.

Covers:
- Keyed CRUD and list order
- LRU eviction when a capacity is set
- Listener subscription and isolation of listener failures
- Best-effort persist and age-checked restore
"""

from __future__ import annotations

from typing import Any

import pytest

from desguace_catalog.adapters.backend_mappers import VehicleMapper
from desguace_catalog.adapters.in_memory_snapshot_store import InMemorySnapshotStore
from desguace_catalog.cache.mirror_cache import CacheState, MirrorCache
from desguace_catalog.domain.vehicle import Vehicle
from desguace_catalog.ports.snapshot_store import Snapshot, SnapshotStore

KEY = "kacum_vehiculos_data"


class Clock:
    def __init__(self, now: int = 1_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


class BrokenStore(SnapshotStore):
    def save(self, key: str, snapshot: Snapshot) -> None:
        raise OSError("disk full")

    def load(self, key: str) -> Snapshot | None:
        raise OSError("disk gone")


def vehicle_cache(store: SnapshotStore | None = None, **kwargs: Any) -> MirrorCache[Vehicle]:
    return MirrorCache(KEY, VehicleMapper.to_payload, VehicleMapper.to_domain, store=store, **kwargs)


# ==============================================================================
# Keyed map
# ==============================================================================


def test_new_cache_is_empty() -> None:
    cache = vehicle_cache()

    assert cache.state is CacheState.EMPTY
    assert cache.list() == []
    assert cache.get(1) is None


def test_upsert_then_get(make_vehicle) -> None:
    cache = vehicle_cache()
    vehicle = make_vehicle(1)

    cache.upsert(vehicle)

    assert cache.get(1) == vehicle
    assert cache.state is CacheState.POPULATED
    assert len(cache) == 1


def test_upsert_replaces_in_place(make_vehicle) -> None:
    cache = vehicle_cache()
    cache.upsert(make_vehicle(1))
    cache.upsert(make_vehicle(2))

    cache.upsert(make_vehicle(1, color="Rojo"))

    assert [vehicle.id for vehicle in cache.list()] == [1, 2]
    assert cache.get(1).color == "Rojo"


def test_remove_then_get_returns_none(make_vehicle) -> None:
    cache = vehicle_cache()
    cache.upsert(make_vehicle(1))

    cache.remove(1)
    cache.remove(99)

    assert cache.get(1) is None
    assert cache.list() == []


def test_replace_all_mirrors_list(make_vehicle) -> None:
    cache = vehicle_cache()
    cache.upsert(make_vehicle(9))

    cache.replace_all([make_vehicle(1), make_vehicle(2)])

    assert [vehicle.id for vehicle in cache.list()] == [1, 2]


def test_clear_returns_to_empty(make_vehicle) -> None:
    cache = vehicle_cache()
    cache.upsert(make_vehicle(1))

    cache.clear()

    assert cache.state is CacheState.EMPTY
    assert len(cache) == 0


# ==============================================================================
# Capacity
# ==============================================================================


def test_invalid_capacity_rejected() -> None:
    with pytest.raises(ValueError):
        vehicle_cache(capacity=0)


def test_evicts_least_recently_used(make_vehicle) -> None:
    cache = vehicle_cache(capacity=2)
    cache.upsert(make_vehicle(1))
    cache.upsert(make_vehicle(2))
    cache.get(1)

    cache.upsert(make_vehicle(3))

    assert cache.get(2) is None
    assert {vehicle.id for vehicle in cache.list()} == {1, 3}


def test_replace_all_respects_capacity(make_vehicle) -> None:
    cache = vehicle_cache(capacity=2)

    cache.replace_all([make_vehicle(1), make_vehicle(2), make_vehicle(3)])

    assert [vehicle.id for vehicle in cache.list()] == [2, 3]


# ==============================================================================
# Listeners
# ==============================================================================


def test_listener_notified_on_upsert(make_vehicle) -> None:
    cache = vehicle_cache()
    seen: list[int] = []
    cache.subscribe(lambda entity_id, entity: seen.append(entity_id))

    cache.upsert(make_vehicle(1))
    cache.upsert(make_vehicle(2))

    assert seen == [1, 2]


def test_unsubscribe_stops_notifications(make_vehicle) -> None:
    cache = vehicle_cache()
    seen: list[int] = []
    unsubscribe = cache.subscribe(lambda entity_id, entity: seen.append(entity_id))

    cache.upsert(make_vehicle(1))
    unsubscribe()
    unsubscribe()
    cache.upsert(make_vehicle(2))

    assert seen == [1]


def test_failing_listener_does_not_block_others(make_vehicle) -> None:
    cache = vehicle_cache()
    seen: list[int] = []

    def broken(entity_id: int, entity: Any) -> None:
        raise RuntimeError("listener bug")

    cache.subscribe(broken)
    cache.subscribe(lambda entity_id, entity: seen.append(entity_id))

    cache.upsert(make_vehicle(1))

    assert seen == [1]
    assert cache.get(1) is not None


# ==============================================================================
# Persistence
# ==============================================================================


def test_persist_without_store_returns_false(make_vehicle) -> None:
    cache = vehicle_cache()
    cache.upsert(make_vehicle(1))

    assert cache.persist() is False
    assert cache.restore(max_age_ms=1000) is None


def test_persist_then_restore_while_fresh(make_vehicle) -> None:
    clock = Clock()
    store = InMemorySnapshotStore()
    cache = vehicle_cache(store, clock=clock)
    cache.replace_all([make_vehicle(1), make_vehicle(2)])

    assert cache.persist(pagination={"page": 1, "limit": 15, "total": 2, "totalPages": 1}) is True
    clock.now += 60_000

    restored = vehicle_cache(store, clock=clock).restore(max_age_ms=300_000)

    assert restored is not None
    assert [vehicle.id for vehicle in restored.items] == [1, 2]
    assert restored.items[0] == make_vehicle(1)
    assert restored.pagination == {"page": 1, "limit": 15, "total": 2, "totalPages": 1}
    assert restored.age_ms == 60_000


def test_restore_stale_snapshot_returns_none(make_vehicle) -> None:
    clock = Clock()
    cache = vehicle_cache(InMemorySnapshotStore(), clock=clock)
    cache.upsert(make_vehicle(1))
    cache.persist()

    clock.now += 300_001

    assert cache.restore(max_age_ms=300_000) is None


def test_restore_missing_snapshot_returns_none() -> None:
    assert vehicle_cache(InMemorySnapshotStore()).restore(max_age_ms=300_000) is None


def test_store_failures_are_contained(make_vehicle, caplog) -> None:
    cache = vehicle_cache(BrokenStore())
    cache.upsert(make_vehicle(1))

    assert cache.persist() is False
    assert cache.restore(max_age_ms=300_000) is None
    assert "Failed to persist cache snapshot" in caplog.text
    assert cache.get(1) is not None


def test_unreadable_snapshot_returns_none() -> None:
    store = InMemorySnapshotStore()
    store.save(KEY, Snapshot(data=[{"marca": "sin id"}], timestamp_ms=1_000_000))

    assert vehicle_cache(store, clock=Clock()).restore(max_age_ms=300_000) is None
