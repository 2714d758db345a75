"""
Local Mirror Cache.

Holds the last-known entities of one type keyed by id, plus a best-effort
persisted snapshot used as a fallback read path when the backend cannot be
reached. The in-memory copy never expires; only the snapshot is checked for
age on restore.
"""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Protocol, TypeVar

from desguace_catalog.ports.snapshot_store import Snapshot, SnapshotStore

logger = logging.getLogger(__name__)


class HasId(Protocol):
    @property
    def id(self) -> int: ...


T = TypeVar("T", bound=HasId)

Listener = Callable[[int, Any], None]


class CacheState(str, Enum):
    EMPTY = "empty"
    POPULATED = "populated"


@dataclass(frozen=True)
class RestoredSnapshot(Generic[T]):
    items: list[T]
    pagination: dict[str, Any] | None
    age_ms: int


def now_ms() -> int:
    return int(time.time() * 1000)


class MirrorCache(Generic[T]):
    """
    In-memory mirror of one entity type.

    - ``get`` / ``upsert`` / ``remove`` / ``list`` operate on a map keyed by id
      that keeps insertion order (replacing an entity keeps its position)
    - ``persist`` writes ``{data, pagination, timestamp}`` to the snapshot slot
      and never raises
    - ``subscribe`` registers listeners notified on every upsert
    - ``capacity`` bounds the map with least-recently-used eviction; ``None``
      keeps it unbounded
    """

    def __init__(
        self,
        key: str,
        serialize: Callable[[T], dict[str, Any]],
        deserialize: Callable[[dict[str, Any]], T],
        store: SnapshotStore | None = None,
        capacity: int | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        if capacity is not None and capacity <= 0:
            raise ValueError("capacity must be > 0")

        self.key = key
        self._serialize = serialize
        self._deserialize = deserialize
        self._store = store
        self._capacity = capacity
        self._clock = clock
        self._items: OrderedDict[int, T] = OrderedDict()
        self._recency: OrderedDict[int, None] = OrderedDict()
        self._listeners: list[Listener] = []
        self._state = CacheState.EMPTY

    @property
    def state(self) -> CacheState:
        return self._state

    def __len__(self) -> int:
        return len(self._items)

    def get(self, entity_id: int) -> T | None:
        entity = self._items.get(entity_id)
        if entity is not None:
            self._touch(entity_id)
        return entity

    def list(self) -> list[T]:
        return list(self._items.values())

    def upsert(self, entity: T) -> None:
        self._items[entity.id] = entity
        self._touch(entity.id)
        self._state = CacheState.POPULATED
        self._evict()
        self._notify(entity)

    def remove(self, entity_id: int) -> None:
        self._items.pop(entity_id, None)
        self._recency.pop(entity_id, None)
        self._state = CacheState.POPULATED

    def replace_all(self, entities: list[T]) -> None:
        """Mirror a full list fetch: the map becomes exactly ``entities``."""
        self._items = OrderedDict((entity.id, entity) for entity in entities)
        self._recency = OrderedDict((entity.id, None) for entity in entities)
        self._state = CacheState.POPULATED
        self._evict()

    def clear(self) -> None:
        self._items.clear()
        self._recency.clear()
        self._state = CacheState.EMPTY

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register ``listener(entity_id, entity)`` for upserts.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def persist(self, pagination: dict[str, Any] | None = None) -> bool:
        """
        Write the whole in-memory map to the snapshot slot.

        Returns:
            True if the snapshot was written, False if there is no store or
            the write failed (the failure is logged, never raised)
        """
        if self._store is None:
            return False

        try:
            snapshot = Snapshot(
                data=[self._serialize(entity) for entity in self._items.values()],
                timestamp_ms=self._clock(),
                pagination=pagination,
            )
            self._store.save(self.key, snapshot)
        except Exception as exc:
            logger.error(
                "Failed to persist cache snapshot",
                extra={"cache_key": self.key, "error": str(exc)},
            )
            return False

        logger.debug(
            "Cache snapshot persisted",
            extra={"cache_key": self.key, "entities": len(self._items)},
        )
        return True

    def restore(self, max_age_ms: int) -> RestoredSnapshot[T] | None:
        """
        Read the persisted snapshot if it is still fresh.

        Returns:
            The snapshot's entities, or None when there is no store, no
            snapshot, it is older than ``max_age_ms`` or it cannot be read
        """
        if self._store is None:
            return None

        try:
            snapshot = self._store.load(self.key)
            if snapshot is None:
                return None

            age_ms = self._clock() - snapshot.timestamp_ms
            if age_ms > max_age_ms:
                logger.info(
                    "Cache snapshot expired",
                    extra={"cache_key": self.key, "age_ms": age_ms, "max_age_ms": max_age_ms},
                )
                return None

            items = [self._deserialize(raw) for raw in snapshot.data]
        except Exception as exc:
            logger.error(
                "Failed to restore cache snapshot",
                extra={"cache_key": self.key, "error": str(exc)},
            )
            return None

        return RestoredSnapshot(items=items, pagination=snapshot.pagination, age_ms=age_ms)

    def _touch(self, entity_id: int) -> None:
        self._recency.pop(entity_id, None)
        self._recency[entity_id] = None

    def _evict(self) -> None:
        if self._capacity is None:
            return
        while len(self._items) > self._capacity:
            oldest, _ = self._recency.popitem(last=False)
            self._items.pop(oldest, None)
            logger.debug("Evicted entity from cache", extra={"cache_key": self.key, "entity_id": oldest})

    def _notify(self, entity: T) -> None:
        for listener in list(self._listeners):
            try:
                listener(entity.id, entity)
            except Exception as exc:
                logger.warning(
                    "Cache listener failed",
                    extra={"cache_key": self.key, "entity_id": entity.id, "error": str(exc)},
                )
