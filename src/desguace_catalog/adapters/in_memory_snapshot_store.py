from __future__ import annotations

import copy

from desguace_catalog.ports.snapshot_store import Snapshot, SnapshotStore


class InMemorySnapshotStore(SnapshotStore):
    """
    Snapshot slots held in a dict.

    Stores deep copies so later mutation of the caller's data never leaks
    into a saved slot.
    """

    def __init__(self) -> None:
        self._slots: dict[str, Snapshot] = {}

    def save(self, key: str, snapshot: Snapshot) -> None:
        self._slots[key] = copy.deepcopy(snapshot)

    def load(self, key: str) -> Snapshot | None:
        snapshot = self._slots.get(key)
        return copy.deepcopy(snapshot) if snapshot is not None else None
