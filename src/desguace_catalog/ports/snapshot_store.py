from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Snapshot:
    """Persisted copy of a mirror cache slot."""

    data: list[dict[str, Any]]
    timestamp_ms: int
    pagination: dict[str, Any] | None = None


class SnapshotStore(ABC):
    """
    Port for the keyed storage slots backing the Local Mirror Cache.

    One slot per entity type. Writes replace the slot as a whole.
    """

    @abstractmethod
    def save(self, key: str, snapshot: Snapshot) -> None: ...

    @abstractmethod
    def load(self, key: str) -> Snapshot | None: ...
