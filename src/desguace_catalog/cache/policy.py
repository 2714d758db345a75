from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

FIVE_MINUTES_MS = 5 * 60 * 1000


class Fallback(str, Enum):
    CACHE = "cache"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class FetchPolicy:
    """
    Declared read-failure behavior of one resource.

    ``fallback=CACHE`` lets a failed list fetch be answered from the persisted
    snapshot while it is younger than ``ttl_ms``. ``persist`` controls whether
    the resource owns a snapshot slot at all.
    """

    fallback: Fallback = Fallback.NONE
    ttl_ms: int = FIVE_MINUTES_MS
    persist: bool = False
    read_through: bool = False


# Only vehicles fall back to their snapshot. Clients persist a slot but
# still propagate read failures; the other resources keep no slot.
VEHICLES_POLICY = FetchPolicy(fallback=Fallback.CACHE, persist=True, read_through=True)
CLIENTS_POLICY = FetchPolicy(persist=True)
DEFAULT_POLICY = FetchPolicy()
