from __future__ import annotations

import os

DEFAULT_API_TIMEOUT_SECONDS = 10.0
DEFAULT_SNAPSHOT_TTL_SECONDS = 300


def backend_api_url() -> str:
    url = os.getenv("DESGUACE_API_URL")

    if not url:
        raise RuntimeError("DESGUACE_API_URL environment variable is not set")

    return url


def backend_timeout_seconds() -> float:
    raw = os.getenv("DESGUACE_API_TIMEOUT")
    if not raw:
        return DEFAULT_API_TIMEOUT_SECONDS

    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"DESGUACE_API_TIMEOUT must be a number, got {raw!r}") from exc


def snapshot_ttl_seconds() -> int:
    raw = os.getenv("SNAPSHOT_TTL_SECONDS")
    if not raw:
        return DEFAULT_SNAPSHOT_TTL_SECONDS

    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"SNAPSHOT_TTL_SECONDS must be an integer, got {raw!r}") from exc


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
