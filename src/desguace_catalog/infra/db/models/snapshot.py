from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, BigInteger, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from desguace_catalog.infra.db.models.base import Base


class EntitySnapshotRow(Base):
    """One persisted mirror-cache slot (e.g. ``kacum_vehiculos_data``)."""

    __tablename__ = "entity_snapshots"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    data: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    pagination: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    timestamp_ms: Mapped[int] = mapped_column(BigInteger, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
