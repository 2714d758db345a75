"""SQLAlchemy implementation of SnapshotStore."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from desguace_catalog.infra.db.models.snapshot import EntitySnapshotRow
from desguace_catalog.infra.db.session import session_scope
from desguace_catalog.ports.snapshot_store import Snapshot, SnapshotStore


class SqlSnapshotStore(SnapshotStore):
    """
    Snapshot slots persisted in the ``entity_snapshots`` table.

    - One row per slot key, replaced as a whole on every save
    - Uses its own short-lived session per call (the cache outlives requests)
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        """
        Initialize the store.

        Args:
            session_factory: Factory producing sessions bound to the snapshot database
        """
        self._session_factory = session_factory

    def save(self, key: str, snapshot: Snapshot) -> None:
        with session_scope(self._session_factory) as session:
            row = session.get(EntitySnapshotRow, key)
            if row is None:
                row = EntitySnapshotRow(key=key)
                session.add(row)
            row.data = snapshot.data
            row.pagination = snapshot.pagination
            row.timestamp_ms = snapshot.timestamp_ms

    def load(self, key: str) -> Snapshot | None:
        with session_scope(self._session_factory) as session:
            row = session.execute(
                select(EntitySnapshotRow).where(EntitySnapshotRow.key == key)
            ).scalar_one_or_none()
            if row is None:
                return None
            return self._to_snapshot(row)

    def _to_snapshot(self, row: EntitySnapshotRow) -> Snapshot:
        return Snapshot(
            data=list(row.data or []),
            timestamp_ms=row.timestamp_ms,
            pagination=row.pagination,
        )
