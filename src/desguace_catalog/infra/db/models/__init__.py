from desguace_catalog.infra.db.models.snapshot import EntitySnapshotRow

__all__ = ["EntitySnapshotRow"]
