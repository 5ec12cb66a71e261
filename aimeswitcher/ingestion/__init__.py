"""Database snapshot ingestion."""

from aimeswitcher.ingestion.schema import PROFILE_DETAIL_SCHEMA, RATING_SCHEMA, Column, TableSchema
from aimeswitcher.ingestion.snapshot_reader import SnapshotReader

__all__ = ["Column", "PROFILE_DETAIL_SCHEMA", "RATING_SCHEMA", "SnapshotReader", "TableSchema"]
