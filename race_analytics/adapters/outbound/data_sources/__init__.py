"""Data source adapters producing domain records."""

from .ergast_snapshot_adapter import ErgastSnapshotSource

__all__ = ["ErgastSnapshotSource"]
