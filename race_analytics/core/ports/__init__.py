"""Ports implemented by adapters outside the core."""

from .data_source_port import RaceDataSourcePort

__all__ = ["RaceDataSourcePort"]
