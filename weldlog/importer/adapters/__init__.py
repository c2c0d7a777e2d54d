"""Importer adapters."""

from __future__ import annotations

from .csv_welds import (
    CSVAdapterError,
    CSVStreamError,
    HeaderResolution,
    WeldCSVAdapter,
    WeldCSVRow,
    WeldCSVStatistics,
)

__all__ = [
    "CSVAdapterError",
    "CSVStreamError",
    "HeaderResolution",
    "WeldCSVAdapter",
    "WeldCSVRow",
    "WeldCSVStatistics",
]
