# mypy: ignore-errors
"""Explorer widgets package."""

from __future__ import annotations

from .common import QT_IMPORT_ERROR, QTabWidget, pg
from .comparison import ComparisonPane
from .overview import OverviewPane
from .sweep import SweepPane

__all__ = [
    "ComparisonPane",
    "OverviewPane",
    "QT_IMPORT_ERROR",
    "QTabWidget",
    "SweepPane",
    "pg",
]
