"""I/O helpers for SweepScope."""

from .documents import (
    ExplorerDocuments,
    load_documents,
    parse_comparison,
    parse_overview,
    parse_sweep,
    read_document,
)

__all__ = [
    "ExplorerDocuments",
    "load_documents",
    "parse_comparison",
    "parse_overview",
    "parse_sweep",
    "read_document",
]
