"""Load and validate the three exploration documents from disk."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from sweepscope.config import DataSources
from sweepscope.contracts.error import DataShapeError, IOErrorEnvelope
from sweepscope.models import ComparisonDocument, OverviewDocument, SweepDocument

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_SCHEMA_HINT = "See docs/documents.md"
_MAX_REPORTED_ERRORS = 5


@dataclass(frozen=True)
class ExplorerDocuments:
    """All three documents, loaded together or not at all."""

    overview: OverviewDocument
    comparison: ComparisonDocument
    sweep: SweepDocument


def parse_overview(payload: Any) -> OverviewDocument:
    return _parse(OverviewDocument, payload, "overview")


def parse_comparison(payload: Any) -> ComparisonDocument:
    return _parse(ComparisonDocument, payload, "comparison")


def parse_sweep(payload: Any) -> SweepDocument:
    return _parse(SweepDocument, payload, "sweep")


def read_document(path: str | Path) -> Any:
    """Read a JSON document.

    A missing file raises ``FileNotFoundError``; any other OS failure becomes
    an ``IOErrorEnvelope`` and decoding problems are reported as shape errors.
    """

    doc_path = Path(path)
    if not doc_path.exists():
        raise FileNotFoundError(doc_path)
    try:
        text = doc_path.read_text(encoding="utf-8")
    except OSError as exc:
        reason = exc.strerror or type(exc).__name__
        raise IOErrorEnvelope(f"{doc_path.name}: {reason}") from exc
    except UnicodeDecodeError as exc:
        raise DataShapeError(f"{doc_path.name}: not valid UTF-8 text") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataShapeError(
            f"{doc_path.name}: invalid JSON at line {exc.lineno} column {exc.colno}: {exc.msg}"
        ) from exc


def load_documents(
    directory: str | Path | None = None,
    sources: DataSources | None = None,
) -> ExplorerDocuments:
    """Load every document from ``directory``; any failure aborts the whole load."""

    sources = sources or DataSources()
    overview_path, comparison_path, sweep_path = sources.paths(directory)
    overview = parse_overview(read_document(overview_path))
    comparison = parse_comparison(read_document(comparison_path))
    sweep = parse_sweep(read_document(sweep_path))
    logger.info(
        "Loaded documents from %s (%d sweep results, %dx%d sparsity sample)",
        overview_path.parent,
        len(sweep.results),
        len(overview.sparsity_sample.matrix),
        len(overview.sparsity_sample.matrix[0]) if overview.sparsity_sample.matrix else 0,
    )
    return ExplorerDocuments(overview=overview, comparison=comparison, sweep=sweep)


def _parse(model: type[ModelT], payload: Any, label: str) -> ModelT:
    if not isinstance(payload, dict):
        raise DataShapeError(
            f"{label} document must be a JSON object, got {type(payload).__name__}",
            hint=_SCHEMA_HINT,
        )
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise DataShapeError(_describe(label, exc), hint=_SCHEMA_HINT) from exc


def _describe(label: str, exc: ValidationError) -> str:
    errors = exc.errors()
    parts: list[str] = []
    for error in errors[:_MAX_REPORTED_ERRORS]:
        location = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    if len(errors) > _MAX_REPORTED_ERRORS:
        parts.append(f"... {len(errors) - _MAX_REPORTED_ERRORS} more")
    return f"{label} document failed validation: " + "; ".join(parts)


__all__ = [
    "ExplorerDocuments",
    "load_documents",
    "parse_comparison",
    "parse_overview",
    "parse_sweep",
    "read_document",
]
