"""Chart series for the dataset overview and the baseline comparison."""

from __future__ import annotations

import math
from dataclasses import dataclass

from sweepscope.contracts.error import DataShapeError
from sweepscope.models import (
    ComparisonDocument,
    BestConfig,
    OverviewMetadata,
    PredictorPerformance,
    RatingDistributions,
)

COMPARISON_Y_DOMAIN: tuple[float, float] = (0.0, 1.5)
BASELINE_LABEL = "Baseline"
MODEL_LABEL = "Collaborative Filtering"
TRAIN_COLOR = "#3b82f6"
VALID_COLOR = "#f97316"

__all__ = [
    "BASELINE_LABEL",
    "COMPARISON_Y_DOMAIN",
    "ComparisonBar",
    "MODEL_LABEL",
    "comparison_series",
    "current_predictor",
    "format_best_config",
    "format_millions",
    "improvement_fill",
    "missing_ratings",
    "rating_series",
]


@dataclass(frozen=True, slots=True)
class ComparisonBar:
    label: str
    train_rmse: float
    valid_rmse: float


def rating_series(distributions: RatingDistributions) -> tuple[tuple[str, int], ...]:
    labels = distributions.rating_labels
    counts = distributions.rating_counts
    if len(labels) != len(counts):
        raise DataShapeError(
            f"rating_labels has {len(labels)} entries but rating_counts has {len(counts)}"
        )
    return tuple(zip(labels, counts))


def missing_ratings(metadata: OverviewMetadata) -> int:
    """Matrix entries that are neither in the train nor the validation split."""

    return max(0, metadata.total_possible - metadata.train_ratings - metadata.valid_ratings)


def format_millions(count: float) -> str:
    return f"{count / 1_000_000:.1f}M"


def format_best_config(best: BestConfig) -> str:
    """One-line banner for the configuration the sweep reports as its winner."""

    return (
        f"Best configuration: k = {best.k}, λW = {best.lambda_w:g}, "
        f"λZ = {best.lambda_z:g} -> valid RMSE {best.valid_rmse:.3f}"
    )


def comparison_series(document: ComparisonDocument) -> tuple[ComparisonBar, ComparisonBar]:
    performance = document.performance_comparison
    return (
        ComparisonBar(
            BASELINE_LABEL,
            performance.baseline.train_rmse,
            performance.baseline.valid_rmse,
        ),
        ComparisonBar(
            MODEL_LABEL,
            performance.collaborative_filtering.train_rmse,
            performance.collaborative_filtering.valid_rmse,
        ),
    )


def current_predictor(document: ComparisonDocument, show_model: bool) -> PredictorPerformance:
    performance = document.performance_comparison
    return performance.collaborative_filtering if show_model else performance.baseline


def improvement_fill(percent: float) -> float:
    """Progress-bar fill in percent; improvements beyond 100% draw a full bar."""

    if not math.isfinite(percent):
        return 100.0 if percent > 0 else 0.0
    return min(max(percent, 0.0), 100.0)
