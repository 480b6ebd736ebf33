"""Aggregate statistics and best-configuration ranking over sweep results."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from sweepscope.config import GapPolicy
from sweepscope.contracts.error import EmptyInputError, InvalidArgumentError
from sweepscope.models import SweepResult

DEFAULT_TOP_N = 10

__all__ = [
    "DEFAULT_TOP_N",
    "GapAssessment",
    "SweepStatistics",
    "assess_gap",
    "compute_statistics",
    "format_statistics",
    "frontier",
    "frontier_indices",
    "rank_by_valid",
]


class GapAssessment(StrEnum):
    """Overfitting classes shown next to a selected configuration."""

    GOOD = "Good Generalization"
    MODERATE = "Moderate Overfitting"
    SEVERE = "Severe Overfitting"


@dataclass(frozen=True, slots=True)
class SweepStatistics:
    best_valid: float
    worst_valid: float
    best_train: float
    worst_train: float
    min_gap: float
    max_gap: float

    def to_dict(self) -> dict[str, float]:
        return {
            "best_valid": self.best_valid,
            "worst_valid": self.worst_valid,
            "best_train": self.best_train,
            "worst_train": self.worst_train,
            "min_gap": self.min_gap,
            "max_gap": self.max_gap,
        }


def compute_statistics(results: Sequence[SweepResult]) -> SweepStatistics:
    """Single pass over ``results`` collecting error and gap extrema."""

    if not results:
        raise EmptyInputError("cannot compute sweep statistics over zero results")
    first = results[0]
    best_valid = worst_valid = first.valid_rmse
    best_train = worst_train = first.train_rmse
    min_gap = max_gap = first.overfitting_gap
    for result in results[1:]:
        valid = result.valid_rmse
        train = result.train_rmse
        gap = result.overfitting_gap
        if valid < best_valid:
            best_valid = valid
        elif valid > worst_valid:
            worst_valid = valid
        if train < best_train:
            best_train = train
        elif train > worst_train:
            worst_train = train
        if gap < min_gap:
            min_gap = gap
        elif gap > max_gap:
            max_gap = gap
    return SweepStatistics(
        best_valid=best_valid,
        worst_valid=worst_valid,
        best_train=best_train,
        worst_train=worst_train,
        min_gap=min_gap,
        max_gap=max_gap,
    )


def frontier_indices(results: Sequence[SweepResult], n: int = DEFAULT_TOP_N) -> tuple[int, ...]:
    """Positions of the ``n`` results with the smallest validation RMSE.

    Ties keep their original order (``sorted`` is stable). Train error is not
    consulted: this is a best-by-validation ranking, not a dominance frontier.
    """

    if n <= 0:
        raise InvalidArgumentError(f"top-N size must be positive, got {n}")
    order = sorted(range(len(results)), key=lambda index: results[index].valid_rmse)
    return tuple(order[:n])


def frontier(results: Sequence[SweepResult], n: int = DEFAULT_TOP_N) -> tuple[SweepResult, ...]:
    return tuple(results[index] for index in frontier_indices(results, n))


def rank_by_valid(results: Sequence[SweepResult], point: SweepResult) -> int:
    """1 + number of results with a strictly smaller validation RMSE."""

    return 1 + sum(1 for result in results if result.valid_rmse < point.valid_rmse)


def assess_gap(gap: float, policy: GapPolicy | None = None) -> GapAssessment:
    policy = policy or GapPolicy()
    if gap < policy.good_below:
        return GapAssessment.GOOD
    if gap < policy.moderate_below:
        return GapAssessment.MODERATE
    return GapAssessment.SEVERE


def format_statistics(stats: SweepStatistics, total: int) -> str:
    lines = [
        f"Combinations tested: {total:,}",
        f"Best valid RMSE:     {stats.best_valid:.3f}",
        f"Worst valid RMSE:    {stats.worst_valid:.3f}",
        f"Train RMSE range:    {stats.best_train:.3f} to {stats.worst_train:.3f}",
        f"Overfitting gap:     {stats.min_gap:.3f} to {stats.max_gap:.3f}",
    ]
    return "\n".join(lines)
