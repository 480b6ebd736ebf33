"""Pydantic record schemas for the three exploration documents.

Every document the explorer consumes is validated once, at the load boundary,
against the models below. Downstream code only ever sees these frozen models,
so a missing or malformed field surfaces as a ``DataShapeError`` at load time
instead of as a rendering glitch deep inside a chart.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_NUMBER_TYPES = (int, float)


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", allow_inf_nan=False)


class SweepResult(_Record):
    """One evaluated (k, lambda_w, lambda_z) configuration."""

    k: int = Field(..., gt=0, description="Latent factor count.")
    lambda_w: float = Field(..., ge=0.0, description="Regularization on movie factors (W).")
    lambda_z: float = Field(..., ge=0.0, description="Regularization on user factors (Z).")
    train_rmse: float = Field(..., ge=0.0)
    valid_rmse: float = Field(..., ge=0.0)
    overfitting_gap: float = Field(..., description="valid_rmse - train_rmse.")
    total_regularization: float = Field(..., ge=0.0)

    @model_validator(mode="before")
    @classmethod
    def _derive_optional_fields(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        payload = dict(data)
        train = payload.get("train_rmse")
        valid = payload.get("valid_rmse")
        if payload.get("overfitting_gap") is None and _is_number(train) and _is_number(valid):
            payload["overfitting_gap"] = float(valid) - float(train)
        lambda_w = payload.get("lambda_w")
        lambda_z = payload.get("lambda_z")
        if (
            payload.get("total_regularization") is None
            and _is_number(lambda_w)
            and _is_number(lambda_z)
        ):
            payload["total_regularization"] = float(lambda_w) + float(lambda_z)
        return payload

    @property
    def key(self) -> tuple[int, float, float]:
        return (self.k, self.lambda_w, self.lambda_z)


class BestConfig(_Record):
    k: int = Field(..., gt=0)
    lambda_w: float = Field(..., ge=0.0)
    lambda_z: float = Field(..., ge=0.0)
    valid_rmse: float = Field(..., ge=0.0)

    @property
    def key(self) -> tuple[int, float, float]:
        return (self.k, self.lambda_w, self.lambda_z)


class ErrorPair(_Record):
    train: float = Field(..., ge=0.0)
    valid: float = Field(..., ge=0.0)


class SweepMetadata(_Record):
    total_combinations: int = Field(..., ge=0)
    k_values: tuple[int, ...]
    lambda_values: tuple[float, ...] = ()
    best_config: BestConfig
    baseline_rmse: ErrorPair


class SweepDocument(_Record):
    """Sweep document: metadata plus the ordered result records."""

    metadata: SweepMetadata
    results: tuple[SweepResult, ...]

    @model_validator(mode="after")
    def _best_config_present(self) -> SweepDocument:
        if not self.results:
            return self
        wanted = self.metadata.best_config.key
        if not any(result.key == wanted for result in self.results):
            k, lambda_w, lambda_z = wanted
            raise ValueError(
                "metadata.best_config "
                f"(k={k}, lambda_w={lambda_w}, lambda_z={lambda_z}) is not among the results"
            )
        return self

    @property
    def k_options(self) -> tuple[int, ...]:
        """Filterable k values: the declared ones first, then any extra seen in results."""

        seen: list[int] = list(dict.fromkeys(self.metadata.k_values))
        for result in self.results:
            if result.k not in seen:
                seen.append(result.k)
        return tuple(seen)


class OverviewMetadata(_Record):
    n_users: int = Field(..., ge=0)
    n_movies: int = Field(..., ge=0)
    train_ratings: int = Field(..., ge=0)
    valid_ratings: int = Field(..., ge=0)
    total_possible: int = Field(..., ge=0)
    sparsity_percent: float = Field(..., ge=0.0, le=100.0)
    avg_rating_train: float


class RatingDistributions(_Record):
    rating_counts: tuple[int, ...]
    rating_labels: tuple[str, ...]
    user_activity_hist: tuple[float, ...] = ()
    movie_popularity_hist: tuple[float, ...] = ()

    @model_validator(mode="after")
    def _parallel_arrays(self) -> RatingDistributions:
        if len(self.rating_counts) != len(self.rating_labels):
            raise ValueError(
                "rating_labels and rating_counts have different lengths "
                f"({len(self.rating_labels)} != {len(self.rating_counts)})"
            )
        return self


class SparsitySample(_Record):
    matrix: tuple[tuple[float, ...], ...]
    size: int = Field(..., ge=0)

    @field_validator("matrix")
    @classmethod
    def _rectangular_non_negative(
        cls, value: tuple[tuple[float, ...], ...]
    ) -> tuple[tuple[float, ...], ...]:
        if not value:
            return value
        width = len(value[0])
        for row_index, row in enumerate(value):
            if len(row) != width:
                raise ValueError(
                    f"row {row_index} has {len(row)} columns, expected {width}"
                )
            for cell in row:
                if cell < 0.0:
                    raise ValueError(f"row {row_index} contains a negative value ({cell})")
        return value


class OverviewDocument(_Record):
    metadata: OverviewMetadata
    distributions: RatingDistributions
    sparsity_sample: SparsitySample


class ModelInfo(_Record):
    k: int = Field(..., gt=0)
    lambda_w: float = Field(..., ge=0.0)
    lambda_z: float = Field(..., ge=0.0)
    n_users: int = Field(..., ge=0)
    n_movies: int = Field(..., ge=0)


class PredictorPerformance(_Record):
    train_rmse: float = Field(..., ge=0.0)
    valid_rmse: float = Field(..., ge=0.0)
    description: str = ""


class PerformanceComparison(_Record):
    baseline: PredictorPerformance
    collaborative_filtering: PredictorPerformance


class Improvement(_Record):
    train_improvement: float
    valid_improvement: float
    train_improvement_percent: float
    valid_improvement_percent: float


class ComparisonDocument(_Record):
    """Baseline predictor vs. the hand-picked factorization model."""

    model_info: ModelInfo
    performance_comparison: PerformanceComparison
    improvement: Improvement


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, _NUMBER_TYPES)
        and not isinstance(value, bool)
        and math.isfinite(float(value))
    )


__all__ = [
    "BestConfig",
    "ComparisonDocument",
    "ErrorPair",
    "Improvement",
    "ModelInfo",
    "OverviewDocument",
    "OverviewMetadata",
    "PerformanceComparison",
    "PredictorPerformance",
    "RatingDistributions",
    "SparsitySample",
    "SweepDocument",
    "SweepMetadata",
    "SweepResult",
]
