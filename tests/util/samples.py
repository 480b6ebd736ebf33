"""Small but realistic document payloads shared by the test-suite."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

# (k, lambda_w, lambda_z, train_rmse, valid_rmse)
SWEEP_ROWS: tuple[tuple[int, float, float, float, float], ...] = (
    (5, 0.1, 0.1, 0.80, 0.90),
    (60, 0.1, 0.1, 0.40, 0.90),
    (10, 1.0, 1.0, 0.62, 0.88),
    (10, 0.1, 0.1, 0.55, 0.95),
    (20, 1.0, 1.0, 0.50, 0.91),
    (20, 0.1, 0.1, 0.30, 1.05),
    (30, 1.0, 1.0, 0.45, 0.93),
    (30, 0.1, 0.1, 0.20, 1.10),
    (40, 1.0, 1.0, 0.40, 0.96),
    (50, 1.0, 1.0, 0.35, 0.99),
    (60, 1.0, 1.0, 0.30, 1.02),
    (5, 1.0, 1.0, 0.85, 0.89),
)

# positions of SWEEP_ROWS ordered by valid_rmse (stable)
EXPECTED_TOP10 = (2, 11, 0, 1, 4, 6, 3, 8, 9, 10)


def result_row(
    k: int, lambda_w: float, lambda_z: float, train: float, valid: float
) -> dict[str, Any]:
    return {
        "k": k,
        "lambda_w": lambda_w,
        "lambda_z": lambda_z,
        "train_rmse": train,
        "valid_rmse": valid,
        "overfitting_gap": valid - train,
        "total_regularization": lambda_w + lambda_z,
    }


def sweep_payload(
    rows: tuple[tuple[int, float, float, float, float], ...] = SWEEP_ROWS,
    *,
    best: tuple[int, float, float, float] | None = None,
    k_values: list[int] | None = None,
) -> dict[str, Any]:
    results = [result_row(*row) for row in rows]
    if best is None:
        if rows:
            top = min(rows, key=lambda row: row[4])
            best = (top[0], top[1], top[2], top[4])
        else:
            best = (10, 1.0, 1.0, 0.88)
    return {
        "metadata": {
            "total_combinations": len(results),
            "k_values": k_values
            if k_values is not None
            else sorted({row[0] for row in rows}) or [10],
            "lambda_values": [0.1, 1.0],
            "best_config": {
                "k": best[0],
                "lambda_w": best[1],
                "lambda_z": best[2],
                "valid_rmse": best[3],
            },
            "baseline_rmse": {"train": 0.94, "valid": 0.98},
        },
        "results": results,
    }


def overview_payload(
    *,
    labels: list[str] | None = None,
    counts: list[int] | None = None,
    matrix: list[list[float]] | None = None,
) -> dict[str, Any]:
    return {
        "metadata": {
            "n_users": 610,
            "n_movies": 9724,
            "train_ratings": 80668,
            "valid_ratings": 20168,
            "total_possible": 5931640,
            "sparsity_percent": 98.3,
            "avg_rating_train": 3.5,
        },
        "distributions": {
            "rating_counts": counts if counts is not None else [100, 200, 300, 400, 500],
            "rating_labels": labels if labels is not None else ["1", "2", "3", "4", "5"],
        },
        "sparsity_sample": {
            "matrix": matrix if matrix is not None else [[0, 4.5, 3.0], [5.0, 0, 1.0]],
            "size": 3,
        },
    }


def comparison_payload() -> dict[str, Any]:
    return {
        "model_info": {
            "k": 10,
            "lambda_w": 1.0,
            "lambda_z": 1.0,
            "n_users": 610,
            "n_movies": 9724,
        },
        "performance_comparison": {
            "baseline": {
                "train_rmse": 0.94,
                "valid_rmse": 0.98,
                "description": "Global mean plus user and movie biases",
            },
            "collaborative_filtering": {
                "train_rmse": 0.62,
                "valid_rmse": 0.88,
                "description": "Matrix factorization with k=10",
            },
        },
        "improvement": {
            "train_improvement": 0.32,
            "valid_improvement": 0.10,
            "train_improvement_percent": 34.04,
            "valid_improvement_percent": 10.2,
        },
    }


def write_documents(
    directory: Path,
    *,
    overview: dict[str, Any] | None = None,
    comparison: dict[str, Any] | None = None,
    sweep: dict[str, Any] | None = None,
) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "overview.json").write_text(
        json.dumps(overview if overview is not None else overview_payload()), encoding="utf-8"
    )
    (directory / "chapter2_baseline_vs_model.json").write_text(
        json.dumps(comparison if comparison is not None else comparison_payload()),
        encoding="utf-8",
    )
    (directory / "chapter3_hyperparameter_sweep.json").write_text(
        json.dumps(sweep if sweep is not None else sweep_payload()), encoding="utf-8"
    )
    return directory
