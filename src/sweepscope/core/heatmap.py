"""Sparsity heatmap geometry and colouring."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from sweepscope.contracts.error import DataShapeError, InvalidArgumentError

from .colors import intensity_color, intensity_rgb

PLACEHOLDER_TEXT = "No data available"
LEGEND_MISSING = "Missing ratings (gray)"
LEGEND_OBSERVED = "Observed ratings (blue)"

__all__ = [
    "HeatmapCell",
    "HeatmapRender",
    "LEGEND_MISSING",
    "LEGEND_OBSERVED",
    "PLACEHOLDER_TEXT",
    "positive_max",
    "render_heatmap",
    "to_rgba_image",
]


@dataclass(frozen=True, slots=True)
class HeatmapCell:
    row: int
    col: int
    x: float
    y: float
    width: float
    height: float
    value: float
    color: str

    @property
    def missing(self) -> bool:
        return self.value == 0


@dataclass(frozen=True)
class HeatmapRender:
    width: float
    height: float
    rows: int
    cols: int
    max_value: float
    cells: tuple[HeatmapCell, ...]
    placeholder: str | None = None
    grid: np.ndarray = field(
        default_factory=lambda: np.zeros((0, 0)), compare=False, repr=False
    )

    @property
    def is_placeholder(self) -> bool:
        return self.placeholder is not None

    @property
    def cell_width(self) -> float:
        return self.width / self.cols if self.cols else 0.0

    @property
    def cell_height(self) -> float:
        return self.height / self.rows if self.rows else 0.0

    def cell_at(self, x: float, y: float) -> HeatmapCell | None:
        """Cell under pixel ``(x, y)``, or ``None`` outside the grid."""

        if self.is_placeholder or not (0 <= x < self.width and 0 <= y < self.height):
            return None
        col = min(int(x // self.cell_width), self.cols - 1)
        row = min(int(y // self.cell_height), self.rows - 1)
        return self.cells[row * self.cols + col]


def positive_max(grid: np.ndarray) -> float:
    """Largest observed value, falling back to 1 when nothing is observed."""

    positive = grid[grid > 0]
    if positive.size == 0:
        return 1.0
    return float(positive.max())


def render_heatmap(
    matrix: Sequence[Sequence[float]],
    width: float,
    height: float,
) -> HeatmapRender:
    """Lay out one rectangle per matrix entry over a ``width`` x ``height`` canvas."""

    if not (math.isfinite(width) and math.isfinite(height)) or width <= 0 or height <= 0:
        raise InvalidArgumentError(f"heatmap size must be positive, got {width}x{height}")
    if len(matrix) == 0 or len(matrix[0]) == 0:
        return HeatmapRender(
            width=float(width),
            height=float(height),
            rows=0,
            cols=0,
            max_value=1.0,
            cells=(),
            placeholder=PLACEHOLDER_TEXT,
        )

    rows = len(matrix)
    cols = len(matrix[0])
    for index, row in enumerate(matrix):
        if len(row) != cols:
            raise DataShapeError(
                f"sparsity matrix row {index} has {len(row)} columns, expected {cols}"
            )
    grid = np.asarray(matrix, dtype=float)
    if not np.all(np.isfinite(grid)):
        raise DataShapeError("sparsity matrix contains non-finite values")

    max_value = positive_max(grid)
    cell_width = width / cols
    cell_height = height / rows
    cells = tuple(
        HeatmapCell(
            row=i,
            col=j,
            x=j * cell_width,
            y=i * cell_height,
            width=cell_width,
            height=cell_height,
            value=float(grid[i, j]),
            color=intensity_color(float(grid[i, j]), max_value),
        )
        for i in range(rows)
        for j in range(cols)
    )
    return HeatmapRender(
        width=float(width),
        height=float(height),
        rows=rows,
        cols=cols,
        max_value=max_value,
        cells=cells,
        grid=grid,
    )


def to_rgba_image(render: HeatmapRender) -> np.ndarray:
    """Row-major ``rows x cols x 4`` uint8 image of the rendered cells."""

    image = np.full((render.rows, render.cols, 4), 255, dtype=np.uint8)
    if not render.is_placeholder:
        image[..., :3] = intensity_rgb(render.grid, render.max_value)
    return image
