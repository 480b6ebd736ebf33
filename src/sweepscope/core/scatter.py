"""Plot-ready scatter points for the train-vs-validation view."""

from __future__ import annotations

from dataclasses import dataclass

from sweepscope.models import SweepResult

from .axis import AxisScale
from .colors import gap_color, k_color
from .state import SweepSession
from .stats import GapAssessment, assess_gap

HIGHLIGHT_SIZE = 8
DEFAULT_SIZE = 5
HIGHLIGHT_OUTLINE = "#000000"
HIGHLIGHT_OUTLINE_WIDTH = 2.0
BASELINE_COLOR = "#ef4444"

__all__ = [
    "ScatterFrame",
    "ScatterPoint",
    "SelectionDetails",
    "build_scatter",
    "describe_selection",
    "format_selection",
    "format_tooltip",
]


@dataclass(frozen=True, slots=True)
class ScatterPoint:
    index: int
    result: SweepResult
    x: float
    y: float
    fill: str
    highlighted: bool

    @property
    def size(self) -> int:
        return HIGHLIGHT_SIZE if self.highlighted else DEFAULT_SIZE

    @property
    def outline(self) -> str | None:
        return HIGHLIGHT_OUTLINE if self.highlighted else None

    @property
    def outline_width(self) -> float:
        return HIGHLIGHT_OUTLINE_WIDTH if self.highlighted else 0.0


@dataclass(frozen=True)
class ScatterFrame:
    points: tuple[ScatterPoint, ...]
    x_axis: AxisScale
    y_axis: AxisScale
    baseline_valid: float
    total: int

    def to_pixels(self, point: ScatterPoint, width: float, height: float) -> tuple[float, float]:
        """Screen coordinates with the origin top-left (y grows downward)."""

        px = self.x_axis.normalise(point.x) * width
        py = (1.0 - self.y_axis.normalise(point.y)) * height
        return (px, py)

    def point_for(self, index: int) -> ScatterPoint | None:
        for point in self.points:
            if point.index == index:
                return point
        return None


@dataclass(frozen=True, slots=True)
class SelectionDetails:
    result: SweepResult
    rank: int
    total: int
    assessment: GapAssessment

    @property
    def assessment_color(self) -> str:
        return gap_color(self.assessment)


def build_scatter(session: SweepSession) -> ScatterFrame:
    """Compose the filtered results with colour, highlight and axis decisions.

    Axis domains come from the statistics of the full result set, so the
    frame does not jump around when the k filter narrows the points.
    """

    x_axis = session.x_axis
    y_axis = session.y_axis
    points = tuple(
        ScatterPoint(
            index=index,
            result=session.results[index],
            x=session.results[index].train_rmse,
            y=session.results[index].valid_rmse,
            fill=k_color(session.results[index].k),
            highlighted=session.is_highlighted(index),
        )
        for index in session.filtered_indices()
    )
    return ScatterFrame(
        points=points,
        x_axis=x_axis,
        y_axis=y_axis,
        baseline_valid=session.sweep.metadata.baseline_rmse.valid,
        total=len(session.results),
    )


def describe_selection(session: SweepSession) -> SelectionDetails | None:
    point = session.selected_point
    rank = session.selected_rank()
    if point is None or rank is None:
        return None
    return SelectionDetails(
        result=point,
        rank=rank,
        total=len(session.results),
        assessment=assess_gap(point.overfitting_gap, session.gaps),
    )


def format_tooltip(result: SweepResult) -> str:
    return "\n".join(
        [
            f"k = {result.k}",
            f"λW = {result.lambda_w:g}",
            f"λZ = {result.lambda_z:g}",
            f"Train: {result.train_rmse:.3f}",
            f"Valid: {result.valid_rmse:.3f}",
            f"Gap: {result.overfitting_gap:.3f}",
        ]
    )


def format_selection(details: SelectionDetails) -> str:
    result = details.result
    return "\n".join(
        [
            f"k = {result.k}   λW = {result.lambda_w:g}   λZ = {result.lambda_z:g}",
            f"Train RMSE       {result.train_rmse:.4f}",
            f"Valid RMSE       {result.valid_rmse:.4f}",
            f"Overfitting Gap  {result.overfitting_gap:.4f}",
            f"Assessment: {details.assessment}",
            f"Rank by Valid RMSE: #{details.rank} of {details.total}",
        ]
    )
