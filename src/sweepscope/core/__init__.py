from .axis import DEFAULT_TICK_PRECISION, AxisScale, format_tick, nice_axis
from .colors import (
    FALLBACK_COLOR,
    K_COLOR_SCALE,
    MISSING_COLOR,
    gap_color,
    intensity_color,
    k_color,
    k_legend,
    safe_max,
)
from .heatmap import HeatmapCell, HeatmapRender, render_heatmap, to_rgba_image
from .scatter import (
    ScatterFrame,
    ScatterPoint,
    SelectionDetails,
    build_scatter,
    describe_selection,
    format_selection,
    format_tooltip,
)
from .state import ALL, InteractionState, SweepSession
from .stats import (
    DEFAULT_TOP_N,
    GapAssessment,
    SweepStatistics,
    assess_gap,
    compute_statistics,
    format_statistics,
    frontier,
    frontier_indices,
    rank_by_valid,
)
from .summaries import (
    COMPARISON_Y_DOMAIN,
    ComparisonBar,
    comparison_series,
    current_predictor,
    format_best_config,
    format_millions,
    improvement_fill,
    missing_ratings,
    rating_series,
)

__all__ = [
    "ALL",
    "AxisScale",
    "COMPARISON_Y_DOMAIN",
    "ComparisonBar",
    "DEFAULT_TICK_PRECISION",
    "DEFAULT_TOP_N",
    "FALLBACK_COLOR",
    "GapAssessment",
    "HeatmapCell",
    "HeatmapRender",
    "InteractionState",
    "K_COLOR_SCALE",
    "MISSING_COLOR",
    "ScatterFrame",
    "ScatterPoint",
    "SelectionDetails",
    "SweepSession",
    "SweepStatistics",
    "assess_gap",
    "build_scatter",
    "comparison_series",
    "compute_statistics",
    "current_predictor",
    "format_best_config",
    "describe_selection",
    "format_millions",
    "format_selection",
    "format_statistics",
    "format_tick",
    "format_tooltip",
    "frontier",
    "frontier_indices",
    "gap_color",
    "improvement_fill",
    "intensity_color",
    "k_color",
    "k_legend",
    "missing_ratings",
    "nice_axis",
    "rank_by_valid",
    "rating_series",
    "render_heatmap",
    "safe_max",
    "to_rgba_image",
]
