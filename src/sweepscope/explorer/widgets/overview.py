# mypy: ignore-errors
"""Dataset overview pane: headline numbers, sparsity heatmap and rating histogram."""

from __future__ import annotations

from typing import Any

from sweepscope.core.heatmap import (
    LEGEND_MISSING,
    LEGEND_OBSERVED,
    HeatmapRender,
    render_heatmap,
    to_rgba_image,
)
from sweepscope.core.summaries import format_millions, missing_ratings, rating_series
from sweepscope.models import OverviewDocument

from .common import (
    AXIS_TEXT,
    QHBoxLayout,
    QLabel,
    QVBoxLayout,
    QWidget,
    make_error_label,
    make_heading,
    make_plot,
    pg,
    set_error,
)


def format_overview(document: OverviewDocument) -> str:
    meta = document.metadata
    return "\n".join(
        [
            f"Users: {meta.n_users:,}    Movies: {meta.n_movies:,}",
            f"Training ratings: {meta.train_ratings:,}    "
            f"Validation ratings: {meta.valid_ratings:,}",
            f"Missing ratings: {format_millions(missing_ratings(meta))} "
            f"({meta.sparsity_percent:.2f}% sparse)",
            f"Average training rating: {meta.avg_rating_train:.2f}",
        ]
    )


class OverviewPane(QWidget):  # type: ignore[misc]
    """Shows the shape of the rating matrix before any model is fitted."""

    def __init__(self, parent: QWidget | None = None) -> None:  # type: ignore[override]
        super().__init__(parent)
        self.setObjectName("missionPane")
        self.setProperty("paneKind", "overview")
        layout = QVBoxLayout(self)  # type: ignore[call-arg]
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)
        layout.addWidget(make_heading("Dataset Overview"))

        self.error_label = make_error_label()
        layout.addWidget(self.error_label)

        self.stats_label = QLabel("No dataset loaded")  # type: ignore[call-arg]
        self.stats_label.setObjectName("overviewStats")
        self.stats_label.setWordWrap(True)
        layout.addWidget(self.stats_label)

        charts = QHBoxLayout()  # type: ignore[call-arg]
        charts.setSpacing(12)
        heatmap_column = QVBoxLayout()  # type: ignore[call-arg]

        self._heatmap_plot: Any = None
        self._heatmap_item: Any = None
        self._rating_plot: Any = None
        self._rating_bars: Any = None
        if pg is not None:
            self._heatmap_plot = make_plot(
                "heatmapPlot", title="Rating matrix sample", title_color="#38BDF8"
            )
            self._heatmap_plot.setMouseEnabled(x=False, y=False)
            self._heatmap_plot.hideAxis("bottom")  # type: ignore[attr-defined]
            self._heatmap_plot.hideAxis("left")  # type: ignore[attr-defined]
            self._heatmap_plot.invertY(True)  # type: ignore[attr-defined]
            self._heatmap_plot.setAspectLocked(True)  # type: ignore[attr-defined]
            self._heatmap_item = pg.ImageItem()  # type: ignore[attr-defined]
            self._heatmap_plot.addItem(self._heatmap_item)  # type: ignore[attr-defined]
            self._heatmap_plot.scene().sigMouseMoved.connect(self._on_heatmap_hover)  # type: ignore[attr-defined]
            heatmap_column.addWidget(self._heatmap_plot, 1)

            self._rating_plot = make_plot(
                "ratingPlot", title="Rating distribution", title_color="#3B82F6"
            )
            self._rating_plot.showGrid(x=False, y=True, alpha=0.25)  # type: ignore[attr-defined]
            self._rating_plot.setLabel("left", "Ratings", color="#3B82F6")  # type: ignore[attr-defined]
            self._rating_plot.setLabel("bottom", "Stars", color=AXIS_TEXT)  # type: ignore[attr-defined]

        self.heatmap_status = QLabel("")  # type: ignore[call-arg]
        self.heatmap_status.setObjectName("histStatusLabel")
        self.heatmap_status.setVisible(False)
        heatmap_column.addWidget(self.heatmap_status)

        self.legend_label = QLabel(f"{LEGEND_MISSING}    {LEGEND_OBSERVED}")  # type: ignore[call-arg]
        self.legend_label.setObjectName("heatmapLegend")
        heatmap_column.addWidget(self.legend_label)

        self.hover_label = QLabel("")  # type: ignore[call-arg]
        self.hover_label.setObjectName("heatmapHover")
        heatmap_column.addWidget(self.hover_label)

        charts.addLayout(heatmap_column, 1)
        if self._rating_plot is not None:
            charts.addWidget(self._rating_plot, 1)
        layout.addLayout(charts, 1)

        self.heatmap_render: HeatmapRender | None = None
        self.ratings: tuple[tuple[str, int], ...] = ()

    def update_overview(self, document: OverviewDocument, *, width: float, height: float) -> None:
        """Re-render every chart from ``document``; shape errors propagate to the caller."""

        render = render_heatmap(document.sparsity_sample.matrix, width, height)
        ratings = rating_series(document.distributions)
        set_error(self.error_label, None)
        self.stats_label.setText(format_overview(document))
        self.heatmap_render = render
        self.ratings = ratings
        self._draw_heatmap(render)
        self._draw_ratings(ratings)

    def show_error(self, message: str) -> None:
        set_error(self.error_label, message)
        self.heatmap_render = None
        self.ratings = ()
        if self._heatmap_item is not None:
            self._heatmap_item.clear()  # type: ignore[attr-defined]
        if self._rating_bars is not None and self._rating_plot is not None:
            self._rating_plot.removeItem(self._rating_bars)  # type: ignore[attr-defined]
            self._rating_bars = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _draw_heatmap(self, render: HeatmapRender) -> None:
        self.heatmap_status.setText(render.placeholder or "")
        self.heatmap_status.setVisible(render.is_placeholder)
        if self._heatmap_item is None or self._heatmap_plot is None:
            return
        if render.is_placeholder:
            self._heatmap_item.clear()  # type: ignore[attr-defined]
            return
        self._heatmap_item.setImage(to_rgba_image(render), autoLevels=False)  # type: ignore[attr-defined]
        view_box = self._heatmap_plot.getViewBox()
        view_box.setRange(xRange=(0, render.cols), yRange=(0, render.rows), padding=0.0)  # type: ignore[attr-defined]

    def _draw_ratings(self, ratings: tuple[tuple[str, int], ...]) -> None:
        if self._rating_plot is None:
            return
        if self._rating_bars is not None:
            self._rating_plot.removeItem(self._rating_bars)  # type: ignore[attr-defined]
        xs = list(range(len(ratings)))
        self._rating_bars = pg.BarGraphItem(  # type: ignore[attr-defined]
            x=xs,
            height=[count for _, count in ratings],
            width=0.7,
            brush=pg.mkBrush("#3B82F6"),
        )
        self._rating_plot.addItem(self._rating_bars)  # type: ignore[attr-defined]
        axis = self._rating_plot.getPlotItem().getAxis("bottom")
        axis.setTicks([[(x, label) for x, (label, _) in zip(xs, ratings)]])

    def _on_heatmap_hover(self, scene_pos: Any) -> None:
        render = self.heatmap_render
        if render is None or render.is_placeholder or self._heatmap_plot is None:
            return
        point = self._heatmap_plot.getViewBox().mapSceneToView(scene_pos)
        cell = render.cell_at(point.x() * render.cell_width, point.y() * render.cell_height)
        if cell is None:
            self.hover_label.setText("")
        elif cell.missing:
            self.hover_label.setText(f"User {cell.row}, movie {cell.col}: not rated")
        else:
            self.hover_label.setText(f"User {cell.row}, movie {cell.col}: {cell.value:g}")