# mypy: ignore-errors
"""Hyperparameter sweep pane: train-vs-validation scatter with filter and highlight."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from sweepscope.core.colors import gap_color, k_legend
from sweepscope.core.scatter import (
    BASELINE_COLOR,
    ScatterFrame,
    build_scatter,
    describe_selection,
    format_selection,
    format_tooltip,
)
from sweepscope.core.state import ALL, KFilter, SweepSession
from sweepscope.core.stats import SweepStatistics
from sweepscope.core.summaries import format_best_config

from .common import (
    AXIS_TEXT,
    QCheckBox,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QPlainTextEdit,
    Qt,
    QVBoxLayout,
    QWidget,
    make_error_label,
    make_heading,
    make_plot,
    pg,
    set_error,
)

ALL_LABEL = "All k values"
NO_SELECTION_TEXT = "Click a point to inspect a configuration."


def format_summary(stats: SweepStatistics, declared: int) -> str:
    """Search summary cards: declared combinations plus error extrema."""

    return (
        f"Combinations tested: {declared:,}    "
        f"Best valid RMSE: {stats.best_valid:.3f}    "
        f"Worst valid RMSE: {stats.worst_valid:.3f}    "
        f"Max gap: {stats.max_gap:.3f}"
    )


def legend_html() -> str:
    swatches = [
        f"<span style='color:{color};'>&#9679;</span> {label}" for label, color in k_legend()
    ]
    return "&nbsp;&nbsp;".join(swatches)


class SweepPane(QWidget):  # type: ignore[misc]
    """Scatter of every evaluated configuration, coloured by k."""

    def __init__(self, parent: QWidget | None = None) -> None:  # type: ignore[override]
        super().__init__(parent)
        self.setObjectName("missionPane")
        self.setProperty("paneKind", "sweep")
        layout = QVBoxLayout(self)  # type: ignore[call-arg]
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)
        layout.addWidget(make_heading("Hyperparameter Sweep"))

        self.error_label = make_error_label()
        layout.addWidget(self.error_label)

        self.best_config_label = QLabel("")  # type: ignore[call-arg]
        self.best_config_label.setObjectName("bestConfigBanner")
        layout.addWidget(self.best_config_label)

        self.summary_label = QLabel("No dataset loaded")  # type: ignore[call-arg]
        self.summary_label.setObjectName("sweepSummary")
        self.summary_label.setWordWrap(True)
        layout.addWidget(self.summary_label)

        controls = QHBoxLayout()  # type: ignore[call-arg]
        controls.setContentsMargins(0, 0, 0, 0)
        controls.addWidget(QLabel("Filter by k:"))  # type: ignore[call-arg]
        self.filter_combo = QComboBox()  # type: ignore[call-arg]
        self.filter_combo.setObjectName("kFilter")
        self.filter_combo.addItem(ALL_LABEL, ALL)
        self.filter_combo.currentIndexChanged.connect(self._on_filter_changed)  # type: ignore[attr-defined]
        controls.addWidget(self.filter_combo)
        self.highlight_checkbox = QCheckBox("Highlight top 10 models")  # type: ignore[call-arg]
        self.highlight_checkbox.setChecked(True)
        self.highlight_checkbox.toggled.connect(self._on_highlight_toggled)  # type: ignore[attr-defined]
        controls.addWidget(self.highlight_checkbox)
        controls.addStretch()
        layout.addLayout(controls)

        self.legend_label = QLabel(legend_html())  # type: ignore[call-arg]
        self.legend_label.setObjectName("kLegend")
        if Qt is not None:
            self.legend_label.setTextFormat(Qt.TextFormat.RichText)
        layout.addWidget(self.legend_label)

        self._plot: Any = None
        self._scatter: Any = None
        self._baseline: Any = None
        if pg is not None:
            self._plot = make_plot(
                "sweepPlot", title="Train vs. validation RMSE", title_color="#A855F7"
            )
            self._plot.showGrid(x=True, y=True, alpha=0.2)  # type: ignore[attr-defined]
            self._plot.setLabel("bottom", "Train RMSE", color=AXIS_TEXT)  # type: ignore[attr-defined]
            self._plot.setLabel("left", "Validation RMSE", color=AXIS_TEXT)  # type: ignore[attr-defined]
            self._scatter = pg.ScatterPlotItem(hoverable=True, tip=self._tooltip)  # type: ignore[attr-defined]
            self._scatter.sigClicked.connect(self._on_points_clicked)  # type: ignore[attr-defined]
            self._plot.addItem(self._scatter)  # type: ignore[attr-defined]
            layout.addWidget(self._plot, 1)

        self.details_view = QPlainTextEdit(self)  # type: ignore[call-arg]
        self.details_view.setObjectName("selectionDetails")
        self.details_view.setReadOnly(True)
        self.details_view.setPlainText(NO_SELECTION_TEXT)
        self.details_view.setMaximumHeight(140)
        layout.addWidget(self.details_view)
        self.assessment_label = QLabel("")  # type: ignore[call-arg]
        self.assessment_label.setObjectName("gapAssessment")
        layout.addWidget(self.assessment_label)

        self._filter_callbacks: list[Callable[[KFilter], None]] = []
        self._highlight_callbacks: list[Callable[[bool], None]] = []
        self._point_callbacks: list[Callable[[int], None]] = []
        self._session: SweepSession | None = None
        self._populating = False
        self.frame: ScatterFrame | None = None

    # ------------------------------------------------------------------
    # Callback registration
    # ------------------------------------------------------------------
    def add_filter_callback(self, callback: Callable[[KFilter], None]) -> None:
        self._filter_callbacks.append(callback)

    def add_highlight_callback(self, callback: Callable[[bool], None]) -> None:
        self._highlight_callbacks.append(callback)

    def add_point_callback(self, callback: Callable[[int], None]) -> None:
        self._point_callbacks.append(callback)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def set_options(self, k_options: tuple[int, ...], top_n: int) -> None:
        """Rebuild the filter choices for a newly loaded sweep."""

        self._populating = True
        try:
            self.filter_combo.clear()
            self.filter_combo.addItem(ALL_LABEL, ALL)
            for k in k_options:
                self.filter_combo.addItem(f"k = {k}", k)
            self.filter_combo.setCurrentIndex(0)
            self.highlight_checkbox.setText(f"Highlight top {top_n} models")
        finally:
            self._populating = False

    def render(self, session: SweepSession) -> None:
        """Redraw from ``session``; an empty sweep raises ``EmptyInputError``."""

        stats = session.statistics
        frame = build_scatter(session)
        self._session = session
        self.frame = frame
        set_error(self.error_label, None)
        metadata = session.sweep.metadata
        self.best_config_label.setText(format_best_config(metadata.best_config))
        self.summary_label.setText(format_summary(stats, metadata.total_combinations))
        self._draw_frame(frame)
        self._show_selection(session)

    def show_error(self, message: str) -> None:
        set_error(self.error_label, message)
        self._session = None
        self.frame = None
        self.summary_label.setText("")
        self.best_config_label.setText("")
        self.details_view.setPlainText("")
        self.assessment_label.setText("")
        if self._scatter is not None:
            self._scatter.clear()  # type: ignore[attr-defined]
        if self._baseline is not None and self._plot is not None:
            self._plot.removeItem(self._baseline)  # type: ignore[attr-defined]
            self._baseline = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _draw_frame(self, frame: ScatterFrame) -> None:
        if self._plot is None or self._scatter is None:
            return
        spots = []
        for point in frame.points:
            outline = (
                pg.mkPen(point.outline, width=point.outline_width)  # type: ignore[attr-defined]
                if point.outline is not None
                else pg.mkPen(None)  # type: ignore[attr-defined]
            )
            spots.append(
                {
                    "pos": (point.x, point.y),
                    "size": point.size * 2,
                    "brush": pg.mkBrush(point.fill),  # type: ignore[attr-defined]
                    "pen": outline,
                    "data": point.index,
                }
            )
        self._scatter.setData(spots=spots)  # type: ignore[attr-defined]

        if self._baseline is not None:
            self._plot.removeItem(self._baseline)  # type: ignore[attr-defined]
        self._baseline = pg.InfiniteLine(  # type: ignore[attr-defined]
            pos=frame.baseline_valid,
            angle=0,
            pen=pg.mkPen(BASELINE_COLOR, width=1.5, style=Qt.PenStyle.DashLine),  # type: ignore[attr-defined]
            label=f"Baseline {frame.baseline_valid:.3f}",
            labelOpts={"color": BASELINE_COLOR, "position": 0.95},
        )
        self._plot.addItem(self._baseline)  # type: ignore[attr-defined]

        x_axis, y_axis = frame.x_axis, frame.y_axis
        self._plot.setXRange(x_axis.domain_min, x_axis.domain_max, padding=0.0)  # type: ignore[attr-defined]
        self._plot.setYRange(y_axis.domain_min, y_axis.domain_max, padding=0.0)  # type: ignore[attr-defined]
        plot_item = self._plot.getPlotItem()
        plot_item.getAxis("bottom").setTicks([list(zip(x_axis.ticks, x_axis.tick_labels()))])
        plot_item.getAxis("left").setTicks([list(zip(y_axis.ticks, y_axis.tick_labels()))])

    def _show_selection(self, session: SweepSession) -> None:
        details = describe_selection(session)
        if details is None:
            self.details_view.setPlainText(NO_SELECTION_TEXT)
            self.assessment_label.setText("")
            return
        self.details_view.setPlainText(format_selection(details))
        self.assessment_label.setText(str(details.assessment))
        self.assessment_label.setStyleSheet(f"color: {gap_color(details.assessment)};")

    def _tooltip(self, x: float, y: float, data: Any) -> str:
        del x, y
        if self._session is None or not isinstance(data, int):
            return ""
        return format_tooltip(self._session.results[data])

    def _on_points_clicked(self, _item: Any, points: Any, *_args: Any) -> None:
        if points is None or len(points) == 0:
            return
        index = points[0].data()
        for callback in self._point_callbacks:
            callback(int(index))

    def _on_filter_changed(self, position: int) -> None:
        if self._populating or position < 0:
            return
        value = self.filter_combo.itemData(position)
        for callback in self._filter_callbacks:
            callback(value)

    def _on_highlight_toggled(self, checked: bool) -> None:
        for callback in self._highlight_callbacks:
            callback(bool(checked))
