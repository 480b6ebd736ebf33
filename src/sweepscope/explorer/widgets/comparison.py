# mypy: ignore-errors
"""Baseline predictor vs. collaborative filtering pane."""

from __future__ import annotations

from typing import Any

from sweepscope.core.summaries import (
    COMPARISON_Y_DOMAIN,
    MODEL_LABEL,
    TRAIN_COLOR,
    VALID_COLOR,
    ComparisonBar,
    comparison_series,
    current_predictor,
    improvement_fill,
)
from sweepscope.models import ComparisonDocument

from .common import (
    AXIS_TEXT,
    QCheckBox,
    QGridLayout,
    QLabel,
    QProgressBar,
    QVBoxLayout,
    QWidget,
    make_error_label,
    make_heading,
    make_plot,
    pg,
    set_error,
)

_BAR_WIDTH = 0.35


def format_model_info(document: ComparisonDocument) -> str:
    info = document.model_info
    return (
        f"k = {info.k}   λW = {info.lambda_w:g}   λZ = {info.lambda_z:g}   "
        f"({info.n_users:,} users × {info.n_movies:,} movies)"
    )


def format_improvement(value: float, percent: float) -> str:
    return f"{value:.3f} ({percent:.1f}%)"


class ComparisonPane(QWidget):  # type: ignore[misc]
    """Grouped train/valid RMSE bars plus the improvement of the model over the baseline."""

    def __init__(self, parent: QWidget | None = None) -> None:  # type: ignore[override]
        super().__init__(parent)
        self.setObjectName("missionPane")
        self.setProperty("paneKind", "comparison")
        layout = QVBoxLayout(self)  # type: ignore[call-arg]
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)
        layout.addWidget(make_heading("Baseline vs. Collaborative Filtering"))

        self.error_label = make_error_label()
        layout.addWidget(self.error_label)

        self.model_label = QLabel("No dataset loaded")  # type: ignore[call-arg]
        self.model_label.setObjectName("modelInfoLabel")
        layout.addWidget(self.model_label)

        self.model_toggle = QCheckBox(f"Show {MODEL_LABEL} model")  # type: ignore[call-arg]
        self.model_toggle.setChecked(True)
        self.model_toggle.toggled.connect(self._on_toggle)  # type: ignore[attr-defined]
        layout.addWidget(self.model_toggle)

        self.predictor_label = QLabel("")  # type: ignore[call-arg]
        self.predictor_label.setObjectName("predictorLabel")
        self.predictor_label.setWordWrap(True)
        layout.addWidget(self.predictor_label)

        self._plot: Any = None
        self._bars: list[Any] = []
        if pg is not None:
            self._plot = make_plot(
                "comparisonPlot", title="RMSE by predictor", title_color="#F97316"
            )
            self._plot.showGrid(x=False, y=True, alpha=0.25)  # type: ignore[attr-defined]
            self._plot.setLabel("left", "RMSE", color=AXIS_TEXT)  # type: ignore[attr-defined]
            self._plot.setYRange(*COMPARISON_Y_DOMAIN, padding=0.0)  # type: ignore[attr-defined]
            self._plot.setMouseEnabled(x=False, y=False)
            self._plot.addLegend(offset=(10, 10))  # type: ignore[attr-defined]
            layout.addWidget(self._plot, 1)

        grid = QGridLayout()  # type: ignore[call-arg]
        self.train_bar = QProgressBar()  # type: ignore[call-arg]
        self.valid_bar = QProgressBar()  # type: ignore[call-arg]
        self.train_improvement_label = QLabel("")  # type: ignore[call-arg]
        self.valid_improvement_label = QLabel("")  # type: ignore[call-arg]
        for row, (title, bar, label) in enumerate(
            (
                ("Training improvement", self.train_bar, self.train_improvement_label),
                ("Validation improvement", self.valid_bar, self.valid_improvement_label),
            )
        ):
            bar.setRange(0, 100)
            bar.setTextVisible(False)
            grid.addWidget(QLabel(title), row, 0)  # type: ignore[call-arg]
            grid.addWidget(bar, row, 1)
            grid.addWidget(label, row, 2)
        layout.addLayout(grid)

        self._document: ComparisonDocument | None = None
        self.series: tuple[ComparisonBar, ...] = ()

    @property
    def show_model(self) -> bool:
        return bool(self.model_toggle.isChecked())

    def update_comparison(self, document: ComparisonDocument) -> None:
        self._document = document
        self.series = comparison_series(document)
        set_error(self.error_label, None)
        self.model_label.setText(format_model_info(document))
        self._draw_bars(self.series)
        self._refresh_predictor()

        improvement = document.improvement
        self.train_bar.setValue(int(round(improvement_fill(improvement.train_improvement_percent))))
        self.valid_bar.setValue(int(round(improvement_fill(improvement.valid_improvement_percent))))
        self.train_improvement_label.setText(
            format_improvement(improvement.train_improvement, improvement.train_improvement_percent)
        )
        self.valid_improvement_label.setText(
            format_improvement(improvement.valid_improvement, improvement.valid_improvement_percent)
        )

    def show_error(self, message: str) -> None:
        set_error(self.error_label, message)
        self._document = None
        self.series = ()
        self._draw_bars(())
        self.predictor_label.setText("")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _on_toggle(self, _checked: bool) -> None:
        self._refresh_predictor()

    def _refresh_predictor(self) -> None:
        if self._document is None:
            return
        predictor = current_predictor(self._document, self.show_model)
        lines = [f"Train RMSE {predictor.train_rmse:.3f}   Valid RMSE {predictor.valid_rmse:.3f}"]
        if predictor.description:
            lines.insert(0, predictor.description)
        self.predictor_label.setText("\n".join(lines))

    def _draw_bars(self, series: tuple[ComparisonBar, ...]) -> None:
        if self._plot is None:
            return
        for item in self._bars:
            self._plot.removeItem(item)  # type: ignore[attr-defined]
        self._bars = []
        if not series:
            return
        xs = list(range(len(series)))
        train = pg.BarGraphItem(  # type: ignore[attr-defined]
            x=[x - _BAR_WIDTH / 2 for x in xs],
            height=[bar.train_rmse for bar in series],
            width=_BAR_WIDTH,
            brush=pg.mkBrush(TRAIN_COLOR),
            name="Train RMSE",
        )
        valid = pg.BarGraphItem(  # type: ignore[attr-defined]
            x=[x + _BAR_WIDTH / 2 for x in xs],
            height=[bar.valid_rmse for bar in series],
            width=_BAR_WIDTH,
            brush=pg.mkBrush(VALID_COLOR),
            name="Valid RMSE",
        )
        for item in (train, valid):
            self._plot.addItem(item)  # type: ignore[attr-defined]
            self._bars.append(item)
        axis = self._plot.getPlotItem().getAxis("bottom")
        axis.setTicks([[(x, bar.label) for x, bar in zip(xs, series)]])
