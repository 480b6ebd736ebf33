"""Factory helpers for explorer widgets and windows."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, cast

from sweepscope.config import ExplorerConfig

from . import widgets
from .controller import ExplorerController

if TYPE_CHECKING:  # pragma: no cover - typing only
    from PyQt6.QtWidgets import (
        QApplication as QApplicationLike,
    )
    from PyQt6.QtWidgets import (
        QMainWindow as QMainWindowLike,
    )
    from PyQt6.QtWidgets import (
        QWidget as QWidgetLike,
    )
else:  # pragma: no cover - fallback aliases
    QApplicationLike = Any  # type: ignore[assignment]
    QMainWindowLike = Any  # type: ignore[assignment]
    QWidgetLike = Any  # type: ignore[assignment]

try:  # pragma: no cover - optional dependency in headless environments
    from PyQt6 import QtWidgets as _QtWidgets  # type: ignore[import-not-found]
except ImportError:  # pragma: no cover - fallback when PyQt6 unavailable
    _QtWidgets = None  # type: ignore[assignment]

_QApplication = getattr(_QtWidgets, "QApplication", None)
_QMainWindow = getattr(_QtWidgets, "QMainWindow", None)

QAPPLICATION_CLS: type[QApplicationLike] | None = cast(type[QApplicationLike] | None, _QApplication)
QMAINWINDOW_CLS: type[QMainWindowLike] | None = cast(type[QMainWindowLike] | None, _QMainWindow)

WINDOW_TITLE = "SweepScope – Matrix Factorization Explorer"


def build_widgets(
    parent: QWidgetLike | None = None,
) -> tuple[widgets.OverviewPane, widgets.ComparisonPane, widgets.SweepPane]:
    """Construct the three explorer panes."""

    overview = widgets.OverviewPane(parent)
    comparison = widgets.ComparisonPane(parent)
    sweep = widgets.SweepPane(parent)
    return (overview, comparison, sweep)


def build_controller(
    overview: widgets.OverviewPane,
    comparison: widgets.ComparisonPane,
    sweep: widgets.SweepPane,
    *,
    config: ExplorerConfig | None = None,
) -> ExplorerController:
    """Wire up the explorer controller with the provided panes."""

    return ExplorerController(overview, comparison, sweep, config=config)


def build_window(
    controller: ExplorerController,
    overview: widgets.OverviewPane,
    comparison: widgets.ComparisonPane,
    sweep: widgets.SweepPane,
) -> QMainWindowLike:
    """Create the explorer main window with one tab per pane."""

    if QMAINWINDOW_CLS is None:  # pragma: no cover - PyQt6 missing
        raise RuntimeError("PyQt6 not available")

    from .app import ExplorerWindow

    window = ExplorerWindow()
    window.setObjectName("missionWindow")
    window.resize(1280, 800)
    window.set_controller(controller)

    tabs = widgets.QTabWidget(window)  # type: ignore[call-arg]
    tabs.setObjectName("explorerTabs")
    tabs.addTab(overview, "Overview")  # type: ignore[attr-defined]
    tabs.addTab(comparison, "Baseline vs. Model")  # type: ignore[attr-defined]
    tabs.addTab(sweep, "Hyperparameter Sweep")  # type: ignore[attr-defined]
    window.setCentralWidget(tabs)  # type: ignore[call-arg]

    if not window.windowTitle():
        window.setWindowTitle(WINDOW_TITLE)
    return window


def build_app(argv: Sequence[str] | None = None) -> QApplicationLike:
    if QAPPLICATION_CLS is None:  # pragma: no cover
        raise RuntimeError("PyQt6 not available")
    return QAPPLICATION_CLS(list(argv) if argv is not None else [])
