# mypy: ignore-errors
"""Optional Qt/pyqtgraph imports and small helpers shared by the explorer panes.

Every pane module imports its Qt names from here so that a missing PyQt6
install degrades to plain ``object`` placeholders: the modules still import,
and :func:`sweepscope.explorer.app.run_explorer` reports the missing extra.
"""

from __future__ import annotations

from typing import Any, cast

QT_IMPORT_ERROR: Exception | None = None

try:  # pragma: no cover - only when PyQt6 is present
    from PyQt6.QtCore import Qt
    from PyQt6.QtWidgets import (
        QCheckBox,
        QComboBox,
        QGridLayout,
        QHBoxLayout,
        QLabel,
        QPlainTextEdit,
        QProgressBar,
        QTabWidget,
        QVBoxLayout,
        QWidget,
    )
except Exception as exc:  # pragma: no cover - headless environments  # noqa: BLE001
    QT_IMPORT_ERROR = exc
    Qt = None  # type: ignore[assignment]
    QWidget = cast(Any, object)
    QLabel = cast(Any, object)
    QVBoxLayout = cast(Any, object)
    QHBoxLayout = cast(Any, object)
    QGridLayout = cast(Any, object)
    QPlainTextEdit = cast(Any, object)
    QCheckBox = cast(Any, None)
    QComboBox = cast(Any, None)
    QProgressBar = cast(Any, None)
    QTabWidget = cast(Any, None)

try:  # pragma: no cover - optional plotting dependency
    import pyqtgraph as pg  # type: ignore[import-not-found]
except Exception:  # pragma: no cover - charting optional  # noqa: BLE001
    pg = cast(Any, None)
else:  # pragma: no cover - requires pyqtgraph
    # matrices arrive as rows of users, so keep numpy's row-major order
    pg.setConfigOptions(
        background="#121212",
        foreground="#EEEEEE",
        imageAxisOrder="row-major",
        antialias=True,
    )

PLOT_BACKGROUND = "#11141d"
PLOT_BORDER = "#2D2D2D"
AXIS_TEXT = "#8CA3AF"


def make_heading(text: str) -> QLabel:
    heading = QLabel(text)  # type: ignore[call-arg]
    heading.setObjectName("paneHeading")
    return heading


def make_error_label() -> QLabel:
    """Hidden, word-wrapped label a pane uses to report load or render failures."""

    label = QLabel("")  # type: ignore[call-arg]
    label.setObjectName("paneError")
    label.setWordWrap(True)
    label.setVisible(False)
    return label


def set_error(label: Any, message: str | None) -> None:
    """Show ``message`` in a pane's error label, or hide the label when ``None``."""

    label.setText(message or "")
    label.setVisible(message is not None)


def make_plot(name: str, *, title: str, title_color: str) -> Any:
    """Return a themed ``PlotWidget``, or ``None`` when pyqtgraph is unavailable."""

    if pg is None:
        return None
    widget = pg.PlotWidget()  # type: ignore[attr-defined]
    widget.setObjectName(name)
    widget.setMenuEnabled(False)
    widget.setStyleSheet(
        f"border: 1px solid {PLOT_BORDER}; border-radius: 12px; background-color: {PLOT_BACKGROUND};"
    )
    plot_item = widget.getPlotItem()
    plot_item.setTitle(
        f"<span style='color:{title_color}; font-size:14px; font-weight:600;'>{title}</span>"
    )
    border_pen = pg.mkPen(PLOT_BORDER, width=1.1)  # type: ignore[attr-defined]
    text_pen = pg.mkPen(AXIS_TEXT)  # type: ignore[attr-defined]
    for side in ("left", "bottom"):
        axis = plot_item.getAxis(side)
        axis.setPen(border_pen)
        axis.setTextPen(text_pen)
    plot_item.getViewBox().setBorder(border_pen)
    return widget


__all__ = [
    "AXIS_TEXT",
    "QT_IMPORT_ERROR",
    "QCheckBox",
    "QComboBox",
    "QGridLayout",
    "QHBoxLayout",
    "QLabel",
    "QPlainTextEdit",
    "QProgressBar",
    "QTabWidget",
    "QVBoxLayout",
    "QWidget",
    "Qt",
    "make_error_label",
    "make_heading",
    "make_plot",
    "pg",
    "set_error",
]
