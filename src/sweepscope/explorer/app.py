# mypy: ignore-errors

"""Explorer desktop app scaffolding.

Wraps the three explorer panes in a PyQt6 main window. When PyQt6 is
unavailable (e.g., in headless CI), attempting to launch the UI raises a
friendly error.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, Sequence, cast

from sweepscope.config import ExplorerConfig

from .builders import WINDOW_TITLE, build_controller, build_widgets, build_window
from .builders import build_app as _build_app

if TYPE_CHECKING:
    from .controller import ExplorerController

logger = logging.getLogger(__name__)

QT_IMPORT_ERROR: Optional[Exception] = None

try:  # pragma: no cover - only executed when PyQt6 is installed
    from PyQt6.QtGui import QAction, QColor, QKeySequence, QPalette  # type: ignore[import-not-found]
    from PyQt6.QtWidgets import QApplication, QMainWindow  # type: ignore[import-not-found]
except Exception as exc:  # pragma: no cover - most environments won't have PyQt6
    QT_IMPORT_ERROR = exc
    QApplication = cast(Any, object)
    QMainWindow = cast(Any, object)
    QPalette = cast(Any, object)
    QColor = cast(Any, object)
    QAction = cast(Any, None)
    QKeySequence = cast(Any, None)

if QT_IMPORT_ERROR is None:  # pragma: no cover - only when PyQt6 is present

    class ExplorerWindow(QMainWindow):  # type: ignore[misc]
        def __init__(self) -> None:
            super().__init__()
            self._controller: Optional["ExplorerController"] = None
            toolbar = self.addToolBar("Data")
            toolbar.setObjectName("dataToolbar")
            reload_action = QAction("Reload data", self)
            reload_action.setShortcut(QKeySequence("F5"))
            reload_action.triggered.connect(self._on_reload)  # type: ignore[attr-defined]
            toolbar.addAction(reload_action)
            self.reload_action = reload_action

        def set_controller(self, controller: "ExplorerController") -> None:
            self._controller = controller

        def closeEvent(self, event) -> None:  # type: ignore[override]
            if self._controller is not None:
                self._controller.shutdown()
            super().closeEvent(event)

        def _on_reload(self) -> None:
            if self._controller is not None:
                self._controller.reload()

else:  # pragma: no cover - PyQt6 missing
    ExplorerWindow = cast(Any, object)


_STYLESHEET = """
QWidget {
    background-color: #121212;
    color: #EEEEEE;
    font-family: '-apple-system', 'Helvetica Neue', 'Arial', 'Inter', sans-serif;
    letter-spacing: 0.2px;
}
QPlainTextEdit {
    font-family: "JetBrains Mono", "Fira Code", monospace;
    font-size: 12px;
    background: #161616;
    border: 1px solid #2D2D2D;
    border-radius: 8px;
    padding: 8px;
}
QWidget#missionPane {
    border: 1px solid #1F2A33;
    border-radius: 16px;
}
QLabel#paneHeading {
    color: #00FFAA;
    font-size: 13px;
    font-weight: 600;
    letter-spacing: 0.5px;
    margin-bottom: 4px;
}
QLabel#paneError {
    color: #FF6B6B;
    font-weight: 600;
}
QLabel#histStatusLabel {
    color: #64748b;
    font-style: italic;
    padding: 4px 0;
}
QLabel#bestConfigBanner {
    color: #FACC15;
    font-size: 15px;
    font-weight: 600;
    padding: 6px 0;
}
QComboBox#kFilter {
    background: #1e293b;
    border: 1px solid #334155;
    border-radius: 6px;
    padding: 4px 6px;
    color: #f8fafc;
}
QProgressBar {
    background: #1E1E1E;
    border: 1px solid #2D2D2D;
    border-radius: 6px;
    height: 10px;
}
QProgressBar::chunk {
    background: #00FFAA;
    border-radius: 6px;
}
QTabBar::tab {
    background: #11141d;
    color: #94a3b8;
    padding: 6px 12px;
    border: 1px solid #1F2937;
    border-bottom: none;
    border-top-left-radius: 8px;
    border-top-right-radius: 8px;
    margin-right: 6px;
}
QTabBar::tab:selected {
    color: #00FFAA;
    border-color: #00FFAA;
}
QToolTip {
    background-color: #1F1F1F;
    color: #EEEEEE;
    border: 1px solid #00FFAA;
}
"""


def _require_qt() -> None:
    if QT_IMPORT_ERROR is not None:
        raise RuntimeError(
            "The explorer requires PyQt6. Install with `pip install .[gui]` or `pip install PyQt6`."
        ) from QT_IMPORT_ERROR


def _create_app(argv: Sequence[str] | None) -> QApplication:
    app = _build_app(argv)
    _apply_dark_theme(app)
    return app


def _apply_dark_theme(app: QApplication) -> None:
    app.setStyle("Fusion")

    palette = QPalette()
    base = QColor("#121212")
    darker = QColor("#1A1A1A")
    highlight = QColor("#00FFAA")
    text = QColor("#EEEEEE")
    muted = QColor("#77808C")

    palette.setColor(QPalette.ColorRole.Window, base)
    palette.setColor(QPalette.ColorRole.WindowText, text)
    palette.setColor(QPalette.ColorRole.Base, darker)
    palette.setColor(QPalette.ColorRole.ToolTipBase, darker)
    palette.setColor(QPalette.ColorRole.ToolTipText, text)
    palette.setColor(QPalette.ColorRole.Text, text)
    palette.setColor(QPalette.ColorRole.Button, QColor("#1F1F1F"))
    palette.setColor(QPalette.ColorRole.ButtonText, text)
    palette.setColor(QPalette.ColorRole.Highlight, highlight)
    palette.setColor(QPalette.ColorRole.HighlightedText, QColor("#061410"))
    palette.setColor(QPalette.ColorGroup.Disabled, QPalette.ColorRole.Text, muted)
    palette.setColor(QPalette.ColorGroup.Disabled, QPalette.ColorRole.WindowText, muted)

    app.setPalette(palette)
    app.setStyleSheet(_STYLESHEET)


def _create_window(config: ExplorerConfig | None) -> tuple[QMainWindow, "ExplorerController"]:
    overview, comparison, sweep = build_widgets()
    controller = build_controller(overview, comparison, sweep, config=config)
    window = build_window(controller, overview, comparison, sweep)
    window.setWindowTitle(WINDOW_TITLE)
    return window, controller


def run_explorer(
    data_dir: str | Path | None = None,
    *,
    config: ExplorerConfig | None = None,
    argv: Sequence[str] | None = None,
) -> int:
    """Launch the explorer UI on ``data_dir``.

    Returns the Qt exit code. Raises ``RuntimeError`` when PyQt6 is missing.
    A dataset that fails to load still opens the window, with the error shown
    in each pane.
    """

    _require_qt()
    app = _create_app(argv)
    window, controller = _create_window(config)
    if not controller.load(data_dir):
        logger.warning("Explorer opened without a dataset")
    window.show()
    return app.exec()  # type: ignore[call-arg]


__all__ = ["ExplorerWindow", "run_explorer"]
