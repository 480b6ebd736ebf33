"""Explorer public exports."""

from __future__ import annotations

from typing import TYPE_CHECKING

__all__ = [
    "build_app",
    "build_controller",
    "build_widgets",
    "build_window",
    "ExplorerController",
    "run_explorer",
]


def __getattr__(name: str):  # pragma: no cover - thin re-export shim
    if name == "run_explorer":
        from .app import run_explorer as func

        return func
    if name in {"build_app", "build_controller", "build_widgets", "build_window"}:
        from . import builders

        return getattr(builders, name)
    if name == "ExplorerController":
        from .controller import ExplorerController as controller_class

        return controller_class
    raise AttributeError(name)


if TYPE_CHECKING:  # pragma: no cover - import-time typing only
    from .app import run_explorer
    from .builders import build_app, build_controller, build_widgets, build_window
    from .controller import ExplorerController
