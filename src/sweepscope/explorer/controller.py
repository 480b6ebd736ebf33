# mypy: ignore-errors
"""Controller glue between the explorer panes and the sweep session."""

from __future__ import annotations

import logging
from pathlib import Path

from sweepscope.config import DEFAULT_CONFIG, ExplorerConfig
from sweepscope.contracts.error import EnvelopeError, error_kind
from sweepscope.core.state import KFilter, SweepSession
from sweepscope.io.documents import ExplorerDocuments, load_documents

from .widgets import ComparisonPane, OverviewPane, SweepPane

logger = logging.getLogger(__name__)


def _describe(exc: BaseException) -> str:
    return f"{error_kind(exc)}: {exc}"


class ExplorerController:
    """Owns the loaded documents and the single :class:`SweepSession`.

    Every user action on the sweep pane is routed through one of the
    session's mutators and followed by a redraw; panes never mutate state
    themselves.
    """

    def __init__(
        self,
        overview: OverviewPane,
        comparison: ComparisonPane,
        sweep: SweepPane,
        config: ExplorerConfig | None = None,
    ) -> None:
        self._overview = overview
        self._comparison = comparison
        self._sweep = sweep
        self._config = config or DEFAULT_CONFIG
        self._config.validate()
        self._directory: Path | None = None
        self._documents: ExplorerDocuments | None = None
        self._session: SweepSession | None = None

        self._sweep.add_filter_callback(self._on_filter)
        self._sweep.add_highlight_callback(self._on_highlight)
        self._sweep.add_point_callback(self._on_point)

    @property
    def session(self) -> SweepSession | None:
        return self._session

    @property
    def documents(self) -> ExplorerDocuments | None:
        return self._documents

    def load(self, directory: str | Path | None = None) -> bool:
        """Read all three documents and redraw; on failure every pane shows the error."""

        target = Path(directory) if directory is not None else Path(self._config.data.directory)
        self._directory = target
        try:
            documents = load_documents(target, self._config.data)
        except (EnvelopeError, FileNotFoundError) as exc:
            logger.warning("Failed to load documents from %s: %s", target, exc)
            message = _describe(exc)
            self._documents = None
            self._session = None
            for pane in (self._overview, self._comparison, self._sweep):
                pane.show_error(message)
            return False
        self.show_documents(documents)
        return True

    def reload(self) -> bool:
        return self.load(self._directory)

    def show_documents(self, documents: ExplorerDocuments) -> None:
        self._documents = documents
        if self._session is None:
            self._session = SweepSession(documents.sweep, self._config.charts, self._config.gaps)
        else:
            self._session = self._session.reload(documents.sweep)

        charts = self._config.charts
        try:
            self._overview.update_overview(
                documents.overview, width=charts.heatmap_width, height=charts.heatmap_height
            )
        except EnvelopeError as exc:
            self._overview.show_error(_describe(exc))
        self._comparison.update_comparison(documents.comparison)
        self._sweep.set_options(self._session.k_options, charts.top_n)
        self._sweep.highlight_checkbox.setChecked(self._session.state.highlight_top_n)
        self._redraw_sweep()

    def shutdown(self) -> None:
        self._session = None
        self._documents = None

    # ------------------------------------------------------------------
    # Sweep interactions
    # ------------------------------------------------------------------
    def _on_filter(self, value: KFilter) -> None:
        if self._session is None:
            return
        try:
            self._session.set_filter(value)
        except EnvelopeError as exc:
            self._sweep.show_error(_describe(exc))
            return
        self._redraw_sweep()

    def _on_highlight(self, enabled: bool) -> None:
        if self._session is None:
            return
        self._session.set_highlight(enabled)
        self._redraw_sweep()

    def _on_point(self, index: int) -> None:
        if self._session is None:
            return
        self._session.select_point(index)
        self._redraw_sweep()

    def _redraw_sweep(self) -> None:
        if self._session is None:
            return
        try:
            self._sweep.render(self._session)
        except EnvelopeError as exc:
            self._sweep.show_error(_describe(exc))
