"""User-driven selection/filter/highlight state and the views derived from it."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Final

from sweepscope.config import ChartPolicy, GapPolicy
from sweepscope.contracts.error import InvalidArgumentError
from sweepscope.models import SweepDocument, SweepResult

from .axis import AxisScale, nice_axis
from .stats import SweepStatistics, compute_statistics, frontier_indices, rank_by_valid

logger = logging.getLogger(__name__)

ALL: Final = "all"

KFilter = int | str

__all__ = [
    "ALL",
    "InteractionState",
    "KFilter",
    "SweepSession",
]


@dataclass(slots=True)
class InteractionState:
    """Three independent fields; each action replaces exactly one of them."""

    selected_index: int | None = None
    k_filter: KFilter = ALL
    highlight_top_n: bool = True


class SweepSession:
    """Owns one sweep document and the interaction state layered on top of it.

    Derived values (statistics, top-N, axis scales, filtered views) are
    memoized on the instance. Reloading data goes through :meth:`reload`,
    which returns a fresh session so no cache outlives its dataset.
    """

    def __init__(
        self,
        sweep: SweepDocument,
        charts: ChartPolicy | None = None,
        gaps: GapPolicy | None = None,
    ) -> None:
        self._sweep = sweep
        self._charts = charts or ChartPolicy()
        self._gaps = gaps or GapPolicy()
        self._state = InteractionState()
        self._filtered: dict[KFilter, tuple[int, ...]] = {}

    def reload(self, sweep: SweepDocument) -> SweepSession:
        logger.debug("Rebuilding sweep session for %d results", len(sweep.results))
        return SweepSession(sweep, self._charts, self._gaps)

    # ------------------------------------------------------------------ data
    @property
    def sweep(self) -> SweepDocument:
        return self._sweep

    @property
    def results(self) -> tuple[SweepResult, ...]:
        return self._sweep.results

    @property
    def charts(self) -> ChartPolicy:
        return self._charts

    @property
    def gaps(self) -> GapPolicy:
        return self._gaps

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def k_options(self) -> tuple[int, ...]:
        return self._sweep.k_options

    @cached_property
    def statistics(self) -> SweepStatistics:
        return compute_statistics(self.results)

    @cached_property
    def frontier_indices(self) -> tuple[int, ...]:
        return frontier_indices(self.results, self._charts.top_n)

    @cached_property
    def _frontier_members(self) -> frozenset[int]:
        return frozenset(self.frontier_indices)

    @property
    def frontier(self) -> tuple[SweepResult, ...]:
        return tuple(self.results[index] for index in self.frontier_indices)

    @cached_property
    def x_axis(self) -> AxisScale:
        stats = self.statistics
        return nice_axis(
            stats.best_train,
            stats.worst_train,
            self._charts.train_tick,
            precision=self._charts.tick_precision,
        )

    @cached_property
    def y_axis(self) -> AxisScale:
        stats = self.statistics
        return nice_axis(
            stats.best_valid,
            stats.worst_valid,
            self._charts.valid_tick,
            precision=self._charts.tick_precision,
        )

    # ------------------------------------------------------------- mutations
    def select_point(self, point: SweepResult | int | None) -> None:
        """Replace the selection (last click wins); ``None`` clears it."""

        if point is None:
            self._state.selected_index = None
            return
        self._state.selected_index = self._resolve_index(point)

    def set_filter(self, value: KFilter) -> None:
        if value == ALL:
            self._state.k_filter = ALL
            return
        if isinstance(value, bool) or not isinstance(value, int) or value not in self.k_options:
            raise InvalidArgumentError(
                f"unknown k filter {value!r}",
                hint=f"expected 'all' or one of {list(self.k_options)}",
            )
        self._state.k_filter = value

    def toggle_highlight(self) -> None:
        self._state.highlight_top_n = not self._state.highlight_top_n

    def set_highlight(self, enabled: bool) -> None:
        self._state.highlight_top_n = bool(enabled)

    # --------------------------------------------------------- derived views
    def filtered_indices(self) -> tuple[int, ...]:
        key = self._state.k_filter
        cached = self._filtered.get(key)
        if cached is None:
            if key == ALL:
                cached = tuple(range(len(self.results)))
            else:
                cached = tuple(
                    index for index, result in enumerate(self.results) if result.k == key
                )
            self._filtered[key] = cached
        return cached

    def filtered(self) -> tuple[SweepResult, ...]:
        return tuple(self.results[index] for index in self.filtered_indices())

    def in_frontier(self, index: int) -> bool:
        """Membership in the top-N of the *unfiltered* results."""

        return index in self._frontier_members

    def is_highlighted(self, index: int) -> bool:
        return self._state.highlight_top_n and self.in_frontier(index)

    @property
    def selected_point(self) -> SweepResult | None:
        index = self._state.selected_index
        return None if index is None else self.results[index]

    def selected_rank(self) -> int | None:
        point = self.selected_point
        if point is None:
            return None
        return rank_by_valid(self.results, point)

    def _resolve_index(self, point: SweepResult | int) -> int:
        if isinstance(point, bool):
            raise InvalidArgumentError("selection must be a result or a result index")
        if isinstance(point, int):
            if not 0 <= point < len(self.results):
                raise InvalidArgumentError(
                    f"result index {point} out of range (0..{len(self.results) - 1})"
                )
            return point
        for index, result in enumerate(self.results):
            if result is point:
                return index
        for index, result in enumerate(self.results):
            if result == point:
                return index
        raise InvalidArgumentError(f"configuration {point.key} is not part of this sweep")
