"""Round-number axis domains and tick lists."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal

from sweepscope.contracts.error import InvalidArgumentError

logger = logging.getLogger(__name__)

DEFAULT_TICK_PRECISION = 2

__all__ = [
    "AxisScale",
    "DEFAULT_TICK_PRECISION",
    "format_tick",
    "nice_axis",
]


@dataclass(frozen=True, slots=True)
class AxisScale:
    domain_min: float
    domain_max: float
    ticks: tuple[float, ...]
    tick_interval: float
    decimals: int = DEFAULT_TICK_PRECISION

    @property
    def span(self) -> float:
        return self.domain_max - self.domain_min

    def normalise(self, value: float) -> float:
        """Map ``value`` into [0, 1] relative to the domain (unclamped)."""

        return (value - self.domain_min) / self.span

    def contains(self, value: float) -> bool:
        return self.domain_min <= value <= self.domain_max

    def tick_labels(self) -> tuple[str, ...]:
        return tuple(format_tick(tick, self.decimals) for tick in self.ticks)


def nice_axis(
    min_value: float,
    max_value: float,
    tick_interval: float,
    *,
    precision: int = DEFAULT_TICK_PRECISION,
) -> AxisScale:
    """Snap ``[min_value, max_value]`` outward to multiples of ``tick_interval``.

    Ticks are every multiple of the interval between the snapped bounds,
    inclusive, rounded to ``max(precision, decimals of the interval)`` places.
    A zero-width result is widened by one interval so the axis never
    collapses.
    """

    if not math.isfinite(tick_interval) or tick_interval <= 0.0:
        raise InvalidArgumentError(f"tick_interval must be a positive number, got {tick_interval!r}")
    if not (math.isfinite(min_value) and math.isfinite(max_value)):
        raise InvalidArgumentError(
            f"axis bounds must be finite, got [{min_value!r}, {max_value!r}]"
        )
    if min_value > max_value:
        raise InvalidArgumentError(f"axis minimum {min_value} exceeds maximum {max_value}")

    decimals = max(precision, _interval_decimals(tick_interval))
    low = math.floor(min_value / tick_interval)
    high = math.ceil(max_value / tick_interval)
    if low == high:
        logger.debug("Degenerate axis at %s; widening by one tick", min_value)
        high += 1

    # rounding may nudge a bound past the data it must contain
    while round(low * tick_interval, decimals) > min_value:
        low -= 1
    while round(high * tick_interval, decimals) < max_value:
        high += 1

    ticks = tuple(round(step * tick_interval, decimals) for step in range(low, high + 1))
    return AxisScale(
        domain_min=ticks[0],
        domain_max=ticks[-1],
        ticks=ticks,
        tick_interval=tick_interval,
        decimals=decimals,
    )


def format_tick(value: float, decimals: int = DEFAULT_TICK_PRECISION) -> str:
    return f"{value:.{decimals}f}"


def _interval_decimals(tick_interval: float) -> int:
    exponent = Decimal(repr(tick_interval)).normalize().as_tuple().exponent
    if not isinstance(exponent, int):
        return 0
    return max(0, -exponent)
