"""Colour encodings: categorical k hues and heatmap intensity lightness."""

from __future__ import annotations

import colorsys
import logging
from collections.abc import Mapping
from types import MappingProxyType

import numpy as np

logger = logging.getLogger(__name__)

# green (simple model, generalises) -> dark red (many factors, overfits)
K_COLOR_SCALE: Mapping[int, str] = MappingProxyType(
    {
        5: "#22c55e",
        8: "#84cc16",
        10: "#eab308",
        15: "#f97316",
        20: "#ef4444",
        25: "#dc2626",
        30: "#b91c1c",
        40: "#991b1b",
        50: "#7f1d1d",
        60: "#450a0a",
    }
)
FALLBACK_COLOR = "#888888"

MISSING_COLOR = "#f3f4f6"
CELL_BORDER_COLOR = "#e5e7eb"
HEATMAP_HUE = 220.0
HEATMAP_SATURATION = 70.0
LIGHTNESS_CEILING = 90.0
LIGHTNESS_RANGE = 40.0

_LEGEND: tuple[tuple[str, str], ...] = (
    ("k=5", "#22c55e"),
    ("k=10-15", "#eab308"),
    ("k=20-30", "#f97316"),
    ("k=50-60", "#7f1d1d"),
)

__all__ = [
    "CELL_BORDER_COLOR",
    "FALLBACK_COLOR",
    "HEATMAP_HUE",
    "HEATMAP_SATURATION",
    "K_COLOR_SCALE",
    "MISSING_COLOR",
    "cell_lightness",
    "gap_color",
    "hex_to_rgb",
    "hsl_to_hex",
    "hsl_to_rgb_array",
    "intensity_color",
    "intensity_rgb",
    "k_color",
    "k_legend",
    "safe_max",
]


def k_color(k: object) -> str:
    """Return the hue for ``k``; anything outside the table gets the neutral grey."""

    try:
        return K_COLOR_SCALE.get(k, FALLBACK_COLOR)  # type: ignore[call-overload]
    except TypeError:  # unhashable input
        return FALLBACK_COLOR


def k_legend() -> tuple[tuple[str, str], ...]:
    """Legend swatches ordered from low k to high k."""

    return _LEGEND


def safe_max(max_value: float) -> float:
    """Scale maximum with the degenerate fallback: non-positive maxima become 1."""

    if max_value > 0.0:
        return float(max_value)
    logger.debug("Non-positive intensity maximum %s; using 1", max_value)
    return 1.0


def cell_lightness(value: float, max_value: float) -> float:
    """Lightness percentage for an observed cell: 90% at zero down to 50% at max."""

    return LIGHTNESS_CEILING - (value / safe_max(max_value)) * LIGHTNESS_RANGE


def intensity_color(value: float, max_value: float) -> str:
    if value == 0:
        return MISSING_COLOR
    return hsl_to_hex(HEATMAP_HUE, HEATMAP_SATURATION, cell_lightness(value, max_value))


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    """Convert CSS-style HSL (degrees, percent, percent) to ``#rrggbb``."""

    h = (hue % 360.0) / 360.0
    s = min(max(saturation / 100.0, 0.0), 1.0)
    light = min(max(lightness / 100.0, 0.0), 1.0)
    red, green, blue = colorsys.hls_to_rgb(h, light, s)
    return "#{:02x}{:02x}{:02x}".format(
        int(round(red * 255)), int(round(green * 255)), int(round(blue * 255))
    )


def intensity_rgb(grid: np.ndarray, max_value: float) -> np.ndarray:
    """Array form of :func:`intensity_color`: one uint8 RGB triple per grid entry."""

    values = np.asarray(grid, dtype=float)
    lightness = LIGHTNESS_CEILING - (values / safe_max(max_value)) * LIGHTNESS_RANGE
    rgb = hsl_to_rgb_array(HEATMAP_HUE, HEATMAP_SATURATION, lightness)
    rgb[values == 0] = hex_to_rgb(MISSING_COLOR)
    return rgb


def hsl_to_rgb_array(hue: float, saturation: float, lightness: np.ndarray) -> np.ndarray:
    """Convert a lightness array at fixed hue and saturation to uint8 RGB.

    Follows :func:`colorsys.hls_to_rgb` step for step so every pixel equals the
    colour :func:`hsl_to_hex` produces for the same inputs.
    """

    h = (hue % 360.0) / 360.0
    s = min(max(saturation / 100.0, 0.0), 1.0)
    light = np.clip(np.asarray(lightness, dtype=float) / 100.0, 0.0, 1.0)
    if s == 0.0:
        channels = [light, light, light]
    else:
        m2 = np.where(light <= 0.5, light * (1.0 + s), light + s - (light * light * s))
        m1 = 2.0 * light - m2
        channels = [
            _hue_channel(m1, m2, h + 1.0 / 3.0),
            _hue_channel(m1, m2, h),
            _hue_channel(m1, m2, h - 1.0 / 3.0),
        ]
    rgb = np.stack(channels, axis=-1)
    # rint rounds half to even, like round()
    return np.rint(rgb * 255).astype(np.uint8)


def _hue_channel(m1: np.ndarray, m2: np.ndarray, hue: float) -> np.ndarray:
    hue = hue % 1.0
    if hue < 1.0 / 6.0:
        return m1 + (m2 - m1) * hue * 6.0
    if hue < 0.5:
        return m2
    if hue < 2.0 / 3.0:
        return m1 + (m2 - m1) * (2.0 / 3.0 - hue) * 6.0
    return m1


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    text = color.lstrip("#")
    if len(text) == 3:
        text = "".join(ch * 2 for ch in text)
    if len(text) != 6:
        raise ValueError(f"not a hex colour: {color!r}")
    return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))


_GAP_COLORS: Mapping[str, str] = MappingProxyType(
    {
        "Good Generalization": "#16a34a",
        "Moderate Overfitting": "#ca8a04",
        "Severe Overfitting": "#dc2626",
    }
)


def gap_color(assessment: str) -> str:
    """Text colour for an overfitting assessment label."""

    return _GAP_COLORS.get(str(assessment), FALLBACK_COLOR)
