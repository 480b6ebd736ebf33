from __future__ import annotations

import re

import numpy as np
import pytest
from hypothesis import given, strategies as st

from sweepscope.core.colors import (
    FALLBACK_COLOR,
    K_COLOR_SCALE,
    MISSING_COLOR,
    cell_lightness,
    gap_color,
    hex_to_rgb,
    hsl_to_hex,
    hsl_to_rgb_array,
    intensity_color,
    intensity_rgb,
    k_color,
    k_legend,
    safe_max,
)
from sweepscope.core.stats import GapAssessment

_HEX = re.compile(r"^#[0-9a-f]{6}$")


def test_known_k_values_use_the_table() -> None:
    assert k_color(5) == "#22c55e"
    assert k_color(60) == "#450a0a"
    for k, color in K_COLOR_SCALE.items():
        assert k_color(k) == color


@given(st.integers().filter(lambda k: k not in K_COLOR_SCALE))
def test_unknown_integer_k_falls_back(k: int) -> None:
    assert k_color(k) == FALLBACK_COLOR


@pytest.mark.parametrize("value", [None, "5", 7.5, [5], {"k": 5}])
def test_k_color_is_total_over_odd_inputs(value: object) -> None:
    assert k_color(value) == FALLBACK_COLOR


def test_legend_runs_from_low_to_high_k() -> None:
    legend = k_legend()
    assert [label for label, _ in legend] == ["k=5", "k=10-15", "k=20-30", "k=50-60"]
    assert legend[0][1] == K_COLOR_SCALE[5]


def test_zero_is_the_missing_sentinel() -> None:
    assert intensity_color(0, 10) == MISSING_COLOR
    assert intensity_color(0.0, 0) == MISSING_COLOR


def test_lightness_runs_from_ninety_to_fifty_percent() -> None:
    assert cell_lightness(0.0, 5.0) == pytest.approx(90.0)
    assert cell_lightness(5.0, 5.0) == pytest.approx(50.0)
    assert cell_lightness(2.5, 5.0) == pytest.approx(70.0)


def test_non_positive_max_is_replaced_by_one() -> None:
    assert safe_max(0.0) == 1.0
    assert safe_max(-3.0) == 1.0
    assert safe_max(4.0) == 4.0
    assert cell_lightness(1.0, 0.0) == pytest.approx(50.0)


@given(
    st.floats(min_value=0.001, max_value=100.0),
    st.floats(min_value=-10.0, max_value=100.0),
)
def test_observed_cells_always_get_a_hex_color(value: float, max_value: float) -> None:
    color = intensity_color(value, max_value)
    assert _HEX.match(color)
    assert color != MISSING_COLOR


def test_larger_values_are_darker() -> None:
    light = sum(hex_to_rgb(intensity_color(1.0, 10.0)))
    dark = sum(hex_to_rgb(intensity_color(10.0, 10.0)))
    assert dark < light


def test_hsl_conversion_matches_css() -> None:
    assert hsl_to_hex(0, 100, 50) == "#ff0000"
    assert hsl_to_hex(220, 0, 100) == "#ffffff"
    assert hsl_to_hex(220, 70, 0) == "#000000"


def test_hex_to_rgb_accepts_short_form() -> None:
    assert hex_to_rgb("#888") == (136, 136, 136)
    assert hex_to_rgb("#3b82f6") == (59, 130, 246)
    with pytest.raises(ValueError):
        hex_to_rgb("#12345")


def test_gap_colors_follow_assessment() -> None:
    assert gap_color(GapAssessment.GOOD) == "#16a34a"
    assert gap_color(GapAssessment.MODERATE) == "#ca8a04"
    assert gap_color(GapAssessment.SEVERE) == "#dc2626"
    assert gap_color("unknown") == FALLBACK_COLOR


@given(st.lists(st.floats(min_value=-20.0, max_value=120.0), min_size=1, max_size=40))
def test_rgb_array_matches_hex_conversion(lightness: list[float]) -> None:
    rgb = hsl_to_rgb_array(220.0, 70.0, np.array(lightness))
    assert rgb.dtype == np.uint8
    assert [tuple(int(c) for c in px) for px in rgb] == [
        hex_to_rgb(hsl_to_hex(220.0, 70.0, value)) for value in lightness
    ]


def test_greyscale_rgb_array() -> None:
    rgb = hsl_to_rgb_array(0.0, 0.0, np.array([0.0, 50.0, 100.0]))
    assert rgb.tolist() == [[0, 0, 0], [128, 128, 128], [255, 255, 255]]


def test_intensity_rgb_matches_intensity_color() -> None:
    grid = np.array([[0.0, 1.0, 2.5], [5.0, 0.0, 3.0]])
    rgb = intensity_rgb(grid, 5.0)
    assert rgb.shape == (2, 3, 3)
    for (row, col), value in np.ndenumerate(grid):
        expected = hex_to_rgb(intensity_color(float(value), 5.0))
        assert tuple(int(c) for c in rgb[row, col]) == expected
