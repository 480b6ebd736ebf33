from __future__ import annotations

import numpy as np
import pytest
from hypothesis import given, strategies as st

from sweepscope.contracts.error import DataShapeError, InvalidArgumentError
from sweepscope.core.colors import MISSING_COLOR, hex_to_rgb, intensity_color
from sweepscope.core.heatmap import (
    PLACEHOLDER_TEXT,
    positive_max,
    render_heatmap,
    to_rgba_image,
)


def test_cells_partition_the_canvas() -> None:
    render = render_heatmap([[0, 4.5, 3.0], [5.0, 0, 1.0]], 300, 100)
    assert (render.rows, render.cols) == (2, 3)
    assert render.cell_width == pytest.approx(100.0)
    assert render.cell_height == pytest.approx(50.0)
    assert len(render.cells) == 6
    last = render.cells[-1]
    assert (last.row, last.col) == (1, 2)
    assert (last.x, last.y) == (pytest.approx(200.0), pytest.approx(50.0))


def test_colors_are_scaled_by_matrix_max() -> None:
    render = render_heatmap([[0, 4.5, 3.0], [5.0, 0, 1.0]], 300, 100)
    assert render.max_value == 5.0
    assert render.cells[0].missing
    assert render.cells[0].color == MISSING_COLOR
    assert render.cells[3].color == intensity_color(5.0, 5.0)
    assert render.cells[1].color == intensity_color(4.5, 5.0)


@given(st.integers(min_value=1, max_value=8), st.integers(min_value=1, max_value=8))
def test_all_zero_matrix_is_all_missing(rows: int, cols: int) -> None:
    render = render_heatmap([[0.0] * cols for _ in range(rows)], 400, 400)
    assert len(render.cells) == rows * cols
    assert render.max_value == 1.0
    assert all(cell.color == MISSING_COLOR for cell in render.cells)
    assert not render.is_placeholder


@pytest.mark.parametrize("matrix", [[], [[]], [[], []]])
def test_empty_matrix_renders_placeholder(matrix: list[list[float]]) -> None:
    render = render_heatmap(matrix, 400, 400)
    assert render.is_placeholder
    assert render.placeholder == PLACEHOLDER_TEXT
    assert render.cells == ()
    assert render.cell_at(10, 10) is None


def test_ragged_matrix_is_a_shape_error() -> None:
    with pytest.raises(DataShapeError):
        render_heatmap([[1.0, 2.0], [3.0]], 400, 400)


def test_non_finite_values_are_rejected() -> None:
    with pytest.raises(DataShapeError):
        render_heatmap([[1.0, float("nan")]], 400, 400)


@pytest.mark.parametrize(("width", "height"), [(0, 100), (100, -1), (float("inf"), 10)])
def test_canvas_size_must_be_positive(width: float, height: float) -> None:
    with pytest.raises(InvalidArgumentError):
        render_heatmap([[1.0]], width, height)


def test_cell_at_maps_pixels_to_cells() -> None:
    render = render_heatmap([[0, 4.5, 3.0], [5.0, 0, 1.0]], 300, 100)
    cell = render.cell_at(150, 75)
    assert cell is not None
    assert (cell.row, cell.col) == (1, 1)
    assert render.cell_at(300, 10) is None
    assert render.cell_at(-1, 10) is None


def test_positive_max_falls_back_to_one() -> None:
    assert positive_max(np.zeros((2, 2))) == 1.0
    assert positive_max(np.array([[0.0, 2.0], [7.0, 0.0]])) == 7.0


def test_rgba_image_matches_cells() -> None:
    render = render_heatmap([[0, 2.0], [1.0, 0]], 20, 20)
    image = to_rgba_image(render)
    assert image.shape == (2, 2, 4)
    assert image.dtype == np.uint8
    assert tuple(image[0, 0, :3]) == hex_to_rgb(MISSING_COLOR)
    assert tuple(image[0, 1, :3]) == hex_to_rgb(render.cells[1].color)
    assert (image[..., 3] == 255).all()


@given(
    st.lists(
        st.lists(st.sampled_from([0.0, 0.5, 1.0, 2.0, 3.5, 5.0]), min_size=3, max_size=3),
        min_size=1,
        max_size=6,
    )
)
def test_rgba_image_agrees_with_every_cell_color(matrix: list[list[float]]) -> None:
    render = render_heatmap(matrix, 300, 200)
    image = to_rgba_image(render)
    for cell in render.cells:
        assert tuple(int(c) for c in image[cell.row, cell.col, :3]) == hex_to_rgb(cell.color)
    assert (image[..., 3] == 255).all()


def test_placeholder_image_is_empty() -> None:
    image = to_rgba_image(render_heatmap([], 100, 100))
    assert image.shape == (0, 0, 4)
