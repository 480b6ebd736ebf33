from __future__ import annotations

import pytest

from sweepscope.core.colors import FALLBACK_COLOR, K_COLOR_SCALE
from sweepscope.core.scatter import (
    DEFAULT_SIZE,
    HIGHLIGHT_OUTLINE,
    HIGHLIGHT_SIZE,
    build_scatter,
    describe_selection,
    format_selection,
    format_tooltip,
)
from sweepscope.core.state import SweepSession
from sweepscope.core.stats import GapAssessment
from sweepscope.io.documents import parse_sweep
from tests.util.samples import EXPECTED_TOP10, sweep_payload


@pytest.fixture
def session() -> SweepSession:
    return SweepSession(parse_sweep(sweep_payload()))


def test_every_filtered_point_is_rendered(session: SweepSession) -> None:
    frame = build_scatter(session)
    assert [point.index for point in frame.points] == list(range(12))
    assert frame.total == 12
    assert frame.baseline_valid == pytest.approx(0.98)


def test_points_carry_position_color_and_highlight(session: SweepSession) -> None:
    frame = build_scatter(session)
    best = frame.point_for(2)
    assert best is not None
    assert (best.x, best.y) == (pytest.approx(0.62), pytest.approx(0.88))
    assert best.fill == K_COLOR_SCALE[10]
    assert best.highlighted
    assert best.size == HIGHLIGHT_SIZE
    assert best.outline == HIGHLIGHT_OUTLINE
    assert best.outline_width == 2.0

    worst = frame.point_for(7)
    assert worst is not None
    assert not worst.highlighted
    assert worst.size == DEFAULT_SIZE
    assert worst.outline is None
    assert worst.outline_width == 0.0


def test_highlight_toggle_removes_outlines(session: SweepSession) -> None:
    session.toggle_highlight()
    frame = build_scatter(session)
    assert all(not point.highlighted for point in frame.points)
    assert all(point.size == DEFAULT_SIZE for point in frame.points)


def test_filtered_frame_keeps_global_axes_and_highlights(session: SweepSession) -> None:
    full = build_scatter(session)
    session.set_filter(60)
    narrowed = build_scatter(session)
    assert [point.index for point in narrowed.points] == [1, 10]
    assert narrowed.x_axis == full.x_axis
    assert narrowed.y_axis == full.y_axis
    assert all(point.highlighted for point in narrowed.points)
    assert {p.index for p in full.points if p.highlighted} == set(EXPECTED_TOP10)


def test_unknown_k_uses_fallback_fill() -> None:
    rows = ((7, 0.1, 0.1, 0.4, 0.6), (10, 0.1, 0.1, 0.3, 0.7))
    session = SweepSession(parse_sweep(sweep_payload(rows)))
    frame = build_scatter(session)
    assert frame.points[0].fill == FALLBACK_COLOR


def test_pixels_put_low_error_bottom_left(session: SweepSession) -> None:
    frame = build_scatter(session)
    point = frame.point_for(2)
    assert point is not None
    px, py = frame.to_pixels(point, 500, 300)
    assert 0 <= px <= 500
    assert 0 <= py <= 300
    x_min_px, y_max_px = frame.to_pixels(
        point.__class__(
            index=-1,
            result=point.result,
            x=frame.x_axis.domain_min,
            y=frame.y_axis.domain_max,
            fill=point.fill,
            highlighted=False,
        ),
        500,
        300,
    )
    assert x_min_px == pytest.approx(0.0)
    assert y_max_px == pytest.approx(0.0)


def test_tooltip_uses_three_decimals(session: SweepSession) -> None:
    text = format_tooltip(session.results[2])
    assert "k = 10" in text
    assert "Train: 0.620" in text
    assert "Valid: 0.880" in text
    assert "Gap: 0.260" in text


def test_selection_details_report_rank_and_assessment(session: SweepSession) -> None:
    assert describe_selection(session) is None
    session.select_point(4)
    details = describe_selection(session)
    assert details is not None
    assert details.rank == 5
    assert details.total == 12
    assert details.assessment is GapAssessment.SEVERE
    text = format_selection(details)
    assert "Rank by Valid RMSE: #5 of 12" in text
    assert "Valid RMSE       0.9100" in text
    assert "Severe Overfitting" in text


def test_selection_of_well_generalising_point(session: SweepSession) -> None:
    session.select_point(11)
    details = describe_selection(session)
    assert details is not None
    assert details.assessment is GapAssessment.GOOD
    assert details.assessment_color == "#16a34a"
