import pytest

from astropulse.domain.services.bin_size_selector import (
    BIN_SIZE_LADDER,
    DAY_MS,
    HOUR_MS,
    MINUTE_MS,
    select_bin_size,
    snap_to_ladder,
)


def test_one_day_on_wide_chart_picks_one_hour():
    # ideal = 75 / (1152 / 86_400_000) = 5_625_000 ms → closest rung is 1h
    assert select_bin_size(0, DAY_MS, 1152) == HOUR_MS


def test_tiny_span_picks_smallest_rung():
    assert select_bin_size(0, 10_000, 2000) == MINUTE_MS


def test_huge_span_picks_largest_rung():
    assert select_bin_size(0, 5 * 365 * DAY_MS, 800) == BIN_SIZE_LADDER[-1]


def test_ties_resolve_to_first_rung():
    assert snap_to_ladder(15.0, (10, 20)) == 10


@pytest.mark.parametrize(
    "from_ms,to_ms,width",
    [(1000, 1000, 800), (2000, 1000, 800), (0, DAY_MS, 0), (0, DAY_MS, -10)],
)
def test_degenerate_input_returns_none(from_ms, to_ms, width):
    assert select_bin_size(from_ms, to_ms, width) is None


@pytest.mark.parametrize("span_hours", [1, 6, 24, 24 * 7, 24 * 90])
def test_result_always_on_ladder(span_hours):
    assert select_bin_size(0, span_hours * HOUR_MS, 1000) in BIN_SIZE_LADDER


def test_custom_target_px_shifts_choice():
    # target 300px on a 1-day / 1152px chart → ideal 22_500_000 ms ≈ 6.25h → 4h
    assert select_bin_size(0, DAY_MS, 1152, target_px=300) == 4 * HOUR_MS
