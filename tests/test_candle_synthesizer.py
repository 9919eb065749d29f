from datetime import datetime, timezone

from astropulse.domain.entities.candle import Candle, CandleKind
from astropulse.domain.services.candle_synthesizer import add_months, generate_future_candles


def _ts(*args):
    return int(datetime(*args, tzinfo=timezone.utc).timestamp())


def _candle(**overrides):
    data = {
        "symbol": "BTCUSDT",
        "time": _ts(2025, 6, 1),
        "open": 100.0,
        "high": 105.0,
        "low": 99.0,
        "close": 101.5,
        "volume": 1234.0,
    }
    data.update(overrides)
    return Candle(**data)


def test_daily_candles_are_flat_and_volumeless():
    last = _candle()
    future = generate_future_candles(last, "1d", 3)

    assert [c.time for c in future] == [_ts(2025, 6, 2), _ts(2025, 6, 3), _ts(2025, 6, 4)]
    for c in future:
        assert c.volume == 0
        assert c.open == c.high == c.low == c.close == 101.5
        assert c.kind is CandleKind.SYNTHETIC
        assert c.is_synthetic
        assert c.symbol == "BTCUSDT"
        assert c.time > last.time


def test_zero_or_negative_count_is_empty():
    assert generate_future_candles(_candle(), "1d", 0) == []
    assert generate_future_candles(_candle(), "1h", -3) == []


def test_hourly_and_weekly_steps():
    last = _candle()
    assert [c.time - last.time for c in generate_future_candles(last, "8h", 2)] == [8 * 3600, 16 * 3600]
    assert [c.time - last.time for c in generate_future_candles(last, "1w", 2)] == [7 * 86400, 14 * 86400]


def test_monthly_steps_clamp_to_month_end():
    last = _candle(time=_ts(2025, 1, 31))
    future = generate_future_candles(last, "1M", 3)

    assert [c.opened_at.date().isoformat() for c in future] == ["2025-02-28", "2025-03-31", "2025-04-30"]


def test_add_months_handles_leap_year_and_year_rollover():
    assert add_months(datetime(2024, 1, 31, tzinfo=timezone.utc), 1).day == 29
    rolled = add_months(datetime(2024, 11, 15, tzinfo=timezone.utc), 3)
    assert (rolled.year, rolled.month, rolled.day) == (2025, 2, 15)


def test_synthetic_wire_shape_round_trips_kind():
    (synthetic,) = generate_future_candles(_candle(), "1d", 1)
    wire = synthetic.to_dict()

    assert "kind" not in wire
    assert Candle.from_dict(wire).kind is CandleKind.SYNTHETIC
