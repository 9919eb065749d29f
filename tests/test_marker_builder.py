from datetime import datetime, timezone

from astropulse.domain.entities.event import AstroEvent, EventType
from astropulse.domain.services.marker_builder import (
    bucket_start,
    build_markers,
    filter_events_by_type,
    find_events_at_time,
    glyph_for,
    group_events_by_time,
)


def _ts(*args):
    return int(datetime(*args, tzinfo=timezone.utc).timestamp())


def _event(name, type=EventType.LUNAR_PHASE, timestamp=None):
    return AstroEvent(
        timestamp=timestamp if timestamp is not None else _ts(2025, 6, 11, 7) * 1000,
        type=type,
        name=name,
    )


def test_glyphs_follow_name_keywords():
    assert glyph_for(_event("Full Moon")) == ("🌕", "#fbbf24")
    assert glyph_for(_event("Total Lunar Eclipse", EventType.ECLIPSE)) == ("🔴", "#dc2626")
    assert glyph_for(_event("Perseids Peak", EventType.METEOR_SHOWER)) == ("☄️", "#f59e0b")
    assert glyph_for(_event("June Solstice", EventType.SOLAR_EVENT)) == ("☀️", "#f59e0b")


def test_unknown_name_uses_type_default():
    assert glyph_for(_event("Something lunar")) == ("🌙", "#e2e8f0")


def test_markers_are_sorted_and_skip_non_positive_times():
    events = [
        _event("Full Moon", timestamp=3_000_000),
        _event("New Moon", timestamp=1_000_000),
        _event("Epoch", timestamp=500),
    ]

    markers = build_markers(events)

    assert [m.time for m in markers] == [1_000, 3_000]
    assert markers[0].to_dict() == {
        "time": 1_000,
        "position": "aboveBar",
        "color": "#6b7280",
        "text": "🌑",
        "size": 2,
    }


def test_filters_hide_only_explicitly_disabled_groups():
    events = [
        _event("Full Moon"),
        _event("Eclipse", EventType.ECLIPSE),
        _event("Geminids", EventType.METEOR_SHOWER),
        _event("Comet", EventType.COMET_EVENT),
    ]

    kept = filter_events_by_type(events, {"lunar": False, "meteor": True})

    assert [e.name for e in kept] == ["Geminids", "Comet"]
    assert filter_events_by_type(events, None) == events


def test_bucket_start_per_timeframe():
    moment = _ts(2025, 6, 11, 13, 45)  # Wednesday

    assert bucket_start(moment, "1h") == _ts(2025, 6, 11, 13)
    assert bucket_start(moment, "8h") == _ts(2025, 6, 11, 8)
    assert bucket_start(moment, "1d") == _ts(2025, 6, 11)
    assert bucket_start(moment, "1w") == _ts(2025, 6, 8)  # Sunday
    assert bucket_start(moment, "1M") == _ts(2025, 6, 1)


def test_group_and_find_events_in_same_candle():
    morning = _event("Full Moon", timestamp=_ts(2025, 6, 11, 7) * 1000)
    evening = _event("Conjunction", EventType.PLANETARY_ASPECT, timestamp=_ts(2025, 6, 11, 22) * 1000)
    next_day = _event("New Moon", timestamp=_ts(2025, 6, 12, 1) * 1000)
    events = [morning, evening, next_day]

    grouped = group_events_by_time(events, "1d")
    assert grouped[_ts(2025, 6, 11)] == [morning, evening]
    assert grouped[_ts(2025, 6, 12)] == [next_day]

    found = find_events_at_time(events, _ts(2025, 6, 11, 12), "1d")
    assert [e.name for e in found] == ["Conjunction", "Full Moon"]
