import pytest

from astropulse.domain.entities.event import AstroEvent, EventType
from astropulse.domain.exceptions.domain_errors import InvalidBinSizeError
from astropulse.domain.services.event_binner import EventBinner


def _event(timestamp, name=None, **overrides):
    data = {
        "timestamp": timestamp,
        "type": EventType.PLANETARY_ASPECT,
        "name": name or f"event-{timestamp}",
    }
    data.update(overrides)
    return AstroEvent(**data)


def _spread_events():
    # deterministic pseudo-random spread, includes equal timestamps
    return [_event((i * 7919) % 100_000, name=f"e{i}") for i in range(120)] + [
        _event(500, name="dup-a"),
        _event(500, name="dup-b"),
    ]


def test_events_land_in_floor_bucket():
    binner = EventBinner(bin_size=1000)
    binner.add_events([_event(0), _event(999), _event(1000), _event(2500)])

    bins = binner.get_all_bins()

    assert [b.time_range.start for b in bins] == [0, 1000, 2000]
    assert [len(b.events) for b in bins] == [2, 1, 1]
    assert bins[0].time_range.end == 1000
    assert bins[0].position.x == 0 and bins[0].position.y == 0
    for b in bins:
        for e in b.events:
            assert b.time_range.start <= e.timestamp < b.time_range.end


def test_negative_timestamps_use_floor_division():
    binner = EventBinner(bin_size=1000)
    binner.add_event(_event(-1))

    (only,) = binner.get_all_bins()
    assert only.time_range.start == -1000


def test_bins_are_sorted_and_events_sorted_inside():
    binner = EventBinner(bin_size=1000)
    binner.add_events([_event(5500), _event(5100), _event(1200)])

    bins = binner.get_all_bins()

    assert [b.time_range.start for b in bins] == [1000, 5000]
    assert [e.timestamp for e in bins[1].events] == [5100, 5500]


@pytest.mark.parametrize("bin_size", [1, 7, 1000, 60_000, 10**9])
@pytest.mark.parametrize("start,end", [(0, 100_000), (250, 31_000), (500, 500), (99_000, 250_000)])
def test_range_query_matches_brute_force(bin_size, start, end):
    events = _spread_events()
    binner = EventBinner(bin_size=bin_size)
    binner.add_events(events)

    expected = sorted(
        (e for e in events if start <= e.timestamp <= end),
        key=lambda e: e.timestamp,
    )
    found = binner.get_events_in_range(start, end)

    assert [(e.timestamp, e.name) for e in found] == [(e.timestamp, e.name) for e in expected]


def test_reversed_range_is_empty():
    binner = EventBinner(bin_size=1000)
    binner.add_events(_spread_events())

    assert binner.get_events_in_range(5000, 10) == []


def test_update_bin_size_round_trip_is_idempotent():
    binner = EventBinner(bin_size=1000)
    binner.add_events(_spread_events())
    before = binner.get_all_bins()

    binner.update_bin_size(5000)
    assert binner.bin_size == 5000
    assert binner.event_count == len(_spread_events())

    binner.update_bin_size(1000)
    assert binner.get_all_bins() == before


def test_update_bin_size_same_value_is_noop():
    binner = EventBinner(bin_size=1000)
    binner.add_event(_event(10))
    binner.update_bin_size(1000)

    assert binner.bin_size == 1000
    assert binner.event_count == 1


@pytest.mark.parametrize("bad", [0, -5])
def test_non_positive_bin_size_rejected(bad):
    with pytest.raises(InvalidBinSizeError):
        EventBinner(bin_size=bad)
    binner = EventBinner(bin_size=1000)
    with pytest.raises(InvalidBinSizeError):
        binner.update_bin_size(bad)


def test_duplicate_events_share_a_bucket():
    binner = EventBinner(bin_size=3_600_000)
    duplicate = _event(1_700_000_000_000, name="Full Moon", type=EventType.LUNAR_PHASE)
    binner.add_events([duplicate, duplicate])

    (only,) = binner.get_all_bins()
    assert len(only.events) == 2


def test_resolve_collisions_stacks_and_wraps():
    binner = EventBinner(bin_size=1000, event_height=20, spacing=4)
    binner.add_events([_event(100, "a"), _event(200, "b"), _event(300, "c")])
    (event_bin,) = binner.get_all_bins()

    positioned = binner.resolve_collisions(event_bin, timeline_height=50)

    assert [p.y for p in positioned] == [0, 24, 0]
    assert all(p.x == 0 for p in positioned)
    assert [p.event.name for p in positioned] == ["a", "b", "c"]


def test_resolve_collisions_short_timeline_single_row():
    binner = EventBinner(bin_size=1000)
    binner.add_events([_event(100), _event(200)])
    (event_bin,) = binner.get_all_bins()

    positioned = binner.resolve_collisions(event_bin, timeline_height=10)

    assert [p.y for p in positioned] == [0, 0]


def test_clear_empties_everything():
    binner = EventBinner()
    binner.add_events(_spread_events())
    binner.clear()

    assert binner.event_count == 0
    assert binner.get_all_bins() == []
