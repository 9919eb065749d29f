from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from astropulse.main import app

DAY_S = 86_400


def _ts(*args):
    return int(datetime(*args, tzinfo=timezone.utc).timestamp())


def _candles(count=5, start=None):
    start = start or _ts(2025, 6, 1)
    return [
        {"time": start + i * DAY_S, "open": 100, "high": 103, "low": 99, "close": 101, "volume": 10}
        for i in range(count)
    ]


def _series_payload(**overrides):
    candles = _candles()
    payload = {
        "symbol": "BTCUSDT",
        "timeframe": "1d",
        "candles": candles,
        "events": [],
        "now_ms": candles[-1]["time"] * 1000,
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def client():
    with TestClient(app) as c:
        c.delete("/api/cache")
        yield c


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok", "service": "astropulse"}


def test_timeframes_table(client):
    data = client.get("/api/timeframes").json()

    assert data["default"] == "1d"
    table = {row["timeframe"]: row for row in data["timeframes"]}
    assert list(table) == ["1h", "8h", "1d", "1w", "1M"]
    assert table["1w"]["min_buffer"] == 30
    assert table["1M"]["horizon_days"] == 365
    assert table["1h"]["recommended_limit"] == 3000


def test_events_window(client):
    res = client.get("/api/events", params={"start": _ts(2025, 8, 1) * 1000, "end": _ts(2025, 8, 31) * 1000})

    assert res.status_code == 200, res.text
    data = res.json()
    assert data["count"] == len(data["events"]) > 0
    assert "Perseids Peak" in {e["name"] for e in data["events"]}


def test_events_reversed_and_missing_params(client):
    assert client.get("/api/events", params={"start": 10, "end": 1}).json()["count"] == 0
    assert client.get("/api/events", params={"start": 10}).status_code == 422


def test_series_adds_synthetic_tail(client):
    res = client.post("/api/timeline/series", json=_series_payload())

    assert res.status_code == 200, res.text
    data = res.json()
    assert data["historical_count"] == 5
    assert data["synthetic_count"] == 50
    tail = data["candles"][5:]
    assert all(c["volume"] == 0 and c["open"] == c["close"] == 101 for c in tail)
    assert "kind" not in data["candles"][0]


def test_series_fetches_events_when_omitted(client):
    payload = _series_payload()
    del payload["events"]

    data = client.post("/api/timeline/series", json=payload).json()

    assert data["event_count"] > 0
    assert data["synthetic_count"] == 50


def test_series_drops_invalid_candles(client):
    candles = _candles(3) + [{"time": _ts(2025, 7, 1), "open": 100, "high": 90, "low": 99, "close": 101, "volume": 1}]

    data = client.post("/api/timeline/series", json=_series_payload(candles=candles)).json()

    assert data["historical_count"] == 3


def test_series_unknown_timeframe_is_400(client):
    res = client.post("/api/timeline/series", json=_series_payload(timeframe="3d"))

    assert res.status_code == 400
    assert res.json()["detail"]["error"] == "UNKNOWN_TIMEFRAME"


def test_series_bad_shape_is_422(client):
    res = client.post("/api/timeline/series", json={"symbol": "BTCUSDT", "candles": [{"time": "x"}]})
    assert res.status_code == 422


def test_bins_for_one_day_window(client):
    payload = {
        "events": [
            {"timestamp": 1_000, "name": "Full Moon", "type": "lunar_phase"},
            {"timestamp": 2_000, "name": "Mars Opposition"},
            {"timestamp": 3_000, "name": "Geminids Peak", "type": "meteor_shower"},
            {"timestamp": 3_000, "name": "Geminids Peak", "type": "meteor_shower"},
        ],
        "visible_range": {"from": 0, "to": DAY_S},
        "chart_width_px": 1152,
        "timeline_height": 48,
    }

    res = client.post("/api/timeline/bins", json=payload)

    assert res.status_code == 200, res.text
    data = res.json()
    assert data["bin_size"] == 3_600_000
    assert data["bin_count"] == 1
    assert data["event_count"] == 3
    assert [e["coordinates"]["y"] for e in data["bins"][0]["events"]] == [0, 24, 0]
    assert data["visible_range"] == {"from": 0, "to": DAY_S}


def test_markers_with_filters_and_tooltip(client):
    day = _ts(2025, 6, 11)
    payload = {
        "events": [
            {"timestamp": (day + 3600) * 1000, "name": "Full Moon", "type": "lunar_phase"},
            {"timestamp": (day + 7200) * 1000, "name": "Venus Conjunction", "type": "planetary_aspect"},
            {"timestamp": (day + 9000) * 1000, "name": "Perseids Peak", "type": "meteor_shower"},
        ],
        "filters": {"meteor": False},
        "timeframe": "1d",
        "at_time": day + 100,
    }

    data = client.post("/api/timeline/markers", json=payload).json()

    assert data["count"] == 2
    assert [m["text"] for m in data["markers"]] == ["🌕", "♀"]
    assert list(data["groups"]) == [str(day)]
    assert [e["name"] for e in data["at_time"]] == ["Full Moon", "Venus Conjunction"]


def test_markers_unknown_timeframe_is_400(client):
    res = client.post("/api/timeline/markers", json={"events": [], "timeframe": "2h"})
    assert res.status_code == 400


def test_cache_stats_and_clear(client):
    client.post("/api/timeline/series", json=_series_payload())
    client.post("/api/timeline/series", json=_series_payload())

    stats = client.get("/api/cache/stats").json()
    assert stats["series"]["size"] == 1
    assert stats["series"]["hits"] >= 1

    assert client.delete("/api/cache").json() == {"status": "cleared"}
    assert client.get("/api/cache/stats").json()["series"]["size"] == 0


def test_far_future_event_is_dropped_not_500(client):
    far = {"timestamp": 10**17, "name": "Far Future Alignment"}

    res = client.post("/api/timeline/series", json=_series_payload(candles=_candles(1), events=[far]))
    assert res.status_code == 200, res.text
    assert res.json()["event_count"] == 0

    res = client.post("/api/timeline/markers", json={"events": [far], "timeframe": "1d", "at_time": 10**14})
    assert res.status_code == 200, res.text
    assert res.json()["count"] == 0
    assert res.json()["at_time"] == []


def test_far_future_candle_is_dropped(client):
    candles = _candles(2) + [{"time": 10**14, "open": 100, "high": 103, "low": 99, "close": 101, "volume": 1}]

    res = client.post("/api/timeline/series", json=_series_payload(candles=candles))

    assert res.status_code == 200, res.text
    assert res.json()["historical_count"] == 2
