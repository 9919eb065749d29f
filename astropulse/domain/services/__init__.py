"""Domain services - Pure engine logic with no framework dependencies."""
from astropulse.domain.services.event_binner import EventBinner
from astropulse.domain.services.bin_size_selector import BIN_SIZE_LADDER, select_bin_size
from astropulse.domain.services.horizon_resolver import calculate_required_future_candles
from astropulse.domain.services.candle_synthesizer import generate_future_candles, step_time
from astropulse.domain.services.marker_builder import (
    ChartMarker,
    build_markers,
    filter_events_by_type,
    group_events_by_time,
    find_events_at_time,
)
from astropulse.domain.services.data_sanitizer import (
    sanitize_candles,
    parse_candles,
    parse_events,
    deduplicate_events,
    sanitize_events,
)

__all__ = [
    "EventBinner",
    "BIN_SIZE_LADDER",
    "select_bin_size",
    "calculate_required_future_candles",
    "generate_future_candles",
    "step_time",
    "ChartMarker",
    "build_markers",
    "filter_events_by_type",
    "group_events_by_time",
    "find_events_at_time",
    "sanitize_candles",
    "parse_candles",
    "parse_events",
    "deduplicate_events",
    "sanitize_events",
]
