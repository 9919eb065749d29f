"""Domain value objects."""
from astropulse.domain.value_objects.timeframe import (
    Timeframe,
    TimeframeSpec,
    TIMEFRAME_SPECS,
    DAY_MS,
    HOUR_MS,
)
from astropulse.domain.value_objects.time_bounds import (
    MIN_TIMESTAMP_MS,
    MAX_TIMESTAMP_MS,
    is_supported_ms,
)
from astropulse.domain.value_objects.visible_range import VisibleRange
from astropulse.domain.value_objects.surface_state import SurfaceState

__all__ = [
    "Timeframe",
    "TimeframeSpec",
    "TIMEFRAME_SPECS",
    "DAY_MS",
    "HOUR_MS",
    "MIN_TIMESTAMP_MS",
    "MAX_TIMESTAMP_MS",
    "is_supported_ms",
    "VisibleRange",
    "SurfaceState",
]
