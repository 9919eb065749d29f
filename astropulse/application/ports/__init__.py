"""Application ports - Interfaces to external collaborators."""
from astropulse.application.ports.chart_surface import (
    IChartSurface,
    RangeChangeCallback,
    Unsubscribe,
)
from astropulse.application.ports.event_source import IEventSource
from astropulse.application.ports.candle_source import ICandleSource

__all__ = [
    "IChartSurface",
    "RangeChangeCallback",
    "Unsubscribe",
    "IEventSource",
    "ICandleSource",
]
