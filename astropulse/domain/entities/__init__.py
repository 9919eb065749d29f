"""Domain entities."""
from astropulse.domain.entities.candle import Candle, CandleKind
from astropulse.domain.entities.event import AstroEvent, EventType, Significance
from astropulse.domain.entities.event_bin import (
    EventBin,
    TimeRange,
    BinPosition,
    PositionedEvent,
)

__all__ = [
    "Candle",
    "CandleKind",
    "AstroEvent",
    "EventType",
    "Significance",
    "EventBin",
    "TimeRange",
    "BinPosition",
    "PositionedEvent",
]
