"""
AstroPulse – Application DTO: Timeline
========================================
Data Transfer Objects que devuelven los casos de uso del timeline.

Los DTOs sirven como contratos entre capas.
Son estructuras simples sin lógica de negocio.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from astropulse.domain.entities.candle import Candle
from astropulse.domain.entities.event_bin import EventBin, PositionedEvent
from astropulse.domain.value_objects.visible_range import VisibleRange


@dataclass
class CombinedSeriesDTO:
    """Serie histórica + sintética lista para el widget."""

    symbol: str
    timeframe: str
    candles: Tuple[Candle, ...]

    @property
    def synthetic_count(self) -> int:
        return sum(1 for c in self.candles if c.is_synthetic)

    @property
    def historical_count(self) -> int:
        return len(self.candles) - self.synthetic_count

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "timeframe": self.timeframe,
            "historical_count": self.historical_count,
            "synthetic_count": self.synthetic_count,
            "candles": [c.to_dict() for c in self.candles],
        }


@dataclass
class BinLayoutDTO:
    """Un bucket con sus eventos ya apilados."""

    bin: EventBin
    events: List[PositionedEvent]

    def to_dict(self) -> dict:
        return {
            "time_range": self.bin.time_range.to_dict(),
            "position": {"x": self.bin.position.x, "y": self.bin.position.y},
            "events": [e.to_dict() for e in self.events],
        }


@dataclass
class TimelineLayoutDTO:
    """Layout completo del timeline para un tamaño de bin."""

    bin_size: int
    bins: List[BinLayoutDTO] = field(default_factory=list)

    @property
    def event_count(self) -> int:
        return sum(len(b.events) for b in self.bins)

    def to_dict(self) -> dict:
        return {
            "bin_size": self.bin_size,
            "bin_count": len(self.bins),
            "event_count": self.event_count,
            "bins": [b.to_dict() for b in self.bins],
        }


@dataclass
class OverlayRenderResult:
    """Resultado de pintar un set de símbolos en modo overlay."""

    timeframe: str
    master: Optional[str] = None
    series: Dict[str, CombinedSeriesDTO] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)
    event_count: int = 0
    marker_count: int = 0
    initial_range: Optional[VisibleRange] = None
    initial_range_applied: bool = False

    def to_dict(self) -> dict:
        return {
            "timeframe": self.timeframe,
            "master": self.master,
            "series": {
                symbol: {
                    "historical_count": dto.historical_count,
                    "synthetic_count": dto.synthetic_count,
                }
                for symbol, dto in self.series.items()
            },
            "skipped": list(self.skipped),
            "event_count": self.event_count,
            "marker_count": self.marker_count,
            "initial_range": self.initial_range.to_dict() if self.initial_range else None,
            "initial_range_applied": self.initial_range_applied,
        }
