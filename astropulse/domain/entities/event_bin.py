"""
AstroPulse – Domain Entity: EventBin
======================================
Bucket temporal de eventos ya ordenados, derivado del EventBinner.

Se recalcula cada vez que cambia el tamaño de bin o el set de eventos;
nunca se persiste.
"""

from __future__ import annotations

from dataclasses import dataclass

from astropulse.domain.entities.event import AstroEvent


@dataclass(frozen=True, slots=True)
class TimeRange:
    start: int   # ms, inclusivo
    end: int     # ms, exclusivo (start + bin_size)

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True, slots=True)
class BinPosition:
    x: float     # se traduce a coordenadas del gráfico en la capa de UI
    y: float


@dataclass(frozen=True, slots=True)
class EventBin:
    """Bucket no vacío con sus eventos ordenados por timestamp."""

    time_range: TimeRange
    events: tuple[AstroEvent, ...]
    position: BinPosition

    def to_dict(self) -> dict:
        return {
            "time_range": self.time_range.to_dict(),
            "events": [e.to_dict() for e in self.events],
            "position": {"x": self.position.x, "y": self.position.y},
        }


@dataclass(frozen=True, slots=True)
class PositionedEvent:
    """Evento con coordenadas tras resolver colisiones (solo presentación)."""

    event: AstroEvent
    x: float
    y: float

    def to_dict(self) -> dict:
        data = self.event.to_dict()
        data["coordinates"] = {"x": self.x, "y": self.y}
        return data
