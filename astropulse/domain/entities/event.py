"""
AstroPulse – Domain Entity: AstroEvent
========================================
Evento astronómico discreto producido por una fuente externa.

- frozen=True → el motor solo LEE eventos, nunca los muta.
- timestamp en milisegundos UTC.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from astropulse.domain.exceptions.domain_errors import InvalidEventError
from astropulse.domain.value_objects.time_bounds import is_supported_ms


class EventType(str, Enum):
    LUNAR_PHASE = "lunar_phase"
    ECLIPSE = "eclipse"
    PLANETARY_ASPECT = "planetary_aspect"
    METEOR_SHOWER = "meteor_shower"
    SOLAR_EVENT = "solar_event"
    COMET_EVENT = "comet_event"


class Significance(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True, slots=True)
class AstroEvent:
    """Evento astronómico inmutable."""

    timestamp: int            # epoch en ms
    type: EventType
    name: str
    description: str = ""
    significance: Significance = Significance.MEDIUM

    @property
    def time_seconds(self) -> int:
        return self.timestamp // 1000

    @property
    def iso_date(self) -> str:
        """Fecha ISO-8601 UTC con milisegundos (usada en fingerprints)."""
        dt = datetime.fromtimestamp(self.timestamp / 1000, tz=timezone.utc)
        return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "type": self.type.value,
            "name": self.name,
            "description": self.description,
            "significance": self.significance.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AstroEvent":
        """
        Construir desde un dict de la fuente de eventos.

        Lanza InvalidEventError si falta timestamp o name, si el timestamp
        cae fuera de la ventana soportada, o si type / significance no
        pertenecen a sus enums.
        """
        timestamp = data.get("timestamp")
        if timestamp is None or isinstance(timestamp, bool):
            raise InvalidEventError("Evento sin timestamp", field="timestamp", value=timestamp)
        try:
            timestamp = int(timestamp)
        except (TypeError, ValueError):
            raise InvalidEventError(
                "Timestamp no numérico", field="timestamp", value=timestamp,
            ) from None
        if not is_supported_ms(timestamp):
            raise InvalidEventError(
                "Timestamp fuera del rango soportado", field="timestamp", value=timestamp,
            )

        name = data.get("name")
        if not name or not isinstance(name, str):
            raise InvalidEventError("Evento sin nombre", field="name", value=name)

        try:
            event_type = EventType(data.get("type", EventType.PLANETARY_ASPECT.value))
            significance = Significance(data.get("significance", Significance.MEDIUM.value))
        except ValueError as exc:
            raise InvalidEventError(str(exc), field="type") from None

        return cls(
            timestamp=timestamp,
            type=event_type,
            name=name,
            description=str(data.get("description", "")),
            significance=significance,
        )
