"""
Approximate Event Source.

Implementación en proceso de IEventSource basada en ciclos simplificados.
NO es precisión de efemérides: sirve para poblar el timeline con eventos
plausibles sin depender de una API externa.

CICLOS:
  - Fases lunares: mes sinódico de 29.530588853 días desde la luna nueva
    conocida del 2000-01-06T18:14Z (nueva, cuarto creciente, llena,
    cuarto menguante).
  - Eclipses: aproximados el 15 de junio y el 15 de diciembre (12:00Z).
  - Solsticios y equinoccios: fechas medias del calendario.
  - Lluvias de meteoros: picos anuales en fecha fija.
  - Aspectos planetarios: periodos fijos anclados en J2000, para que el
    resultado no dependa del inicio de la consulta.

El intervalo se recorta a [1900, 2200] antes de calcular.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Iterable, List, Tuple

from astropulse.application.ports.event_source import IEventSource
from astropulse.domain.entities.event import AstroEvent, EventType, Significance
from astropulse.domain.services.data_sanitizer import deduplicate_events
from astropulse.domain.value_objects.time_bounds import MAX_TIMESTAMP_MS, MIN_TIMESTAMP_MS
from astropulse.shared.logging.logger import get_logger

logger = get_logger("approximate_events")

DAY_MS = 24 * 60 * 60 * 1000
SYNODIC_MONTH_DAYS = 29.530588853
SYNODIC_MONTH_MS = SYNODIC_MONTH_DAYS * DAY_MS
KNOWN_NEW_MOON_MS = int(datetime(2000, 1, 6, 18, 14, tzinfo=timezone.utc).timestamp() * 1000)
J2000_MS = int(datetime(2000, 1, 1, 12, 0, tzinfo=timezone.utc).timestamp() * 1000)

# (fracción del ciclo, nombre, significancia)
LUNAR_PHASES: Tuple[Tuple[float, str, Significance], ...] = (
    (0.0, "New Moon", Significance.HIGH),
    (0.25, "First Quarter", Significance.MEDIUM),
    (0.5, "Full Moon", Significance.HIGH),
    (0.75, "Last Quarter", Significance.MEDIUM),
)

# (mes, día, hora, nombre, descripción)
ECLIPSES = (
    (6, 15, 12, "Solar Eclipse", "Approximate mid-year eclipse season"),
    (12, 15, 12, "Lunar Eclipse", "Approximate year-end eclipse season"),
)

SOLAR_EVENTS = (
    (3, 20, 12, "March Equinox", "Day and night of equal length"),
    (6, 21, 12, "June Solstice", "Longest day in the northern hemisphere"),
    (9, 22, 12, "September Equinox", "Day and night of equal length"),
    (12, 21, 12, "December Solstice", "Shortest day in the northern hemisphere"),
)

METEOR_SHOWERS = (
    (1, 3, 0, "Quadrantids Peak", "Quadrantids meteor shower peak"),
    (4, 22, 0, "Lyrids Peak", "Lyrids meteor shower peak"),
    (5, 6, 0, "Eta Aquariids Peak", "Eta Aquariids meteor shower peak"),
    (8, 12, 0, "Perseids Peak", "Perseids meteor shower peak"),
    (10, 21, 0, "Orionids Peak", "Orionids meteor shower peak"),
    (11, 17, 0, "Leonids Peak", "Leonids meteor shower peak"),
    (12, 14, 0, "Geminids Peak", "Geminids meteor shower peak"),
    (12, 22, 0, "Ursids Peak", "Ursids meteor shower peak"),
)

# (nombre, periodo en días, significancia)
PLANETARY_CYCLES = (
    ("Mercury Retrograde", 88, Significance.MEDIUM),
    ("Venus Conjunction", 584, Significance.MEDIUM),
    ("Mars Opposition", 687, Significance.LOW),
)


def _year_of(ms: int) -> int:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).year


def _ms(year: int, month: int, day: int, hour: int) -> int:
    return int(datetime(year, month, day, hour, tzinfo=timezone.utc).timestamp() * 1000)


class ApproximateEventSource(IEventSource):
    """
    Generador determinista de eventos astronómicos aproximados.

    Uso:
        source = ApproximateEventSource()
        events = source.get_events(start_ms, end_ms)
    """

    def __init__(self, include_planetary: bool = True):
        self._include_planetary = include_planetary

    def get_events(self, start_ms: int, end_ms: int) -> List[AstroEvent]:
        start_ms = max(int(start_ms), MIN_TIMESTAMP_MS)
        end_ms = min(int(end_ms), MAX_TIMESTAMP_MS)
        if start_ms > end_ms:
            return []

        events: List[AstroEvent] = []
        events.extend(self.lunar_phases(start_ms, end_ms))
        events.extend(self._yearly(start_ms, end_ms, ECLIPSES, EventType.ECLIPSE, Significance.HIGH))
        events.extend(self._yearly(start_ms, end_ms, SOLAR_EVENTS, EventType.SOLAR_EVENT, Significance.MEDIUM))
        events.extend(self._yearly(start_ms, end_ms, METEOR_SHOWERS, EventType.METEOR_SHOWER, Significance.LOW))
        if self._include_planetary:
            events.extend(self.planetary_aspects(start_ms, end_ms))

        events.sort(key=lambda e: (e.timestamp, e.name))
        result = deduplicate_events(events)
        logger.debug("Eventos aproximados en [%d, %d]: %d", start_ms, end_ms, len(result))
        return result

    # ─── Ciclos ──────────────────────────────────────────────────────

    @staticmethod
    def lunar_phases(start_ms: int, end_ms: int) -> Iterable[AstroEvent]:
        first_cycle = math.floor((start_ms - KNOWN_NEW_MOON_MS) / SYNODIC_MONTH_MS) - 1
        cycle = first_cycle
        while KNOWN_NEW_MOON_MS + cycle * SYNODIC_MONTH_MS <= end_ms:
            for fraction, name, significance in LUNAR_PHASES:
                ts = int(round(KNOWN_NEW_MOON_MS + (cycle + fraction) * SYNODIC_MONTH_MS))
                if start_ms <= ts <= end_ms:
                    yield AstroEvent(
                        timestamp=ts,
                        type=EventType.LUNAR_PHASE,
                        name=name,
                        description=f"{name} lunar phase",
                        significance=significance,
                    )
            cycle += 1

    @staticmethod
    def planetary_aspects(start_ms: int, end_ms: int) -> Iterable[AstroEvent]:
        for name, period_days, significance in PLANETARY_CYCLES:
            period_ms = period_days * DAY_MS
            n = math.ceil((start_ms - J2000_MS) / period_ms)
            ts = J2000_MS + n * period_ms
            while ts <= end_ms:
                yield AstroEvent(
                    timestamp=ts,
                    type=EventType.PLANETARY_ASPECT,
                    name=name,
                    description=f"{name} planetary aspect",
                    significance=significance,
                )
                ts += period_ms

    @staticmethod
    def _yearly(start_ms, end_ms, table, event_type, significance) -> Iterable[AstroEvent]:
        for year in range(_year_of(start_ms), _year_of(end_ms) + 1):
            for month, day, hour, name, description in table:
                ts = _ms(year, month, day, hour)
                if start_ms <= ts <= end_ms:
                    yield AstroEvent(
                        timestamp=ts,
                        type=event_type,
                        name=name,
                        description=description,
                        significance=significance,
                    )
