"""
AstroPulse – Marker Builder
=============================
Convierte eventos astronómicos en marcadores del widget de velas y
ofrece los filtros/agrupaciones que usa la UI para tooltips apilados.

FORMATO DE MARCADOR:
    {time: segundos, position: "aboveBar", color: "#rrggbb", text: glifo, size: 2}
Ordenados por time ascendente, solo time > 0.

GLIFOS:
  Se eligen por tipo de evento y, dentro del tipo, por palabras clave del
  nombre (Full Moon, Perseids, Total, Jupiter...). La primera regla que
  coincide gana; si ninguna coincide se usa el glifo por defecto del tipo.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from astropulse.domain.entities.event import AstroEvent, EventType
from astropulse.domain.value_objects.time_bounds import is_supported_ms
from astropulse.domain.value_objects.timeframe import Timeframe

MARKER_POSITION = "aboveBar"
MARKER_SIZE = 2

_FALLBACK = ("⭐", "#f7931a")
_NAMELESS = ("❓", "#6b7280")

# tipo → ([(palabras clave, (glifo, color)), ...], default)
_GLYPH_RULES: Dict[EventType, Tuple[List[Tuple[Tuple[str, ...], Tuple[str, str]]], Tuple[str, str]]] = {
    EventType.LUNAR_PHASE: (
        [
            (("full moon",), ("🌕", "#fbbf24")),
            (("new moon",), ("🌑", "#6b7280")),
            (("first quarter",), ("🌓", "#94a3b8")),
            (("last quarter", "third quarter"), ("🌗", "#64748b")),
        ],
        ("🌙", "#e2e8f0"),
    ),
    EventType.ECLIPSE: (
        [
            (("total lunar",), ("🔴", "#dc2626")),
            (("partial lunar",), ("🟠", "#f59e0b")),
            (("penumbral",), ("🟡", "#fbbf24")),
            (("total solar",), ("🌑", "#000000")),
            (("annular",), ("⭕", "#dc2626")),
            (("hybrid",), ("🔄", "#7c3aed")),
        ],
        ("🌒", "#dc2626"),
    ),
    EventType.PLANETARY_ASPECT: (
        [
            (("great conjunction",), ("🔗", "#dc2626")),
            (("parade",), ("🪐", "#7c3aed")),
            (("jupiter",), ("♃", "#f59e0b")),
            (("venus",), ("♀", "#ec4899")),
            (("mars",), ("♂", "#ef4444")),
            (("mercury",), ("☿", "#8b5cf6")),
            (("conjunction",), ("🔗", "#6b7280")),
        ],
        ("✨", "#06b6d4"),
    ),
    EventType.METEOR_SHOWER: (
        [
            (("quadrantids",), ("⭐", "#fbbf24")),
            (("perseids",), ("☄️", "#f59e0b")),
            (("geminids",), ("💎", "#06b6d4")),
            (("lyrids",), ("🎵", "#a855f7")),
            (("leonids",), ("🦁", "#f59e0b")),
            (("orionids",), ("🏹", "#10b981")),
            (("aquariids",), ("🌊", "#3b82f6")),
            (("ursids",), ("🐻", "#8b5cf6")),
        ],
        ("☄️", "#8b5cf6"),
    ),
    EventType.SOLAR_EVENT: (
        [
            (("solstice",), ("☀️", "#f59e0b")),
            (("equinox",), ("⚖️", "#10b981")),
        ],
        ("☉", "#eab308"),
    ),
    EventType.COMET_EVENT: (
        [
            (("asteroid",), ("🪨", "#6b7280")),
            (("comet",), ("🌟", "#06b6d4")),
        ],
        ("✨", "#8b5cf6"),
    ),
}

# filtro de UI → tipos que controla
FILTER_GROUPS: Dict[str, Tuple[EventType, ...]] = {
    "lunar": (EventType.LUNAR_PHASE, EventType.ECLIPSE),
    "solar": (EventType.SOLAR_EVENT,),
    "planetary": (EventType.PLANETARY_ASPECT, EventType.COMET_EVENT),
    "meteor": (EventType.METEOR_SHOWER,),
}


@dataclass(frozen=True, slots=True)
class ChartMarker:
    time: int
    position: str
    color: str
    text: str
    size: int

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "position": self.position,
            "color": self.color,
            "text": self.text,
            "size": self.size,
        }


def glyph_for(event: AstroEvent) -> Tuple[str, str]:
    """(glifo, color) de un evento."""
    if not event.name:
        return _NAMELESS
    rules = _GLYPH_RULES.get(event.type)
    if rules is None:
        return _FALLBACK
    keyword_rules, default = rules
    name = event.name.lower()
    for keywords, glyph in keyword_rules:
        if any(k in name for k in keywords):
            return glyph
    return default


def build_markers(events: Iterable[AstroEvent]) -> List[ChartMarker]:
    """Marcadores ordenados por time, descartando time <= 0."""
    markers = []
    for event in events:
        time_s = event.timestamp // 1000
        if time_s <= 0:
            continue
        text, color = glyph_for(event)
        markers.append(ChartMarker(time_s, MARKER_POSITION, color, text, MARKER_SIZE))
    markers.sort(key=lambda m: m.time)
    return markers


def filter_events_by_type(
    events: Iterable[AstroEvent],
    filters: Optional[Dict[str, bool]] = None,
) -> List[AstroEvent]:
    """
    Aplicar los toggles de la UI. Un grupo ausente del dict cuenta como
    activo; solo `False` explícito oculta sus tipos.
    """
    if not filters:
        return list(events)
    hidden = {
        event_type
        for group, enabled in filters.items()
        if enabled is False
        for event_type in FILTER_GROUPS.get(group, ())
    }
    return [e for e in events if e.type not in hidden]


def bucket_start(time_seconds: int, timeframe: "Timeframe | str") -> int:
    """Inicio (UTC, segundos) del bucket del timeframe que contiene `time_seconds`."""
    tf = Timeframe.parse(timeframe)
    moment = datetime.fromtimestamp(time_seconds, tz=timezone.utc)
    day = moment.replace(hour=0, minute=0, second=0, microsecond=0)

    if tf is Timeframe.H1:
        start = moment.replace(minute=0, second=0, microsecond=0)
    elif tf is Timeframe.H8:
        start = day.replace(hour=(moment.hour // 8) * 8)
    elif tf is Timeframe.D1:
        start = day
    elif tf is Timeframe.W1:
        # semanas empiezan en domingo
        start = day - timedelta(days=(moment.weekday() + 1) % 7)
    else:
        start = day.replace(day=1)
    return int(start.timestamp())


def group_events_by_time(
    events: Iterable[AstroEvent],
    timeframe: "Timeframe | str",
) -> Dict[int, List[AstroEvent]]:
    """Eventos agrupados por inicio de bucket del timeframe (segundos). Fuera de rango se omiten."""
    tf = Timeframe.parse(timeframe)
    grouped: Dict[int, List[AstroEvent]] = {}
    for event in events:
        if not is_supported_ms(event.timestamp):
            continue
        grouped.setdefault(bucket_start(event.time_seconds, tf), []).append(event)
    return grouped


def find_events_at_time(
    events: Iterable[AstroEvent],
    time_seconds: int,
    timeframe: "Timeframe | str",
) -> List[AstroEvent]:
    """Eventos que caen en la misma vela que `time_seconds`, por nombre."""
    tf = Timeframe.parse(timeframe)
    if not is_supported_ms(time_seconds * 1000):
        return []
    target = bucket_start(time_seconds, tf)
    found = [
        e for e in events
        if is_supported_ms(e.timestamp) and bucket_start(e.time_seconds, tf) == target
    ]
    return sorted(found, key=lambda e: e.name)
