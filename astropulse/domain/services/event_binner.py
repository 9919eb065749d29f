"""
AstroPulse – Event Binner
===========================
Índice de buckets temporales de ancho fijo sobre eventos astronómicos.

ALGORITMO:
  1. bucket = timestamp // bin_size_ms  (floor, también para epochs negativos)
  2. Cada bucket guarda la lista de eventos en orden de inserción.
  3. Las consultas por rango recorren solo los buckets que tocan el rango.

COMPLEJIDAD:
  add_event()          → O(1)
  get_events_in_range()→ O(k log k) en eventos devueltos + O(buckets visitados)
  update_bin_size()    → O(n), solo en cambios de zoom, NUNCA por frame

COLISIONES:
  resolve_collisions() apila verticalmente los eventos de un mismo bucket.
  Si no caben, vuelve a la primera fila (round-robin): con alta densidad
  varios eventos comparten fila. Es un paso de presentación, no muta datos.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from astropulse.domain.entities.event import AstroEvent
from astropulse.domain.entities.event_bin import (
    BinPosition,
    EventBin,
    PositionedEvent,
    TimeRange,
)
from astropulse.domain.exceptions.domain_errors import InvalidBinSizeError

DEFAULT_BIN_SIZE_MS = 60 * 60 * 1000
EVENT_HEIGHT_PX = 20
EVENT_SPACING_PX = 4


def _by_timestamp(event: AstroEvent) -> int:
    return event.timestamp


class EventBinner:
    """
    Agrupa eventos en buckets de `bin_size` ms.

    Uso:
        binner = EventBinner(bin_size=3_600_000)
        binner.add_events(events)
        bins = binner.get_all_bins()
    """

    def __init__(
        self,
        bin_size: int = DEFAULT_BIN_SIZE_MS,
        event_height: int = EVENT_HEIGHT_PX,
        spacing: int = EVENT_SPACING_PX,
    ) -> None:
        if bin_size <= 0:
            raise InvalidBinSizeError(bin_size)
        self._bin_size = bin_size
        self._event_height = event_height
        self._spacing = spacing
        # bucket index → eventos en orden de inserción
        self._bins: Dict[int, List[AstroEvent]] = {}
        self._count = 0

    @property
    def bin_size(self) -> int:
        return self._bin_size

    @property
    def event_count(self) -> int:
        return self._count

    def clear(self) -> None:
        self._bins.clear()
        self._count = 0

    def add_event(self, event: AstroEvent) -> None:
        """Insertar un evento en su bucket. O(1)."""
        index = event.timestamp // self._bin_size
        bucket = self._bins.get(index)
        if bucket is None:
            bucket = []
            self._bins[index] = bucket
        bucket.append(event)
        self._count += 1

    def add_events(self, events: Iterable[AstroEvent]) -> None:
        for event in events:
            self.add_event(event)

    def get_events_in_range(self, start: int, end: int) -> List[AstroEvent]:
        """
        Eventos con start <= timestamp <= end, ordenados ascendentemente.

        Si el rango cubre más índices que buckets poblados, se recorren
        los buckets poblados en su lugar (mismo resultado, menos trabajo).
        """
        if start > end:
            return []

        start_index = start // self._bin_size
        end_index = end // self._bin_size

        if end_index - start_index + 1 > len(self._bins):
            indices = [i for i in self._bins if start_index <= i <= end_index]
        else:
            indices = range(start_index, end_index + 1)

        found: List[AstroEvent] = []
        for index in indices:
            bucket = self._bins.get(index)
            if not bucket:
                continue
            found.extend(e for e in bucket if start <= e.timestamp <= end)

        found.sort(key=_by_timestamp)
        return found

    def get_all_bins(self) -> List[EventBin]:
        """Todos los buckets no vacíos, ordenados por inicio."""
        bins: List[EventBin] = []
        for index in sorted(self._bins):
            events = self._bins[index]
            if not events:
                continue
            start = index * self._bin_size
            bins.append(
                EventBin(
                    time_range=TimeRange(start=start, end=start + self._bin_size),
                    events=tuple(sorted(events, key=_by_timestamp)),
                    # x se convierte a coordenadas del gráfico en la UI
                    position=BinPosition(x=start, y=0),
                )
            )
        return bins

    def resolve_collisions(self, event_bin: EventBin, timeline_height: float) -> List[PositionedEvent]:
        """
        Apilar verticalmente los eventos de un bucket.

        slot = i mod floor(timeline_height / (event_height + spacing))
        Con menos alto que una fila, todos comparten la fila 0.
        """
        row = self._event_height + self._spacing
        slots = max(1, int(timeline_height // row)) if row > 0 else 1

        return [
            PositionedEvent(
                event=event,
                x=event_bin.position.x,
                y=event_bin.position.y + row * (i % slots),
            )
            for i, event in enumerate(event_bin.events)
        ]

    def update_bin_size(self, new_size: int) -> None:
        """Re-indexar todos los eventos con un nuevo tamaño de bin. O(n)."""
        if new_size <= 0:
            raise InvalidBinSizeError(new_size)
        if new_size == self._bin_size:
            return

        drained: List[AstroEvent] = []
        for events in self._bins.values():
            drained.extend(events)

        self.clear()
        self._bin_size = new_size
        self.add_events(drained)
