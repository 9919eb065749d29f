"""
Layout Event Bins Use Case.

Conecta el selector adaptativo de tamaño de bin con el EventBinner:
cada cambio de rango visible elige una granularidad de la escalera y,
si cambió, re-indexa los eventos. El layout apila los eventos de cada
bucket para que no se solapen.

NOTA: update_bin_size() es O(n) y solo corre cuando la granularidad
cambia, no en cada frame de scroll.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from astropulse.application.dto.timeline_dto import BinLayoutDTO, TimelineLayoutDTO
from astropulse.domain.entities.event import AstroEvent
from astropulse.domain.services.bin_size_selector import TARGET_PX_PER_BIN, select_bin_size
from astropulse.domain.services.data_sanitizer import sanitize_events
from astropulse.domain.services.event_binner import EventBinner
from astropulse.domain.value_objects.visible_range import VisibleRange
from astropulse.shared.logging.logger import get_logger

logger = get_logger("layout_bins")


class LayoutEventBinsUseCase:
    """
    Caso de uso: bins de eventos para el rango visible.

    Uso:
        usecase = LayoutEventBinsUseCase(EventBinner())
        usecase.load_events(events)
        usecase.on_visible_range_change(VisibleRange(t0, t1), chart_width_px=1200)
        layout = usecase.layout(timeline_height=120)
    """

    def __init__(self, binner: EventBinner, target_px: float = TARGET_PX_PER_BIN):
        self._binner = binner
        self._target_px = target_px

    @property
    def bin_size(self) -> int:
        return self._binner.bin_size

    def load_events(self, events: Iterable[AstroEvent]) -> int:
        """Reemplazar el set de eventos (fuera de rango descartados, deduplicado por timestamp+name)."""
        unique = sanitize_events(events)
        self._binner.clear()
        self._binner.add_events(unique)
        return len(unique)

    def on_visible_range_change(
        self,
        visible_range: Optional[VisibleRange],
        chart_width_px: float,
    ) -> int:
        """
        Ajustar la granularidad al nuevo rango visible (en segundos).

        Rangos None o degenerados no cambian nada.

        Returns:
            El tamaño de bin vigente tras el cambio.
        """
        if visible_range is None:
            return self._binner.bin_size

        from_ms, to_ms = visible_range.to_millis()
        new_size = select_bin_size(from_ms, to_ms, chart_width_px, self._target_px)
        if new_size is None:
            return self._binner.bin_size

        if new_size != self._binner.bin_size:
            logger.debug("Bin size %d → %d ms", self._binner.bin_size, new_size)
            self._binner.update_bin_size(new_size)
        return self._binner.bin_size

    def events_in_range(self, visible_range: VisibleRange) -> List[AstroEvent]:
        from_ms, to_ms = visible_range.to_millis()
        return self._binner.get_events_in_range(from_ms, to_ms)

    def layout(
        self,
        timeline_height: float,
        visible_range: Optional[VisibleRange] = None,
    ) -> TimelineLayoutDTO:
        """
        Bins con eventos posicionados.

        Si se pasa un rango visible, solo se incluyen los buckets que lo
        intersectan.
        """
        bins = self._binner.get_all_bins()
        if visible_range is not None and not visible_range.is_degenerate:
            from_ms, to_ms = visible_range.to_millis()
            bins = [
                b for b in bins
                if b.time_range.end > from_ms and b.time_range.start <= to_ms
            ]

        return TimelineLayoutDTO(
            bin_size=self._binner.bin_size,
            bins=[
                BinLayoutDTO(bin=b, events=self._binner.resolve_collisions(b, timeline_height))
                for b in bins
            ],
        )
