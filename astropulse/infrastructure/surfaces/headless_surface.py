"""
Headless Chart Surface.

Implementación en memoria de IChartSurface. Se comporta como el widget
real en lo que importa al motor:
  - set_visible_range() notifica a los suscriptores SÍNCRONAMENTE, igual
    que un cambio hecho por el usuario (el widget no distingue el origen).
  - Fijar el mismo rango que ya tiene no emite notificación.

user_change_range() simula un pan/zoom del usuario.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from astropulse.application.ports.chart_surface import (
    IChartSurface,
    RangeChangeCallback,
    Unsubscribe,
)
from astropulse.domain.entities.candle import Candle
from astropulse.domain.services.marker_builder import ChartMarker
from astropulse.domain.value_objects.visible_range import VisibleRange


class HeadlessChartSurface(IChartSurface):
    """Superficie de gráfico sin render, para tests y sesiones de servidor."""

    def __init__(self, name: str = "", visible_range: Optional[VisibleRange] = None):
        self.name = name
        self._range = visible_range
        self._series: Tuple[Candle, ...] = ()
        self._markers: Tuple[ChartMarker, ...] = ()
        self._subscribers: List[RangeChangeCallback] = []

        # Contadores de inspección
        self.set_range_calls = 0
        self.notifications = 0

    # ════════════════════════════════════════════════════════════════
    #  IChartSurface Implementation
    # ════════════════════════════════════════════════════════════════

    def set_series(self, candles: Sequence[Candle]) -> None:
        self._series = tuple(candles)

    def set_markers(self, markers: Sequence[ChartMarker]) -> None:
        self._markers = tuple(markers)

    def get_visible_range(self) -> Optional[VisibleRange]:
        return self._range

    def set_visible_range(self, visible_range: VisibleRange) -> None:
        self.set_range_calls += 1
        self._apply(visible_range)

    def subscribe_visible_range_change(self, callback: RangeChangeCallback) -> Unsubscribe:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # ─── Simulación ──────────────────────────────────────────────────

    def user_change_range(self, visible_range: Optional[VisibleRange]) -> None:
        """Pan/zoom del usuario (o del widget) sobre esta superficie."""
        self._apply(visible_range)

    def _apply(self, visible_range: Optional[VisibleRange]) -> None:
        if visible_range == self._range:
            return
        self._range = visible_range
        for callback in list(self._subscribers):
            self.notifications += 1
            callback(visible_range)

    # ─── Consultas ───────────────────────────────────────────────────

    @property
    def series(self) -> Tuple[Candle, ...]:
        return self._series

    @property
    def markers(self) -> Tuple[ChartMarker, ...]:
        return self._markers

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)
