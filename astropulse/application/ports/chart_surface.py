"""
AstroPulse – Application Port: Chart Surface
==============================================
Capacidad que expone el widget de velas (una instancia por símbolo en
modo overlay).

El motor NO dibuja: entrega series y marcadores y lee/escribe el rango
visible. El widget decide CÓMO renderizar.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

from astropulse.domain.entities.candle import Candle
from astropulse.domain.services.marker_builder import ChartMarker
from astropulse.domain.value_objects.visible_range import VisibleRange

RangeChangeCallback = Callable[[Optional[VisibleRange]], None]
Unsubscribe = Callable[[], None]


class IChartSurface(ABC):
    """
    Interfaz de una superficie de gráfico.

    IMPLEMENTACIONES POSIBLES:
    - HeadlessChartSurface (memoria, tests y sesiones de sync)
    - Adaptador de un widget real en el frontend
    """

    @abstractmethod
    def set_series(self, candles: Sequence[Candle]) -> None:
        """Reemplazar la serie de velas completa."""
        pass

    @abstractmethod
    def set_markers(self, markers: Sequence[ChartMarker]) -> None:
        """Reemplazar los marcadores de eventos."""
        pass

    @abstractmethod
    def get_visible_range(self) -> Optional[VisibleRange]:
        """Rango visible actual, o None si la superficie aún no tiene datos."""
        pass

    @abstractmethod
    def set_visible_range(self, visible_range: VisibleRange) -> None:
        """
        Fijar el rango visible.

        El widget PUEDE notificar de forma síncrona a los suscriptores
        de cambio de rango antes de retornar.
        """
        pass

    @abstractmethod
    def subscribe_visible_range_change(self, callback: RangeChangeCallback) -> Unsubscribe:
        """
        Registrar un callback de cambio de rango.

        Returns:
            Función que cancela la suscripción.
        """
        pass
