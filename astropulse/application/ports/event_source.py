"""
AstroPulse – Application Port: Event Source
=============================================
Interfaz para obtener eventos astronómicos en un intervalo.

El motor trata la fuente como orientativa: puede devolver duplicados
(timestamp, name) que se eliminan antes del binning.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from astropulse.domain.entities.event import AstroEvent


class IEventSource(ABC):
    """
    Interfaz para proveer eventos astronómicos.

    IMPLEMENTACIONES POSIBLES:
    - ApproximateEventSource (ciclos simplificados, en proceso)
    - Catálogo estático / API de efemérides
    """

    @abstractmethod
    def get_events(self, start_ms: int, end_ms: int) -> List[AstroEvent]:
        """
        Eventos con start_ms <= timestamp <= end_ms.

        Args:
            start_ms: inicio del intervalo (ms UTC)
            end_ms: fin del intervalo (ms UTC)

        Returns:
            Lista de eventos ordenados por timestamp ASC
        """
        pass
