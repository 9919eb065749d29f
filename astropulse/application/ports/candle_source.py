"""
AstroPulse – Application Port: Candle Source
==============================================
Interfaz para obtener velas históricas de un exchange.

Contrato: velas ordenadas por time ASC, sin times duplicados y sin OHLC
inválidos. Si la fuente falla, devuelve lista vacía.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from astropulse.domain.entities.candle import Candle
from astropulse.domain.value_objects.timeframe import Timeframe


class ICandleSource(ABC):
    """
    Interfaz para proveer velas históricas.

    IMPLEMENTACIONES POSIBLES:
    - Adaptador REST de un exchange
    - Fixture en memoria (tests)
    """

    @abstractmethod
    def get_candles(self, symbol: str, timeframe: Timeframe, limit: int = 500) -> List[Candle]:
        """
        Obtiene velas históricas.

        Args:
            symbol: Símbolo (e.g. "BTCUSDT")
            timeframe: Timeframe de las velas
            limit: Número máximo de velas

        Returns:
            Lista de velas ordenadas por time ASC
        """
        pass
