"""
Build Combined Series Use Case.

Une las velas históricas con las velas sintéticas necesarias para que
los eventos posteriores a la última vela real tengan dónde anclarse.

FLUJO:
  1. Historial vacío → tupla vacía (nada que extender).
  2. Cache de series: acierto → se devuelve la MISMA tupla cacheada.
  3. Cache de horizonte: nº de velas futuras (memoizado por
     last_candle/timeframe/nº de eventos).
  4. Sintetizar, concatenar y guardar en cache.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from astropulse.domain.entities.candle import Candle
from astropulse.domain.entities.event import AstroEvent
from astropulse.domain.services.candle_synthesizer import generate_future_candles
from astropulse.domain.services.horizon_resolver import (
    GLOBAL_MAX_FUTURE_CANDLES,
    GLOBAL_MIN_FUTURE_CANDLES,
    calculate_required_future_candles,
)
from astropulse.domain.value_objects.time_bounds import is_supported_ms
from astropulse.domain.value_objects.timeframe import Timeframe
from astropulse.shared.logging.logger import get_logger
from astropulse.state.correlation_cache import CorrelationCache

logger = get_logger("build_series")


class BuildCombinedSeriesUseCase:
    """
    Caso de uso: serie histórica + sintética, memoizada.

    El cache se inyecta: el Container comparte UNA instancia entre
    requests, los tests crean la suya.
    """

    def __init__(
        self,
        cache: CorrelationCache,
        min_candles: int = GLOBAL_MIN_FUTURE_CANDLES,
        max_candles: int = GLOBAL_MAX_FUTURE_CANDLES,
    ):
        self._cache = cache
        self._min_candles = min_candles
        self._max_candles = max_candles

    def required_future_candles(
        self,
        last_candle: Candle,
        timeframe: "Timeframe | str",
        events: Sequence[AstroEvent],
        now_ms: Optional[int] = None,
    ) -> int:
        """Nº de velas sintéticas tras `last_candle`, vía cache de horizonte."""
        tf = Timeframe.parse(timeframe)
        key = self._cache.horizon_key(last_candle, tf, len(events))
        cached = self._cache.horizon.get(key)
        if cached is not None:
            return cached

        count = calculate_required_future_candles(
            last_candle.time_ms,
            tf,
            events,
            now_ms=now_ms,
            min_candles=self._min_candles,
            max_candles=self._max_candles,
        )
        self._cache.horizon.put(key, count)
        return count

    def execute(
        self,
        symbol: str,
        historical: Sequence[Candle],
        timeframe: "Timeframe | str",
        events: Sequence[AstroEvent],
        now_ms: Optional[int] = None,
    ) -> Tuple[Candle, ...]:
        """
        Construye la serie combinada.

        Args:
            symbol: Símbolo del activo
            historical: Velas reales ordenadas por time ASC
            timeframe: Timeframe del gráfico
            events: Eventos a correlacionar
            now_ms: "Ahora" en ms (por defecto reloj del sistema)

        Returns:
            Tupla historial + sintéticas. Las sintéticas tienen volume == 0.
        """
        if not historical:
            return ()

        tf = Timeframe.parse(timeframe)
        events = [e for e in events if is_supported_ms(e.timestamp)]
        last_candle = historical[-1]
        if not is_supported_ms(last_candle.time_ms):
            logger.warning(
                "Serie %s: última vela t=%d fuera de rango, sin extensión sintética",
                symbol, last_candle.time,
            )
            return tuple(historical)

        key = self._cache.series_key(symbol, last_candle, tf, len(historical), events)
        cached = self._cache.series.get(key)
        if cached is not None:
            logger.debug("Serie %s %s servida desde cache", symbol, tf.value)
            return cached

        count = self.required_future_candles(last_candle, tf, events, now_ms)
        future = generate_future_candles(last_candle, tf, count)
        combined = tuple(historical) + tuple(future)

        self._cache.series.put(key, combined)
        logger.debug(
            "Serie %s %s: %d reales + %d sintéticas",
            symbol, tf.value, len(historical), len(future),
        )
        return combined
