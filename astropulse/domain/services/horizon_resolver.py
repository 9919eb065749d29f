"""
AstroPulse – Future-Horizon Resolver
======================================
Decide cuántas velas sintéticas hacen falta para que todo evento dentro
del horizonte permitido del timeframe tenga un slot donde dibujarse.

ALGORITMO:
  1. max_future = now + horizon(timeframe)
  2. Eventos candidatos: last_candle < ts <= max_future
     Sin candidatos → min_buffer(timeframe), sin extensión por eventos.
  3. El más lejano se limita a max_future; delta → días (ceil) → velas
     según la densidad diaria del timeframe (ceil).
  4. count = max(velas, min_buffer), luego se acota a [50, 365]
     (cota global de seguridad aplicada DESPUÉS del buffer del timeframe).

DETERMINISMO:
  `now_ms` es una entrada explícita. Con las mismas entradas el resultado
  es idéntico → es la función que memoiza el CorrelationCache.
"""

from __future__ import annotations

import math
import time
from typing import Iterable, Optional

from astropulse.domain.entities.event import AstroEvent
from astropulse.domain.value_objects.timeframe import DAY_MS, Timeframe

GLOBAL_MIN_FUTURE_CANDLES = 50
GLOBAL_MAX_FUTURE_CANDLES = 365


def now_millis() -> int:
    return int(time.time() * 1000)


def latest_event_in_horizon(
    last_candle_time_ms: int,
    events: Iterable[AstroEvent],
    max_future_ms: int,
) -> Optional[int]:
    """Timestamp del evento más lejano en (last_candle, max_future], o None."""
    latest: Optional[int] = None
    for event in events:
        ts = event.timestamp
        if last_candle_time_ms < ts <= max_future_ms and (latest is None or ts > latest):
            latest = ts
    return latest


def calculate_required_future_candles(
    last_candle_time_ms: int,
    timeframe: "Timeframe | str",
    events: Iterable[AstroEvent],
    now_ms: Optional[int] = None,
    min_candles: int = GLOBAL_MIN_FUTURE_CANDLES,
    max_candles: int = GLOBAL_MAX_FUTURE_CANDLES,
) -> int:
    """
    Número de velas sintéticas a generar tras la última vela real.

    Args:
        last_candle_time_ms: apertura de la última vela real (ms)
        timeframe: timeframe del gráfico
        events: eventos conocidos (cualquier orden)
        now_ms: "ahora" en ms; por defecto el reloj del sistema
        min_candles / max_candles: cota global aplicada al final

    Returns:
        min_buffer del timeframe si no hay eventos en el horizonte;
        si no, un valor en [min_candles, max_candles].
    """
    tf = Timeframe.parse(timeframe)
    spec = tf.spec
    if now_ms is None:
        now_ms = now_millis()

    max_future_ms = now_ms + spec.horizon_ms
    latest = latest_event_in_horizon(last_candle_time_ms, events, max_future_ms)
    if latest is None:
        return spec.min_buffer

    latest = min(latest, max_future_ms)
    delta_days = math.ceil((latest - last_candle_time_ms) / DAY_MS)
    required = math.ceil(delta_days * spec.candles_per_day)

    required = max(required, spec.min_buffer)
    return min(max(required, min_candles), max_candles)
