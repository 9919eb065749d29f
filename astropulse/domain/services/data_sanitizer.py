"""
AstroPulse – Data Sanitizer
=============================
Limpieza de la entrada que llega de las fuentes externas antes de que el
motor la use.

Velas:
  - Se rechazan OHLC inválidos (precio <= 0 o no finito, high < max(open,
    close), low > min(open, close)), volumen negativo o no finito, y time
    fuera de la ventana soportada (1900-2200, ver time_bounds).
  - Orden ascendente por time; duplicados por time → se conserva el primero.
Eventos:
  - Dicts sin timestamp/name se descartan.
  - Timestamps fuera de la ventana soportada se descartan.
  - Duplicados (timestamp, name) se eliminan antes del binning para no
    contar colisiones dobles.

Los registros descartados generan un WARNING; NUNCA se lanza excepción
hacia el llamador.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Mapping

from astropulse.domain.entities.candle import Candle
from astropulse.domain.entities.event import AstroEvent
from astropulse.domain.exceptions.domain_errors import DomainError
from astropulse.domain.value_objects.time_bounds import is_supported_ms
from astropulse.shared.logging.logger import get_logger

logger = get_logger("data_sanitizer")


def is_valid_ohlc(open_: float, high: float, low: float, close: float) -> bool:
    # NaN pasa cualquier comparación como False
    if not all(math.isfinite(p) for p in (open_, high, low, close)):
        return False
    if open_ <= 0 or high <= 0 or low <= 0 or close <= 0:
        return False
    if high < max(open_, close):
        return False
    if low > min(open_, close):
        return False
    return True


def validate_candle(candle: Candle) -> bool:
    return (
        candle.time > 0
        and is_supported_ms(candle.time_ms)
        and math.isfinite(candle.volume)
        and candle.volume >= 0
        and is_valid_ohlc(candle.open, candle.high, candle.low, candle.close)
    )


def sanitize_candles(candles: Iterable[Candle]) -> List[Candle]:
    """Velas válidas, ordenadas por time y sin times duplicados."""
    valid: List[Candle] = []
    dropped = 0
    for candle in candles:
        if validate_candle(candle):
            valid.append(candle)
        else:
            dropped += 1
            logger.warning(
                "Vela descartada %s t=%d O=%.5f H=%.5f L=%.5f C=%.5f",
                candle.symbol, candle.time,
                candle.open, candle.high, candle.low, candle.close,
            )

    # sort es estable → el primero recibido gana entre duplicados
    valid.sort(key=lambda c: c.time)
    unique: List[Candle] = []
    last_time = None
    for candle in valid:
        if candle.time != last_time:
            unique.append(candle)
            last_time = candle.time

    if dropped or len(unique) != len(valid):
        logger.debug(
            "Velas saneadas: válidas=%d descartadas=%d duplicadas=%d",
            len(unique), dropped, len(valid) - len(unique),
        )
    return unique


def parse_candles(rows: Iterable[Mapping]) -> List[Candle]:
    """Dicts de cable → velas saneadas. Filas mal formadas se descartan."""
    parsed: List[Candle] = []
    for row in rows:
        try:
            parsed.append(Candle.from_dict(dict(row)))
        except DomainError as exc:
            logger.warning("Vela mal formada descartada: %s", exc.message)
    return sanitize_candles(parsed)


def deduplicate_events(events: Iterable[AstroEvent]) -> List[AstroEvent]:
    """Primera aparición de cada par (timestamp, name), orden preservado."""
    seen: set[tuple[int, str]] = set()
    unique: List[AstroEvent] = []
    for event in events:
        key = (event.timestamp, event.name)
        if key in seen:
            continue
        seen.add(key)
        unique.append(event)
    return unique


def sanitize_events(events: Iterable[AstroEvent]) -> List[AstroEvent]:
    """Eventos ya construidos (p. ej. de un IEventSource) dentro de la ventana soportada, deduplicados."""
    supported: List[AstroEvent] = []
    for event in events:
        if is_supported_ms(event.timestamp):
            supported.append(event)
        else:
            logger.warning("Evento fuera de rango descartado: %s ts=%d", event.name, event.timestamp)
    return deduplicate_events(supported)


def parse_events(rows: Iterable[Mapping]) -> List[AstroEvent]:
    """Dicts de la fuente de eventos → eventos válidos y deduplicados."""
    parsed: List[AstroEvent] = []
    for row in rows:
        try:
            parsed.append(AstroEvent.from_dict(dict(row)))
        except DomainError as exc:
            logger.warning("Evento descartado: %s", exc.message)
    return deduplicate_events(parsed)
