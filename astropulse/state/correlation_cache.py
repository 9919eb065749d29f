"""
AstroPulse – Correlation Cache
================================
Memoiza el cálculo de horizonte y la serie combinada histórica+sintética
para no recalcular en cada re-render del frontend.

DOS CACHES INDEPENDIENTES:
  horizon: (last_candle_iso, timeframe, event_count) → nº de velas futuras
  series:  (symbol, last_candle_iso, timeframe, historical_len, fingerprint)
           → tupla de velas combinadas

FINGERPRINT:
  Concatenación "name-ISO" de los eventos EN ORDEN. Dos listas con los
  mismos eventos en distinto orden son claves distintas: es una
  limitación aceptada (fallo de cache redundante, nunca dato incorrecto).

EVICCIÓN:
  FIFO por orden de inserción (dict de Python conserva el orden). Al
  superar la capacidad se descartan las entradas más antiguas hasta volver
  a la capacidad. NO es LRU: un acierto no renueva la entrada.

OWNERSHIP:
  No hay estado de módulo. El Container crea UNA instancia y la pasa a los
  use cases; los tests crean la suya. clear() al cambiar de símbolo o de
  lógica evita servir velas sintéticas de otro instrumento.

THREADING:
  Se muta solo desde un hilo (el del motor). Si se portara a varios hilos,
  cada FifoCache necesitaría un único lock.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Generic, Hashable, Iterable, Optional, Tuple, TypeVar

from astropulse.domain.entities.candle import Candle
from astropulse.domain.entities.event import AstroEvent
from astropulse.domain.value_objects.timeframe import Timeframe
from astropulse.shared.logging.logger import get_logger

logger = get_logger("correlation_cache")

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

HORIZON_CACHE_CAPACITY = 100
SERIES_CACHE_CAPACITY = 50

HorizonKey = Tuple[str, str, int]
SeriesKey = Tuple[str, str, str, int, str]


class FifoCache(Generic[K, V]):
    """Mapa acotado con evicción por orden de inserción."""

    def __init__(self, name: str, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity debe ser > 0 (recibido {capacity})")
        self._name = name
        self._capacity = capacity
        self._store: Dict[K, V] = {}
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def get(self, key: K) -> Optional[V]:
        value = self._store.get(key)
        if value is None:
            self._misses += 1
        else:
            self._hits += 1
        return value

    def put(self, key: K, value: V) -> None:
        self._store[key] = value
        overflow = len(self._store) - self._capacity
        if overflow > 0:
            for old_key in list(self._store)[:overflow]:
                del self._store[old_key]
            self._evictions += overflow
            logger.debug(
                "Cache '%s': %d entradas evictadas (capacidad=%d)",
                self._name, overflow, self._capacity,
            )

    def keys(self) -> list:
        """Claves en orden de inserción (la primera es la próxima a salir)."""
        return list(self._store)

    def clear(self) -> None:
        self._store.clear()

    @property
    def stats(self) -> dict:
        return {
            "name": self._name,
            "size": len(self._store),
            "capacity": self._capacity,
            "hits": self._hits,
            "misses": self._misses,
            "evictions": self._evictions,
        }


def iso_from_seconds(time_seconds: int) -> str:
    dt = datetime.fromtimestamp(time_seconds, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def event_fingerprint(events: Iterable[AstroEvent]) -> str:
    """'name-ISO|name-ISO|...' sensible al orden."""
    return "|".join(f"{e.name}-{e.iso_date}" for e in events)


class CorrelationCache:
    """
    Los dos caches del motor de correlación.

    Uso:
        cache = CorrelationCache()
        key = cache.series_key(symbol, last_candle, tf, len(history), events)
        combined = cache.series.get(key)
    """

    def __init__(
        self,
        horizon_capacity: int = HORIZON_CACHE_CAPACITY,
        series_capacity: int = SERIES_CACHE_CAPACITY,
    ) -> None:
        self.horizon: FifoCache[HorizonKey, int] = FifoCache("horizon", horizon_capacity)
        self.series: FifoCache[SeriesKey, Tuple[Candle, ...]] = FifoCache("series", series_capacity)
        logger.info(
            "CorrelationCache inicializado (horizon=%d, series=%d)",
            horizon_capacity, series_capacity,
        )

    @staticmethod
    def horizon_key(last_candle: Candle, timeframe: Timeframe, event_count: int) -> HorizonKey:
        return (iso_from_seconds(last_candle.time), timeframe.value, event_count)

    @staticmethod
    def series_key(
        symbol: str,
        last_candle: Candle,
        timeframe: Timeframe,
        historical_length: int,
        events: Iterable[AstroEvent],
    ) -> SeriesKey:
        return (
            symbol,
            iso_from_seconds(last_candle.time),
            timeframe.value,
            historical_length,
            event_fingerprint(events),
        )

    def clear(self) -> None:
        """Vaciar ambos caches (cambio de símbolo o de lógica)."""
        self.horizon.clear()
        self.series.clear()
        logger.info("CorrelationCache vaciado")

    @property
    def stats(self) -> dict:
        return {"horizon": self.horizon.stats, "series": self.series.stats}
