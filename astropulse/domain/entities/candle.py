"""
AstroPulse – Domain Entity: Candle
====================================
Vela OHLCV inmutable, real (del exchange) o sintética (placeholder futuro).

Decisiones de diseño:
- frozen=True → inmutable; las series combinadas se cachean y comparten,
  nadie puede alterar una vela ya entregada.
- `kind` es la variante explícita REAL | SYNTHETIC. NO forma parte del
  formato de cable (to_dict): el widget sigue distinguiendo por volume == 0.
- Una vela sintética SIEMPRE tiene volume == 0 y open == high == low == close.
- `time` va en segundos (convención de exchange / widget).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from astropulse.domain.exceptions.domain_errors import InvalidCandleError
from astropulse.domain.value_objects.time_bounds import is_supported_ms


class CandleKind(str, Enum):
    REAL = "real"
    SYNTHETIC = "synthetic"


@dataclass(frozen=True, slots=True)
class Candle:
    """Vela OHLCV con timestamp de apertura en segundos."""

    symbol: str          # e.g. "BTCUSDT"
    time: int            # epoch de apertura (segundos)
    open: float
    high: float
    low: float
    close: float
    volume: float
    kind: CandleKind = CandleKind.REAL

    @property
    def is_synthetic(self) -> bool:
        return self.kind is CandleKind.SYNTHETIC

    @property
    def time_ms(self) -> int:
        return self.time * 1000

    @property
    def opened_at(self) -> datetime:
        return datetime.fromtimestamp(self.time, tz=timezone.utc)

    @classmethod
    def synthetic(cls, symbol: str, time: int, price: float) -> "Candle":
        """Vela plana de volumen cero usada para extender el eje temporal."""
        return cls(
            symbol=symbol,
            time=time,
            open=price,
            high=price,
            low=price,
            close=price,
            volume=0.0,
            kind=CandleKind.SYNTHETIC,
        )

    def to_dict(self) -> dict:
        """Serialización para el widget / API (sin `kind`)."""
        return {
            "symbol": self.symbol,
            "time": self.time,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Candle":
        """
        Construir desde formato de cable. volume == 0 → SYNTHETIC.

        Lanza InvalidCandleError si falta un campo, no es numérico o el
        time cae fuera de la ventana soportada.
        """
        try:
            volume = float(data.get("volume", 0.0))
            candle = cls(
                symbol=str(data.get("symbol", "")),
                time=int(data["time"]),
                open=float(data["open"]),
                high=float(data["high"]),
                low=float(data["low"]),
                close=float(data["close"]),
                volume=volume,
                kind=CandleKind.SYNTHETIC if volume == 0 else CandleKind.REAL,
            )
        except (KeyError, TypeError, ValueError, OverflowError) as exc:
            raise InvalidCandleError(f"Vela mal formada: {exc}", time=data.get("time")) from exc
        if not is_supported_ms(candle.time_ms):
            raise InvalidCandleError("Time fuera del rango soportado", time=candle.time)
        return candle
