"""
AstroPulse – Domain Value Object: Timeframe
=============================================
Conjunto cerrado de timeframes del gráfico y sus parámetros.

Cada timeframe define:
- interval_ms:       espaciado nativo entre velas (1M es aproximado: 30 días;
                     el sintetizador avanza por meses de calendario reales)
- horizon_days:      cuánto hacia el futuro (desde "ahora") pueden
                     extenderse velas sintéticas y eventos
- min_buffer:        velas sintéticas cuando no hay eventos futuros
- candles_per_day:   densidad usada para convertir días en velas
- recommended_limit: velas históricas a pedir a la fuente de datos
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from astropulse.domain.exceptions.domain_errors import UnknownTimeframeError

HOUR_MS = 60 * 60 * 1000
DAY_MS = 24 * HOUR_MS


@dataclass(frozen=True, slots=True)
class TimeframeSpec:
    """Parámetros inmutables de un timeframe."""

    interval_ms: int
    horizon_days: int
    min_buffer: int
    candles_per_day: float
    recommended_limit: int

    @property
    def interval_seconds(self) -> int:
        return self.interval_ms // 1000

    @property
    def horizon_ms(self) -> int:
        return self.horizon_days * DAY_MS


class Timeframe(str, Enum):
    """Timeframes soportados. "1M" (mes) y "1m" (minuto) NO son equivalentes."""

    H1 = "1h"
    H8 = "8h"
    D1 = "1d"
    W1 = "1w"
    MN1 = "1M"

    @classmethod
    def parse(cls, value: "str | Timeframe") -> "Timeframe":
        """Convertir un literal a Timeframe o lanzar UnknownTimeframeError."""
        if isinstance(value, Timeframe):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownTimeframeError(str(value)) from None

    @property
    def spec(self) -> TimeframeSpec:
        return TIMEFRAME_SPECS[self]


TIMEFRAME_SPECS: dict[Timeframe, TimeframeSpec] = {
    Timeframe.H1: TimeframeSpec(HOUR_MS, 7, 50, 24, 3000),
    Timeframe.H8: TimeframeSpec(8 * HOUR_MS, 7, 50, 3, 1000),
    Timeframe.D1: TimeframeSpec(DAY_MS, 14, 50, 1, 500),
    Timeframe.W1: TimeframeSpec(7 * DAY_MS, 60, 30, 1 / 7, 200),
    Timeframe.MN1: TimeframeSpec(30 * DAY_MS, 365, 12, 1 / 30, 100),
}
