"""
AstroPulse – Candle Synthesizer
=================================
Genera velas placeholder planas hacia el futuro para extender el eje
temporal más allá de los datos reales.

REGLAS:
- open == high == low == close == close de la última vela real
- volume == 0 y kind == SYNTHETIC (discriminador real/sintético)
- La vela i se calcula desde la última vela real con offset i, no
  acumulando sobre la anterior → sin deriva.
- Paso calendárico en UTC: 1M avanza meses reales (31 ene + 1M → 28/29 feb),
  el resto avanza horas/días fijos.

Función pura de (last_candle, timeframe, count). Sin efectos laterales.
"""

from __future__ import annotations

import calendar
from datetime import datetime, timedelta, timezone
from typing import List

from astropulse.domain.entities.candle import Candle
from astropulse.domain.value_objects.timeframe import Timeframe

_FIXED_STEPS: dict[Timeframe, timedelta] = {
    Timeframe.H1: timedelta(hours=1),
    Timeframe.H8: timedelta(hours=8),
    Timeframe.D1: timedelta(days=1),
    Timeframe.W1: timedelta(days=7),
}


def add_months(moment: datetime, months: int) -> datetime:
    """Sumar meses de calendario, recortando el día al fin de mes."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def step_time(moment: datetime, timeframe: "Timeframe | str", offset: int) -> datetime:
    """Instante de la vela `offset` posiciones después de `moment`."""
    tf = Timeframe.parse(timeframe)
    if tf is Timeframe.MN1:
        return add_months(moment, offset)
    return moment + _FIXED_STEPS[tf] * offset


def generate_future_candles(
    last_candle: Candle,
    timeframe: "Timeframe | str",
    count: int,
) -> List[Candle]:
    """`count` velas sintéticas inmediatamente posteriores a `last_candle`."""
    if count <= 0:
        return []

    tf = Timeframe.parse(timeframe)
    base = datetime.fromtimestamp(last_candle.time, tz=timezone.utc)
    price = last_candle.close

    return [
        Candle.synthetic(
            symbol=last_candle.symbol,
            time=int(step_time(base, tf, offset).timestamp()),
            price=price,
        )
        for offset in range(1, count + 1)
    ]
