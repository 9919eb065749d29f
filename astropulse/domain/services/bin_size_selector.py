"""
AstroPulse – Adaptive Bin-Size Selector
=========================================
Elige una granularidad legible para que cada bin ocupe ~75 px en
pantalla, sea cual sea el zoom.

    ideal_ms = target_px / (chart_width_px / time_span_ms)

Se ajusta a la escalera fija BIN_SIZE_LADDER por diferencia absoluta.
Empates: gana el PRIMER candidato mínimo (la granularidad más fina).

Se ejecuta en cada cambio de rango visible; es O(1) porque la escalera
tiene tamaño fijo, así que no necesita throttling propio.
"""

from __future__ import annotations

from typing import Optional, Sequence

MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS

BIN_SIZE_LADDER: tuple[int, ...] = (
    MINUTE_MS,
    5 * MINUTE_MS,
    15 * MINUTE_MS,
    30 * MINUTE_MS,
    HOUR_MS,
    4 * HOUR_MS,
    DAY_MS,
    7 * DAY_MS,
)

TARGET_PX_PER_BIN = 75.0


def ideal_bin_size(time_span_ms: float, chart_width_px: float,
                   target_px: float = TARGET_PX_PER_BIN) -> Optional[float]:
    """Tamaño ideal sin ajustar, o None si el rango/ancho es degenerado."""
    if time_span_ms <= 0 or chart_width_px <= 0:
        return None
    pixels_per_ms = chart_width_px / time_span_ms
    return target_px / pixels_per_ms


def snap_to_ladder(value: float, ladder: Sequence[int] = BIN_SIZE_LADDER) -> int:
    """Peldaño más cercano; en empate se queda con el primero."""
    best = ladder[0]
    best_diff = abs(value - best)
    for candidate in ladder[1:]:
        diff = abs(value - candidate)
        if diff < best_diff:
            best, best_diff = candidate, diff
    return best


def select_bin_size(
    from_ms: float,
    to_ms: float,
    chart_width_px: float,
    target_px: float = TARGET_PX_PER_BIN,
    ladder: Sequence[int] = BIN_SIZE_LADDER,
) -> Optional[int]:
    """
    Granularidad de bin para un rango visible [from_ms, to_ms].

    Returns:
        Un valor de `ladder`, o None si el rango es vacío/invertido o el
        ancho no es positivo (el llamador conserva el tamaño actual).
    """
    ideal = ideal_bin_size(to_ms - from_ms, chart_width_px, target_px)
    if ideal is None:
        return None
    return snap_to_ladder(ideal, ladder)
