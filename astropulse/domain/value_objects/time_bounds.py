"""
AstroPulse – Domain Value Object: TimeBounds
==============================================
Ventana temporal que el motor acepta en sus entradas (velas y eventos).

Fuera de [1900-01-01, 2200-12-31] los timestamps no pueden convertirse a
fecha de calendario de forma fiable (fingerprints ISO, buckets, pasos
mensuales), así que los registros se descartan al sanear.
"""

from __future__ import annotations

from datetime import datetime, timezone

MIN_TIMESTAMP_MS = int(datetime(1900, 1, 1, tzinfo=timezone.utc).timestamp() * 1000)
MAX_TIMESTAMP_MS = int(datetime(2200, 12, 31, 23, 59, 59, tzinfo=timezone.utc).timestamp() * 1000)


def is_supported_ms(timestamp_ms: int) -> bool:
    return MIN_TIMESTAMP_MS <= timestamp_ms <= MAX_TIMESTAMP_MS
