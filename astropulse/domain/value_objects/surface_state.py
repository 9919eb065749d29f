"""
AstroPulse – Domain Value Object: SurfaceState
================================================
Estado de sincronización de una superficie de gráfico en modo overlay.

TRANSICIONES:
    IDLE ──(master propaga rango)──▸ PROGRAMMATIC_UPDATE
    PROGRAMMATIC_UPDATE ──(eco del widget)──▸ IDLE
    * ──(superficie retirada)──▸ DETACHED   (terminal)
"""

from __future__ import annotations

from enum import Enum


class SurfaceState(str, Enum):
    IDLE = "idle"
    PROGRAMMATIC_UPDATE = "programmatic_update"
    DETACHED = "detached"
