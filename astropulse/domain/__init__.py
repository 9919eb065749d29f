"""
AstroPulse – Domain Layer
===========================
Núcleo del motor de correlación. Sin dependencias de frameworks.

Este módulo contiene:
- entities/: Candle, AstroEvent, EventBin
- value_objects/: Timeframe, VisibleRange, SurfaceState
- services/: binning, selector de bin, horizonte, sintetizador, marcadores
- exceptions/: Excepciones de dominio

REGLA DE DEPENDENCIA:
Este módulo NO puede importar de:
- infrastructure/
- presentation/
- application/
- Frameworks externos (FastAPI, pydantic, etc.)
"""

from astropulse.domain.entities.candle import Candle, CandleKind
from astropulse.domain.entities.event import AstroEvent, EventType, Significance
from astropulse.domain.entities.event_bin import EventBin, PositionedEvent
from astropulse.domain.value_objects.timeframe import Timeframe
from astropulse.domain.value_objects.visible_range import VisibleRange
from astropulse.domain.value_objects.surface_state import SurfaceState

__all__ = [
    "Candle",
    "CandleKind",
    "AstroEvent",
    "EventType",
    "Significance",
    "EventBin",
    "PositionedEvent",
    "Timeframe",
    "VisibleRange",
    "SurfaceState",
]
