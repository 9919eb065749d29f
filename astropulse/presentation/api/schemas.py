"""
AstroPulse – API Schemas (Pydantic)
=====================================
Schemas de validación para los requests de la API REST.

Un request con forma incorrecta es un 422 de FastAPI. Las filas con
forma correcta pero contenido inválido (OHLC incoherente, tipo de evento
desconocido) se descartan en el saneamiento con un warning.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from astropulse.domain.value_objects.visible_range import VisibleRange
from astropulse.shared.config.settings import settings


class CandleSchema(BaseModel):
    time: int = Field(description="Apertura de la vela (segundos UNIX)")
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


class EventSchema(BaseModel):
    timestamp: int = Field(description="Instante del evento (ms UNIX)")
    name: str
    type: str = "planetary_aspect"
    description: str = ""
    significance: str = "medium"


class VisibleRangeSchema(BaseModel):
    """Rango visible en segundos; `from` en el JSON."""

    model_config = ConfigDict(populate_by_name=True)

    from_: float = Field(alias="from")
    to: float

    def to_domain(self) -> VisibleRange:
        return VisibleRange(from_=self.from_, to=self.to)


class SeriesRequest(BaseModel):
    symbol: str
    timeframe: str = settings.default_timeframe
    candles: List[CandleSchema]
    events: Optional[List[EventSchema]] = Field(
        default=None,
        description="Si se omite, se piden a la fuente entre la última vela y el horizonte",
    )
    now_ms: Optional[int] = Field(default=None, description="'Ahora' en ms (tests/replays)")


class BinsRequest(BaseModel):
    events: List[EventSchema]
    visible_range: VisibleRangeSchema
    chart_width_px: float = Field(description="Ancho del gráfico en píxeles")
    timeline_height: float = Field(default=120.0, description="Alto del timeline en píxeles")
    only_visible: bool = Field(default=True, description="Solo bins que intersectan el rango")


class MarkersRequest(BaseModel):
    events: List[EventSchema]
    filters: Optional[Dict[str, bool]] = Field(
        default=None, description="Toggles por grupo: lunar, solar, planetary, meteor",
    )
    timeframe: Optional[str] = Field(
        default=None, description="Si se indica, agrupa los eventos por vela del timeframe",
    )
    at_time: Optional[int] = Field(
        default=None, description="Tooltip: eventos de la vela que contiene este instante (s)",
    )
