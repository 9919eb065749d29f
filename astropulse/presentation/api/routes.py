"""
AstroPulse – API Routes (FastAPI)
===================================
Endpoints REST del motor de correlación.

Endpoints disponibles:
  GET    /api/health            → health check
  GET    /api/timeframes        → tabla de timeframes soportados
  GET    /api/events            → eventos aproximados en [start, end] (ms)
  POST   /api/timeline/series   → serie histórica + sintética
  POST   /api/timeline/bins     → tamaño de bin + bins posicionados
  POST   /api/timeline/markers  → marcadores del widget (con filtros)
  GET    /api/cache/stats       → estadísticas de los caches
  DELETE /api/cache             → vaciar caches

ERRORES:
  DomainError → 400 con {"error": code, "message": ...}
  Forma de request inválida → 422 (pydantic)
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from astropulse.application.dto.timeline_dto import CombinedSeriesDTO
from astropulse.domain.exceptions.domain_errors import DomainError
from astropulse.domain.services.data_sanitizer import parse_candles, parse_events
from astropulse.domain.services.horizon_resolver import now_millis
from astropulse.domain.services.marker_builder import (
    build_markers,
    filter_events_by_type,
    find_events_at_time,
    group_events_by_time,
)
from astropulse.domain.value_objects.timeframe import TIMEFRAME_SPECS, Timeframe
from astropulse.presentation.api.schemas import BinsRequest, MarkersRequest, SeriesRequest
from astropulse.shared.config.settings import settings
from astropulse.shared.logging.logger import get_logger

logger = get_logger("api.routes")

router = APIRouter()

# Referencias a componentes inyectados desde main.py
_build_series = None
_layout_bins = None
_event_source = None
_correlation_cache = None


def init_routes(build_series, layout_bins, event_source, correlation_cache) -> None:
    """Inyectar dependencias desde main.py al arrancar."""
    global _build_series, _layout_bins, _event_source, _correlation_cache
    _build_series = build_series
    _layout_bins = layout_bins
    _event_source = event_source
    _correlation_cache = correlation_cache


def _require(component, name: str):
    if component is None:
        raise HTTPException(status_code=503, detail=f"{name} no inicializado")
    return component


def _bad_request(exc: DomainError) -> HTTPException:
    logger.info("Request rechazado: %s (%s)", exc.message, exc.code)
    return HTTPException(status_code=400, detail=exc.to_dict())


# ─── Estado ────────────────────────────────────────────────────────────

@router.get("/api/health")
async def health_check() -> dict:
    """Health check para monitoreo."""
    return {"status": "ok", "service": "astropulse"}


@router.get("/api/timeframes")
async def list_timeframes() -> dict:
    """Timeframes soportados con su horizonte y buffers."""
    return {
        "default": settings.default_timeframe,
        "timeframes": [
            {
                "timeframe": tf.value,
                "interval_ms": spec.interval_ms,
                "horizon_days": spec.horizon_days,
                "min_buffer": spec.min_buffer,
                "candles_per_day": spec.candles_per_day,
                "recommended_limit": spec.recommended_limit,
            }
            for tf, spec in TIMEFRAME_SPECS.items()
        ],
    }


# ─── Eventos ───────────────────────────────────────────────────────────

@router.get("/api/events")
async def get_events(
    start: int = Query(description="Inicio del intervalo (ms UNIX)"),
    end: int = Query(description="Fin del intervalo (ms UNIX)"),
) -> dict:
    """Eventos astronómicos aproximados en [start, end]."""
    source = _require(_event_source, "event_source")
    events = source.get_events(start, end) if start <= end else []
    return {
        "start": start,
        "end": end,
        "count": len(events),
        "events": [e.to_dict() for e in events],
    }


# ─── Timeline ──────────────────────────────────────────────────────────

@router.post("/api/timeline/series")
async def build_series(body: SeriesRequest) -> dict:
    """Serie combinada: velas reales + sintéticas hasta el último evento relevante."""
    usecase = _require(_build_series, "build_series")
    try:
        tf = Timeframe.parse(body.timeframe)
    except DomainError as exc:
        raise _bad_request(exc) from exc

    historical = parse_candles(
        {**candle.model_dump(), "symbol": body.symbol} for candle in body.candles
    )

    if body.events is not None:
        events = parse_events(e.model_dump() for e in body.events)
    elif historical:
        now_ms = body.now_ms if body.now_ms is not None else now_millis()
        source = _require(_event_source, "event_source")
        events = source.get_events(historical[-1].time_ms, now_ms + tf.spec.horizon_ms)
    else:
        events = []

    combined = usecase.execute(body.symbol, historical, tf, events, now_ms=body.now_ms)
    result = CombinedSeriesDTO(symbol=body.symbol, timeframe=tf.value, candles=combined).to_dict()
    result["event_count"] = len(events)
    return result


@router.post("/api/timeline/bins")
async def layout_bins(body: BinsRequest) -> dict:
    """Elegir granularidad para el rango visible y devolver bins apilados."""
    usecase = _require(_layout_bins, "layout_bins")
    visible_range = body.visible_range.to_domain()

    usecase.load_events(parse_events(e.model_dump() for e in body.events))
    usecase.on_visible_range_change(visible_range, body.chart_width_px)
    layout = usecase.layout(
        body.timeline_height,
        visible_range=visible_range if body.only_visible else None,
    )

    result = layout.to_dict()
    result["visible_range"] = visible_range.to_dict()
    return result


@router.post("/api/timeline/markers")
async def build_chart_markers(body: MarkersRequest) -> dict:
    """Marcadores del widget, con toggles de tipo y agrupación opcional."""
    events = filter_events_by_type(
        parse_events(e.model_dump() for e in body.events),
        body.filters,
    )
    markers = build_markers(events)
    result = {"count": len(markers), "markers": [m.to_dict() for m in markers]}

    if body.timeframe is not None:
        try:
            grouped = group_events_by_time(events, body.timeframe)
            at_time = (
                find_events_at_time(events, body.at_time, body.timeframe)
                if body.at_time is not None else None
            )
        except DomainError as exc:
            raise _bad_request(exc) from exc
        result["groups"] = {
            str(bucket): [e.to_dict() for e in sorted(group, key=lambda e: e.name)]
            for bucket, group in sorted(grouped.items())
        }
        if at_time is not None:
            result["at_time"] = [e.to_dict() for e in at_time]
    return result


# ─── Cache ─────────────────────────────────────────────────────────────

@router.get("/api/cache/stats")
async def cache_stats() -> dict:
    """Tamaño, aciertos y evicciones de los caches."""
    return _require(_correlation_cache, "correlation_cache").stats


@router.delete("/api/cache")
async def clear_cache() -> dict:
    """Vaciar los caches (cambio de símbolo o de lógica)."""
    _require(_correlation_cache, "correlation_cache").clear()
    return {"status": "cleared"}
