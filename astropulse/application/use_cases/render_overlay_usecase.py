"""
Render Overlay Use Case.

Modo overlay: una superficie de gráfico por símbolo, todas con el mismo
eje temporal. Orquesta:

  1. Registrar las superficies en el TimeSyncCoordinator (solo si cambió
     el set de símbolos o alguna superficie es un objeto nuevo, para que
     el rango inicial se aplique UNA vez por set).
  2. Pedir velas a la fuente con el límite recomendado del timeframe y
     sanearlas.
  3. Pedir eventos desde la primera vela hasta ahora + horizonte.
  4. Serie combinada + marcadores por superficie.
  5. Rango inicial: toda la serie del master (si no se indica otro).
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from astropulse.application.dto.timeline_dto import CombinedSeriesDTO, OverlayRenderResult
from astropulse.application.ports.candle_source import ICandleSource
from astropulse.application.ports.chart_surface import IChartSurface
from astropulse.application.ports.event_source import IEventSource
from astropulse.application.use_cases.build_series_usecase import BuildCombinedSeriesUseCase
from astropulse.domain.entities.candle import Candle
from astropulse.domain.services.data_sanitizer import sanitize_candles, sanitize_events
from astropulse.domain.services.horizon_resolver import now_millis
from astropulse.domain.services.marker_builder import build_markers, filter_events_by_type
from astropulse.domain.value_objects.timeframe import Timeframe
from astropulse.domain.value_objects.visible_range import VisibleRange
from astropulse.shared.logging.logger import get_logger
from astropulse.state.time_sync import TimeSyncCoordinator

logger = get_logger("render_overlay")


class RenderOverlayUseCase:
    """Caso de uso: pintar N símbolos sincronizados."""

    def __init__(
        self,
        candle_source: ICandleSource,
        event_source: IEventSource,
        build_series: BuildCombinedSeriesUseCase,
        time_sync: TimeSyncCoordinator,
    ):
        self._candle_source = candle_source
        self._event_source = event_source
        self._build_series = build_series
        self._time_sync = time_sync

    def execute(
        self,
        surfaces: Mapping[str, IChartSurface],
        timeframe: "Timeframe | str",
        initial_range: Optional[VisibleRange] = None,
        filters: Optional[Dict[str, bool]] = None,
        now_ms: Optional[int] = None,
    ) -> OverlayRenderResult:
        """
        Pinta cada superficie y deja el set sincronizado.

        Args:
            surfaces: símbolo → superficie; el primero es el master
            timeframe: timeframe común a todas las superficies
            initial_range: rango visible inicial (segundos); por defecto
                la serie completa del master
            filters: toggles de tipos de evento para los marcadores
            now_ms: "ahora" en ms (por defecto reloj del sistema)
        """
        tf = Timeframe.parse(timeframe)
        if now_ms is None:
            now_ms = now_millis()
        result = OverlayRenderResult(timeframe=tf.value)

        if not self._time_sync.is_attached_to(surfaces):
            self._time_sync.attach(surfaces)
        result.master = self._time_sync.master_symbol

        histories: Dict[str, List[Candle]] = {}
        for symbol in surfaces:
            candles = sanitize_candles(
                self._candle_source.get_candles(symbol, tf, tf.spec.recommended_limit)
            )
            if not candles:
                logger.warning("Sin velas para %s %s, superficie omitida", symbol, tf.value)
                result.skipped.append(symbol)
                continue
            histories[symbol] = candles

        if not histories:
            return result

        start_ms = min(c[0].time_ms for c in histories.values())
        events = sanitize_events(
            self._event_source.get_events(start_ms, now_ms + tf.spec.horizon_ms)
        )
        markers = build_markers(filter_events_by_type(events, filters))
        result.event_count = len(events)
        result.marker_count = len(markers)

        for symbol, candles in histories.items():
            combined = self._build_series.execute(symbol, candles, tf, events, now_ms=now_ms)
            surface = surfaces[symbol]
            surface.set_series(combined)
            surface.set_markers(markers)
            result.series[symbol] = CombinedSeriesDTO(symbol=symbol, timeframe=tf.value, candles=combined)

        if initial_range is None:
            master_series = result.series.get(result.master or "")
            if master_series is None:
                master_series = next(iter(result.series.values()))
            initial_range = VisibleRange(
                from_=master_series.candles[0].time,
                to=master_series.candles[-1].time,
            )
        result.initial_range = initial_range
        result.initial_range_applied = self._time_sync.apply_initial_range(initial_range)

        logger.info(
            "Overlay %s: %d superficies, %d eventos, master=%s",
            tf.value, len(result.series), len(events), result.master,
        )
        return result
