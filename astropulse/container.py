"""
AstroPulse – Contenedor de dependencias
=======================================
Punto único de ensamblado del motor de correlación. Construye de forma
perezosa los objetos compartidos (caches, binner, fuente de eventos,
coordinador de sincronización) y fabrica los casos de uso sobre ellos.

REGLA DE CAPAS:
  Solo este módulo y main.py conocen las clases concretas de
  infrastructure/. El motor no guarda estado de módulo: todo lo compartido
  cuelga de una instancia de Container.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

# Domain
from astropulse.domain.services.event_binner import EventBinner

# Application Ports
from astropulse.application.ports.candle_source import ICandleSource
from astropulse.application.ports.event_source import IEventSource

# State
from astropulse.state.correlation_cache import CorrelationCache
from astropulse.state.time_sync import TimeSyncCoordinator

# Shared
from astropulse.shared.config.settings import Settings


@dataclass
class Container:
    """
    Contenedor de Inyección de Dependencias.

    Las propiedades crean cada instancia la primera vez que se piden y la
    reutilizan después. Los casos de uso se fabrican en cada llamada.
    """

    # Configuración
    settings: Settings = field(default_factory=Settings)

    # Estado compartido
    _correlation_cache: Optional[CorrelationCache] = None
    _event_binner: Optional[EventBinner] = None
    _time_sync: Optional[TimeSyncCoordinator] = None

    # Ports (implementaciones concretas)
    _event_source: Optional[IEventSource] = None
    _candle_source: Optional[ICandleSource] = None

    # ==================== State ====================

    @property
    def correlation_cache(self) -> CorrelationCache:
        """Caches de horizonte y serie combinada (una instancia por container)."""
        if self._correlation_cache is None:
            self._correlation_cache = CorrelationCache(
                horizon_capacity=self.settings.horizon_cache_capacity,
                series_capacity=self.settings.series_cache_capacity,
            )
        return self._correlation_cache

    @property
    def event_binner(self) -> EventBinner:
        if self._event_binner is None:
            self._event_binner = EventBinner(
                bin_size=self.settings.default_bin_size_ms,
                event_height=self.settings.event_marker_height,
                spacing=self.settings.event_marker_spacing,
            )
        return self._event_binner

    @property
    def time_sync(self) -> TimeSyncCoordinator:
        if self._time_sync is None:
            self._time_sync = TimeSyncCoordinator()
        return self._time_sync

    # ==================== Ports ====================

    @property
    def event_source(self) -> IEventSource:
        """Fuente de eventos astronómicos."""
        if self._event_source is None:
            from astropulse.infrastructure.external.approximate_event_source import (
                ApproximateEventSource,
            )
            self._event_source = ApproximateEventSource()
        return self._event_source

    @property
    def candle_source(self) -> Optional[ICandleSource]:
        """
        Fuente de velas. El fetch de exchanges queda fuera del motor:
        debe inyectarse con override('candle_source', ...).
        """
        return self._candle_source

    # ==================== Use Cases ====================

    def get_build_series_usecase(self):
        """Factory para BuildCombinedSeriesUseCase (comparte el cache)."""
        from astropulse.application.use_cases.build_series_usecase import (
            BuildCombinedSeriesUseCase,
        )
        return BuildCombinedSeriesUseCase(
            cache=self.correlation_cache,
            min_candles=self.settings.synthetic_min_candles,
            max_candles=self.settings.synthetic_max_candles,
        )

    def get_layout_bins_usecase(self):
        """Factory para LayoutEventBinsUseCase (comparte el binner)."""
        from astropulse.application.use_cases.layout_bins_usecase import (
            LayoutEventBinsUseCase,
        )
        return LayoutEventBinsUseCase(
            binner=self.event_binner,
            target_px=self.settings.bin_target_px,
        )

    def get_render_overlay_usecase(self, candle_source: Optional[ICandleSource] = None):
        """
        Factory para RenderOverlayUseCase.

        Raises:
            ValueError: si no hay fuente de velas inyectada ni pasada
        """
        from astropulse.application.use_cases.render_overlay_usecase import (
            RenderOverlayUseCase,
        )
        source = candle_source or self.candle_source
        if source is None:
            raise ValueError("No hay ICandleSource configurado para el modo overlay")
        return RenderOverlayUseCase(
            candle_source=source,
            event_source=self.event_source,
            build_series=self.get_build_series_usecase(),
            time_sync=self.time_sync,
        )

    # ==================== Lifecycle ====================

    def reset(self) -> None:
        """Suelta las superficies sincronizadas y olvida todas las instancias perezosas."""
        if self._time_sync is not None:
            self._time_sync.detach_all()
        self._correlation_cache = None
        self._event_binner = None
        self._time_sync = None
        self._event_source = None
        self._candle_source = None

    def override(self, name: str, instance: Any) -> None:
        """
        Sustituye una dependencia por otra instancia (fakes en tests).

        Args:
            name: nombre público de la dependencia, p. ej. 'event_source'
            instance: objeto que ocupará su lugar
        """
        slot = f"_{name}"
        if not hasattr(self, slot):
            raise ValueError(f"Dependencia desconocida: {name}")
        setattr(self, slot, instance)


# ═══════════════════════════════════════════════════════════════════════
#  Instancia global del proceso
# ═══════════════════════════════════════════════════════════════════════

_container: Optional[Container] = None


def get_container() -> Container:
    """Devuelve el contenedor del proceso, creándolo con defaults si hace falta."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def init_container(settings: Optional[Settings] = None) -> Container:
    """Reemplaza el contenedor del proceso por uno nuevo con `settings`."""
    global _container
    _container = Container(settings=settings or Settings())
    return _container


def reset_container() -> None:
    """Libera superficies y caches del contenedor actual y lo descarta."""
    global _container
    if _container is not None:
        _container.reset()
        _container = None


def create_test_container(settings: Optional[Settings] = None, **overrides) -> Container:
    """
    Contenedor aislado (no toca el global) con dependencias sustituidas.

    Ejemplo:
        container = create_test_container(event_source=FakeEventSource())
    """
    container = Container(settings=settings or Settings())
    for name, instance in overrides.items():
        container.override(name, instance)
    return container
