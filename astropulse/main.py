"""
AstroPulse – Main Application Entry Point
============================================
Expone el motor de correlación (eventos astronómicos × velas) por HTTP.

ARQUITECTURA DE ARRANQUE:
  1. Configurar logging
  2. Crear el Container (caches, binner, fuente de eventos, sync)
  3. FastAPI lifespan:
     a. Banner de configuración
     b. Inyectar use cases y componentes en el router
     c. Shutdown: desregistrar superficies y vaciar caches

FLUJO DE DATOS:
  velas + eventos → Future-Horizon Resolver → Candle Synthesizer
       → CorrelationCache → serie combinada
  eventos + rango visible → Bin-Size Selector → EventBinner → bins apilados

  uvicorn astropulse.main:app --reload --host 0.0.0.0 --port 8890
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from astropulse import __version__
from astropulse.container import init_container
from astropulse.presentation.api.routes import init_routes, router
from astropulse.shared.config.settings import settings
from astropulse.shared.logging.logger import get_logger, setup_logging

# ─── Logging ────────────────────────────────────────────────────────────
setup_logging(settings.log_level)
logger = get_logger("main")

# ─── Contenedor de Dependencias ─────────────────────────────────────────
container = init_container(settings)


# ─── FastAPI Lifespan ───────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle de la aplicación."""
    logger.info("=" * 60)
    logger.info("  AstroPulse - Timeline Correlation Engine v%s", __version__)
    logger.info("  Timeframe por defecto: %s", settings.default_timeframe)
    logger.info("  Bins: objetivo %.0f px, inicial %d ms",
                settings.bin_target_px, settings.default_bin_size_ms)
    logger.info("  Velas sintéticas: [%d, %d]",
                settings.synthetic_min_candles, settings.synthetic_max_candles)
    logger.info("  Caches FIFO: series=%d horizon=%d",
                settings.series_cache_capacity, settings.horizon_cache_capacity)
    logger.info("=" * 60)

    init_routes(
        build_series=container.get_build_series_usecase(),
        layout_bins=container.get_layout_bins_usecase(),
        event_source=container.event_source,
        correlation_cache=container.correlation_cache,
    )
    logger.info("✓ Todos los componentes iniciados correctamente")

    yield  # ← La app está corriendo aquí

    # ── SHUTDOWN ──
    container.time_sync.detach_all()
    container.correlation_cache.clear()
    logger.info("✓ Shutdown completo")


# ─── FastAPI App ────────────────────────────────────────────────────────

app = FastAPI(
    title="AstroPulse - Timeline Correlation Engine",
    description="Correlación visual de eventos astronómicos con velas de precio",
    version=__version__,
    lifespan=lifespan,
)

# CORS para frontend local
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("astropulse.main:app", host=settings.host, port=settings.port, reload=settings.debug)
