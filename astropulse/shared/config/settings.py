"""
AstroPulse – Settings (Pydantic BaseSettings)
=============================================
Configuración centralizada cargada desde variables de entorno / .env.
Se usa pydantic-settings para validación estricta al arranque.

Los servicios de dominio NO leen settings: reciben los valores por
parámetro. Solo el Container y la capa de presentación los consultan.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # ─── Binning de eventos ─────────────────────────────────────────────
    bin_target_px: float = Field(
        default=75.0, description="Ancho objetivo en píxeles de cada bin",
    )
    default_bin_size_ms: int = Field(
        default=3_600_000, description="Tamaño de bin inicial (1h) antes del primer zoom",
    )
    event_marker_height: int = Field(
        default=20, description="Alto en píxeles de un marcador de evento",
    )
    event_marker_spacing: int = Field(
        default=4, description="Separación vertical entre marcadores apilados",
    )

    # ─── Velas sintéticas ───────────────────────────────────────────────
    synthetic_min_candles: int = Field(
        default=50, description="Mínimo global de velas futuras cuando hay eventos",
    )
    synthetic_max_candles: int = Field(
        default=365, description="Máximo global de velas futuras",
    )

    # ─── Caches ─────────────────────────────────────────────────────────
    series_cache_capacity: int = Field(
        default=50, description="Entradas máximas del cache de series combinadas",
    )
    horizon_cache_capacity: int = Field(
        default=100, description="Entradas máximas del cache de horizonte",
    )

    # ─── Timeframes ─────────────────────────────────────────────────────
    default_timeframe: str = Field(
        default="1d", description="Timeframe por defecto del gráfico",
    )

    # ─── Server ─────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8890)
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO", description="Nivel del root logger")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton global – se importa donde se necesite
settings = Settings()
