"""
AstroPulse – Domain Exceptions
================================
Excepciones específicas del dominio del motor de correlación.

Estas excepciones capturan datos de entrada inválidos o parámetros
fuera de contrato, NO errores técnicos.

JERARQUÍA:
    DomainError (base)
    ├── InvalidCandleError
    ├── InvalidEventError
    ├── UnknownTimeframeError
    └── InvalidBinSizeError
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Excepción base para errores de dominio."""

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error": self.code,
            "message": self.message,
        }


class InvalidCandleError(DomainError):
    """Vela con OHLC inválido (precio <= 0, high/low incoherentes)."""

    def __init__(self, message: str, time: int | None = None):
        super().__init__(message, code="INVALID_CANDLE")
        self.time = time


class InvalidEventError(DomainError):
    """Evento astronómico sin timestamp o sin nombre."""

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        super().__init__(message, code="INVALID_EVENT")
        self.field = field
        self.value = value


class UnknownTimeframeError(DomainError):
    """Literal de timeframe fuera del conjunto soportado."""

    def __init__(self, timeframe: str):
        super().__init__(f"Timeframe desconocido: {timeframe!r}", code="UNKNOWN_TIMEFRAME")
        self.timeframe = timeframe


class InvalidBinSizeError(DomainError):
    """Tamaño de bin no positivo."""

    def __init__(self, bin_size: int):
        super().__init__(f"Tamaño de bin inválido: {bin_size}", code="INVALID_BIN_SIZE")
        self.bin_size = bin_size
