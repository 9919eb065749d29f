"""Domain exceptions."""
from astropulse.domain.exceptions.domain_errors import (
    DomainError,
    InvalidCandleError,
    InvalidEventError,
    UnknownTimeframeError,
    InvalidBinSizeError,
)

__all__ = [
    "DomainError",
    "InvalidCandleError",
    "InvalidEventError",
    "UnknownTimeframeError",
    "InvalidBinSizeError",
]
