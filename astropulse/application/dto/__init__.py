"""Application DTOs - Data Transfer Objects."""

from astropulse.application.dto.timeline_dto import (
    CombinedSeriesDTO,
    BinLayoutDTO,
    TimelineLayoutDTO,
    OverlayRenderResult,
)

__all__ = [
    "CombinedSeriesDTO",
    "BinLayoutDTO",
    "TimelineLayoutDTO",
    "OverlayRenderResult",
]
