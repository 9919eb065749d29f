"""Application use cases - Timeline correlation orchestration."""

from astropulse.application.use_cases.build_series_usecase import BuildCombinedSeriesUseCase
from astropulse.application.use_cases.layout_bins_usecase import LayoutEventBinsUseCase
from astropulse.application.use_cases.render_overlay_usecase import RenderOverlayUseCase

__all__ = [
    "BuildCombinedSeriesUseCase",
    "LayoutEventBinsUseCase",
    "RenderOverlayUseCase",
]
