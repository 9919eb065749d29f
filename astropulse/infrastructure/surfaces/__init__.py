"""Chart surfaces - In-memory IChartSurface implementations."""

from astropulse.infrastructure.surfaces.headless_surface import HeadlessChartSurface

__all__ = ["HeadlessChartSurface"]
