"""
AstroPulse – Timeline Correlation Engine
==========================================
Superpone eventos astronómicos (fases lunares, eclipses, aspectos
planetarios, lluvias de meteoros) sobre el eje temporal de velas.
"""

__version__ = "0.3.0"
