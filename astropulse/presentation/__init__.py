"""
AstroPulse – Presentation Layer
=================================
API HTTP del motor de correlación.

Este módulo contiene:
- api/: FastAPI routes y schemas

REGLA DE DEPENDENCIA:
Esta capa llama a use cases de application/ y a servicios puros del
dominio. Las implementaciones concretas le llegan por init_routes().
"""

from astropulse.presentation.api.routes import router, init_routes

__all__ = ["router", "init_routes"]
