"""
AstroPulse – Infrastructure Layer
===================================
Implementaciones concretas de los ports de aplicación.

Este módulo contiene:
- external/: Fuentes de eventos astronómicos
- surfaces/: Superficies de gráfico sin render (headless)

REGLA DE DEPENDENCIA:
Esta capa implementa interfaces definidas en application/ports/.

Puede importar de:
- domain/ (entidades, servicios)
- application/ (ports)
- shared/ (config, logging)
"""
