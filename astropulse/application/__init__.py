"""
AstroPulse – Application Layer
================================
Capa de casos de uso y orquestación.

Este módulo contiene:
- use_cases/: Casos de uso (serie combinada, layout de bins, overlay)
- ports/: Interfaces hacia infraestructura y widget de gráfico
- dto/: Data Transfer Objects

REGLA DE DEPENDENCIA:
Esta capa puede importar de:
- domain/ (entidades, servicios, value objects)
- state/ (caches y sincronización en memoria)
- ports/ propios

NO puede importar de:
- infrastructure/ (implementaciones concretas)
- presentation/ (API)
"""
