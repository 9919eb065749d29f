"""
AstroPulse – Logging
=====================
Salida de logs del motor y del API a stdout.

CONVENCIONES:
  - Cada módulo pide su logger con get_logger("<componente>") y cuelga de
    LOG_NAMESPACE, así `astropulse` se sube o baja de nivel en bloque.
  - El handler propio lleva nombre (HANDLER_NAME): setup_logging() puede
    llamarse varias veces (tests, reload de uvicorn) sin duplicar líneas,
    aunque el root ya tenga handlers de otra librería.
  - El nivel acepta int o nombre ("debug", "INFO"). Un nombre desconocido
    cae a INFO.
"""

from __future__ import annotations

import logging
import sys

LOG_NAMESPACE = "astropulse"
HANDLER_NAME = "astropulse-stdout"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Access log de uvicorn: una línea por request del timeline
_QUIET_LOGGERS = ("uvicorn.access",)


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Instala el handler de stdout (una vez) y fija el nivel. Devuelve el logger raíz del proyecto."""
    root = logging.getLogger()
    if not any(h.get_name() == HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)
    root.setLevel(_resolve_level(level))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return logging.getLogger(LOG_NAMESPACE)


def get_logger(name: str) -> logging.Logger:
    if name == LOG_NAMESPACE or name.startswith(f"{LOG_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOG_NAMESPACE}.{name}")
