"""
AstroPulse – State
====================
Estado en memoria del motor, propiedad del Container:
- CorrelationCache: caches FIFO de horizonte y serie combinada
- TimeSyncCoordinator: sincronización de rango entre superficies overlay
"""
from astropulse.state.correlation_cache import (
    CorrelationCache,
    FifoCache,
    event_fingerprint,
)
from astropulse.state.time_sync import TimeSyncCoordinator

__all__ = [
    "CorrelationCache",
    "FifoCache",
    "event_fingerprint",
    "TimeSyncCoordinator",
]
