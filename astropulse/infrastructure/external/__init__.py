"""External systems - Astronomical event sources."""

from astropulse.infrastructure.external.approximate_event_source import ApproximateEventSource

__all__ = ["ApproximateEventSource"]
