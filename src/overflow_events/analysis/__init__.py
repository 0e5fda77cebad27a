"""Overflow event detection and the service used by the CLI and server."""

from overflow_events.analysis.detector import (
    detect_events,
    detect_events_list,
    detect_events_with,
)
from overflow_events.analysis.service import DetectionService

__all__ = [
    "DetectionService",
    "detect_events",
    "detect_events_list",
    "detect_events_with",
]
