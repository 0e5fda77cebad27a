"""
overflow-events: threshold overflow event detection for sensor time series.

Detects intervals during which readings persistently exceed a threshold,
stitching short dry gaps and dropping intervals that are too short.
"""

from overflow_events.analysis.detector import detect_events, detect_events_list
from overflow_events.models import DetectionParameters, OverflowEvent, Sample
from overflow_events.utils.validation import InvalidParameterError

__all__ = [
    "DetectionParameters",
    "InvalidParameterError",
    "OverflowEvent",
    "Sample",
    "detect_events",
    "detect_events_list",
]
