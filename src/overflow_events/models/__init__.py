"""Pydantic models for samples, detected events and detection parameters."""

from overflow_events.models.event import OverflowEvent
from overflow_events.models.parameters import DetectionParameters
from overflow_events.models.sample import DatasetInfo, Sample

__all__ = [
    "DatasetInfo",
    "DetectionParameters",
    "OverflowEvent",
    "Sample",
]
