"""
Dataset loading for overflow detection.

This module provides the sample source that loads the persisted time series
once per process and serves it to detection requests.
"""

from overflow_events.data.sample_source import (
    DatasetError,
    SampleSource,
    load_samples,
    parse_samples,
)

__all__ = [
    "DatasetError",
    "SampleSource",
    "load_samples",
    "parse_samples",
]
