"""
Detection service shared by the CLI and the server.

Runs the overflow detector against the samples served by a SampleSource.
"""

import logging
import time

from overflow_events.analysis.detector import detect_events_with
from overflow_events.analysis.types import DetectionResult
from overflow_events.constants import SECONDS_PER_MINUTE
from overflow_events.data.sample_source import SampleSource
from overflow_events.models.event import OverflowEvent
from overflow_events.models.parameters import DetectionParameters
from overflow_events.models.sample import DatasetInfo
from overflow_events.utils.validation import validate_detection_parameters

logger = logging.getLogger(__name__)

__all__ = ["DetectionService", "DetectionResult"]


class DetectionService:
    """
    Service for running overflow detection over a dataset.

    Example:
        >>> service = DetectionService(SampleSource("overflow-timeseries.json"))
        >>> result = service.run(DetectionParameters.from_minutes(0.1, 5, 10))
        >>> print(f"Events: {result.event_count}")
    """

    def __init__(self, source: SampleSource):
        """
        Initialize detection service.

        Args:
            source: Source of the samples to scan
        """
        self.source = source

    def detect(self, params: DetectionParameters) -> list[OverflowEvent]:
        """
        Detect events in the source dataset.

        Parameters are validated before the dataset is touched, so invalid
        input is reported even when the dataset is unavailable.

        Raises:
            InvalidParameterError: If any parameter is negative
            DatasetError: If the dataset cannot be loaded
        """
        _validate(params)
        samples = self.source.get_samples()
        return list(detect_events_with(samples, params))

    def run(self, params: DetectionParameters) -> DetectionResult:
        """
        Detect events and summarize the run.

        Like detect(), parameters are validated before the dataset is loaded.

        Raises:
            InvalidParameterError: If any parameter is negative
            DatasetError: If the dataset cannot be loaded
        """
        _validate(params)
        start = time.perf_counter()
        samples = self.source.get_samples()
        events = list(detect_events_with(samples, params))
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.info(
            f"Detected {len(events)} events in {len(samples)} samples "
            f"(threshold={params.threshold}) in {elapsed_ms:.1f}ms"
        )

        return DetectionResult(
            threshold=params.threshold,
            min_duration_minutes=params.min_duration.total_seconds() / SECONDS_PER_MINUTE,
            max_gap_minutes=params.max_gap.total_seconds() / SECONDS_PER_MINUTE,
            sample_count=len(samples),
            events=events,
            total_overflow_minutes=sum(e.duration_minutes for e in events),
            max_peak_value=max((e.peak_value for e in events), default=None),
            processing_time_ms=elapsed_ms,
        )

    def dataset_info(self) -> DatasetInfo:
        """
        Summarize the source dataset.

        Raises:
            DatasetError: If the dataset cannot be loaded
        """
        return self.source.info()


def _validate(params: DetectionParameters) -> None:
    validate_detection_parameters(params.threshold, params.min_duration, params.max_gap)
