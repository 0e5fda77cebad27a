"""
Threshold overflow event detection.

A single forward pass over time-ordered samples. A sample overflows when its
value is strictly above the threshold. Consecutive overflowing samples form
an interval; dry samples are tolerated while no more than max_gap has elapsed
since the last overflowing sample. Closed intervals shorter than min_duration
are dropped.

The reported end of an event is the timestamp of its last overflowing sample.
Samples are treated as instants: no per-sample duration is added to that
timestamp, so a lone overflowing sample spans zero minutes.
"""

import logging

from collections.abc import Iterable, Iterator
from datetime import datetime, timedelta

from overflow_events.models.event import OverflowEvent
from overflow_events.models.parameters import DetectionParameters
from overflow_events.models.sample import Sample
from overflow_events.utils.validation import validate_detection_parameters

logger = logging.getLogger(__name__)


def detect_events(
    samples: Iterable[Sample],
    threshold: float,
    min_duration: timedelta,
    max_gap: timedelta,
) -> Iterator[OverflowEvent]:
    """
    Detect overflow events in a time series.

    Parameters are validated immediately; events are then produced lazily as
    the returned iterator is consumed. Samples must be in ascending timestamp
    order; this is not checked.

    Args:
        samples: Samples in ascending timestamp order
        threshold: Values strictly above this are overflowing
        min_duration: Minimum (end - start) for an event to be reported
        max_gap: Longest dry gap after the last overflowing sample that
            keeps an event open

    Returns:
        Iterator of events in ascending start order

    Raises:
        InvalidParameterError: If any parameter is negative
    """
    validate_detection_parameters(threshold, min_duration, max_gap)

    logger.debug(
        f"Detecting overflow events (threshold={threshold}, "
        f"min_duration={min_duration}, max_gap={max_gap})"
    )

    return _scan(samples, threshold, min_duration, max_gap)


def detect_events_with(
    samples: Iterable[Sample], params: DetectionParameters
) -> Iterator[OverflowEvent]:
    """Detect overflow events using a DetectionParameters bundle."""
    return detect_events(samples, params.threshold, params.min_duration, params.max_gap)


def detect_events_list(
    samples: Iterable[Sample],
    threshold: float,
    min_duration: timedelta,
    max_gap: timedelta,
) -> list[OverflowEvent]:
    """Detect overflow events and materialize them into a list."""
    return list(detect_events(samples, threshold, min_duration, max_gap))


def _scan(
    samples: Iterable[Sample],
    threshold: float,
    min_duration: timedelta,
    max_gap: timedelta,
) -> Iterator[OverflowEvent]:
    # (start, last_seen, peak) while an event is open, None while idle
    active: tuple[datetime, datetime, float] | None = None

    for sample in samples:
        if sample.value > threshold:
            if active is None:
                active = (sample.timestamp, sample.timestamp, sample.value)
            else:
                start, _, peak = active
                active = (start, sample.timestamp, max(peak, sample.value))
        elif active is not None:
            start, last_seen, peak = active
            # Tolerated dry samples do not advance last_seen
            if sample.timestamp - last_seen > max_gap:
                event = _close(start, last_seen, peak, min_duration)
                if event is not None:
                    yield event
                active = None

    if active is not None:
        event = _close(*active, min_duration)
        if event is not None:
            yield event


def _close(
    start: datetime, last_seen: datetime, peak: float, min_duration: timedelta
) -> OverflowEvent | None:
    if last_seen - start >= min_duration:
        return OverflowEvent(start=start, end=last_seen, peak_value=peak)

    logger.debug(
        f"Dropping interval at {start.isoformat()}: "
        f"{last_seen - start} shorter than {min_duration}"
    )
    return None
