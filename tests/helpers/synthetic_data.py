"""
Synthetic sample series for detector tests.

Samples are placed on a fixed start instant plus minute offsets so gap and
duration arithmetic in tests can be read directly off the offsets.
"""

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

from overflow_events.models.event import OverflowEvent
from overflow_events.models.sample import Sample

TEST_START = datetime(2024, 1, 1, tzinfo=UTC)


def at_minute(offset_minutes: float) -> datetime:
    """Timestamp offset_minutes after TEST_START."""
    return TEST_START + timedelta(minutes=offset_minutes)


def dry_sample(offset_minutes: float, threshold: float) -> Sample:
    """Sample at or below the threshold."""
    return Sample(timestamp=at_minute(offset_minutes), value=threshold)


def overflow_sample(offset_minutes: float, threshold: float, excess: float = 0.5) -> Sample:
    """Sample strictly above the threshold."""
    return Sample(timestamp=at_minute(offset_minutes), value=threshold + excess)


def series_from_flags(
    offsets_minutes: Sequence[float],
    overflowing: Sequence[bool],
    threshold: float,
) -> list[Sample]:
    """
    Build a series from parallel minute offsets and overflow flags.

    Overflowing samples get distinct values so peak tracking can be checked.
    """
    samples = []
    for index, (offset, is_over) in enumerate(zip(offsets_minutes, overflowing, strict=True)):
        if is_over:
            samples.append(overflow_sample(offset, threshold, excess=0.1 * (index + 1)))
        else:
            samples.append(dry_sample(offset, threshold))
    return samples


def series_from_values(values: Sequence[float], step_minutes: float = 2.0) -> list[Sample]:
    """Build an evenly spaced series from raw values."""
    return [
        Sample(timestamp=at_minute(i * step_minutes), value=value)
        for i, value in enumerate(values)
    ]


def assert_event_invariants(events: Sequence[OverflowEvent], threshold: float) -> None:
    """Check ordering, non-overlap and per-event invariants."""
    for event in events:
        assert event.start <= event.end
        assert event.duration_minutes >= 0
        assert event.peak_value > threshold

    for previous, current in zip(events, events[1:]):
        assert previous.start < current.start
        assert previous.end < current.start
