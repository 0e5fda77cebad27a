"""
Tests for sample, event and parameter models.
"""

from datetime import UTC, datetime, timedelta

import pytest

from pydantic import ValidationError

from overflow_events.models import DetectionParameters, OverflowEvent, Sample
from overflow_events.utils.validation import InvalidParameterError


class TestSample:
    """Test sample construction."""

    def test_from_unix_ms_is_exact(self):
        sample = Sample.from_unix_ms(1704067320123, 0.5)

        assert sample.timestamp == datetime(2024, 1, 1, 0, 2, 0, 123000, tzinfo=UTC)
        assert sample.unix_ms == 1704067320123
        assert sample.value == 0.5

    def test_negative_value_rejected(self):
        with pytest.raises(ValidationError):
            Sample.from_unix_ms(0, -0.1)

    def test_sample_is_immutable(self):
        sample = Sample.from_unix_ms(0, 1.0)

        with pytest.raises(ValidationError):
            sample.value = 2.0


class TestOverflowEvent:
    """Test event derived fields and serialization."""

    @pytest.fixture
    def event(self):
        start = datetime(2024, 1, 1, 0, 2, tzinfo=UTC)
        return OverflowEvent(start=start, end=start + timedelta(minutes=8), peak_value=0.42)

    def test_duration_minutes(self, event):
        assert event.duration_minutes == 8.0

    def test_zero_length_event(self):
        start = datetime(2024, 1, 1, tzinfo=UTC)
        event = OverflowEvent(start=start, end=start, peak_value=1.0)

        assert event.duration_minutes == 0

    def test_fractional_duration(self):
        start = datetime(2024, 1, 1, tzinfo=UTC)
        event = OverflowEvent(start=start, end=start + timedelta(seconds=90), peak_value=1.0)

        assert event.duration_minutes == 1.5

    def test_json_dict_uses_wire_names(self, event):
        data = event.to_json_dict()

        assert set(data) == {"start", "end", "durationMinutes", "peakValue"}
        assert data["durationMinutes"] == 8.0
        assert data["peakValue"] == 0.42
        assert datetime.fromisoformat(data["start"]) == event.start
        assert datetime.fromisoformat(data["end"]) == event.end

    def test_str_shows_start_duration_and_peak(self, event):
        assert str(event) == "2024-01-01T00:02:00+00:00 (8 minutes): 0.42"

    def test_events_compare_by_value(self, event):
        copy = OverflowEvent(start=event.start, end=event.end, peak_value=event.peak_value)

        assert copy == event


class TestDetectionParameters:
    """Test parameter construction from minutes."""

    def test_defaults(self):
        params = DetectionParameters()

        assert params.threshold == 0.0
        assert params.min_duration == timedelta(minutes=5)
        assert params.max_gap == timedelta(minutes=10)

    def test_from_minutes(self):
        params = DetectionParameters.from_minutes(0.13, 2.5, 0)

        assert params.threshold == 0.13
        assert params.min_duration == timedelta(seconds=150)
        assert params.max_gap == timedelta(0)

    @pytest.mark.parametrize(
        "kwargs,name",
        [
            ({"max_gap_minutes": 1e300}, "max_gap"),
            ({"min_duration_minutes": float("nan")}, "min_duration"),
            ({"max_gap_minutes": float("-inf")}, "max_gap"),
        ],
    )
    def test_from_minutes_rejects_unrepresentable_durations(self, kwargs, name):
        with pytest.raises(InvalidParameterError, match=name):
            DetectionParameters.from_minutes(**kwargs)

    def test_negative_values_are_not_rejected_by_model(self):
        params = DetectionParameters.from_minutes(-1, -1, -1)

        assert params.threshold == -1
        assert params.min_duration < timedelta(0)
