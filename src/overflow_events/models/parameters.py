"""Detection parameter model."""

from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field

from overflow_events.constants import (
    DEFAULT_MAX_GAP_MINUTES,
    DEFAULT_MIN_DURATION_MINUTES,
    DEFAULT_THRESHOLD,
)
from overflow_events.utils.validation import minutes_to_timedelta


class DetectionParameters(BaseModel):
    """
    Parameters for a single detection run.

    Durations built with from_minutes are checked for being finite and in
    timedelta range. Negative values are rejected by the detector with
    InvalidParameterError so every entry point reports them the same way.
    """

    model_config = ConfigDict(frozen=True)

    threshold: float = Field(
        default=DEFAULT_THRESHOLD,
        description="Values strictly above this are overflowing",
    )
    min_duration: timedelta = Field(
        default=timedelta(minutes=DEFAULT_MIN_DURATION_MINUTES),
        description="Minimum event span (end - start)",
    )
    max_gap: timedelta = Field(
        default=timedelta(minutes=DEFAULT_MAX_GAP_MINUTES),
        description="Longest tolerated dry gap after the last overflowing sample",
    )

    @classmethod
    def from_minutes(
        cls,
        threshold: float = DEFAULT_THRESHOLD,
        min_duration_minutes: float = DEFAULT_MIN_DURATION_MINUTES,
        max_gap_minutes: float = DEFAULT_MAX_GAP_MINUTES,
    ) -> "DetectionParameters":
        """
        Build parameters from boundary values expressed in minutes.

        Raises:
            InvalidParameterError: If a duration is not finite or exceeds timedelta range
        """
        return cls(
            threshold=threshold,
            min_duration=minutes_to_timedelta("min_duration", min_duration_minutes),
            max_gap=minutes_to_timedelta("max_gap", max_gap_minutes),
        )
