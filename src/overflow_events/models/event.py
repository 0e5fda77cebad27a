"""Pydantic models for detected overflow events."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

from overflow_events.constants import SECONDS_PER_MINUTE


class OverflowEvent(BaseModel):
    """
    An interval during which the signal stayed above the threshold.

    Attributes:
        start: Timestamp of the first overflowing sample
        end: Timestamp of the last overflowing sample
        peak_value: Largest overflowing value inside the interval
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "start": "2024-01-01T00:02:00Z",
                "end": "2024-01-01T00:10:00Z",
                "durationMinutes": 8.0,
                "peakValue": 0.42,
            }
        },
    )

    start: datetime = Field(description="First overflowing sample timestamp")
    end: datetime = Field(description="Last overflowing sample timestamp")
    peak_value: float = Field(
        serialization_alias="peakValue", description="Peak overflowing value"
    )

    @computed_field(alias="durationMinutes")  # type: ignore[prop-decorator]
    @property
    def duration_minutes(self) -> float:
        """Event duration (end - start) in minutes."""
        return (self.end - self.start).total_seconds() / SECONDS_PER_MINUTE

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys and ISO-8601 timestamps."""
        return self.model_dump(mode="json", by_alias=True)

    def __str__(self) -> str:
        return f"{self.start.isoformat()} ({self.duration_minutes:g} minutes): {self.peak_value:g}"
