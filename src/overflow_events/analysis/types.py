"""Detection pipeline type definitions."""

from pydantic import BaseModel, Field

from overflow_events.models.event import OverflowEvent


class DetectionResult(BaseModel):
    """Results from one detection run over a dataset."""

    threshold: float = Field(description="Overflow threshold used")
    min_duration_minutes: float = Field(description="Minimum event duration (minutes)")
    max_gap_minutes: float = Field(description="Maximum stitched gap (minutes)")
    sample_count: int = Field(ge=0, description="Samples scanned")
    events: list[OverflowEvent] = Field(description="Detected events, start-ascending")
    total_overflow_minutes: float = Field(
        ge=0, description="Sum of event durations (minutes)"
    )
    max_peak_value: float | None = Field(
        default=None, description="Largest peak across all events"
    )
    processing_time_ms: float = Field(ge=0, description="Detection time (ms)")

    @property
    def event_count(self) -> int:
        return len(self.events)
