"""Pydantic models for raw sensor samples."""

from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class Sample(BaseModel):
    """
    A single sensor observation.

    Attributes:
        timestamp: Observation instant (UTC, millisecond resolution)
        value: Observed magnitude
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(description="Observation instant (UTC)")
    value: float = Field(ge=0, description="Observed magnitude")

    @classmethod
    def from_unix_ms(cls, unix_time_ms: int, value: float) -> "Sample":
        """
        Create a sample from a Unix epoch millisecond timestamp.

        Uses timedelta arithmetic rather than float seconds so that
        millisecond timestamps convert exactly.
        """
        return cls(
            timestamp=UNIX_EPOCH + timedelta(milliseconds=unix_time_ms), value=value
        )

    @property
    def unix_ms(self) -> int:
        """Timestamp as Unix epoch milliseconds."""
        return (self.timestamp - UNIX_EPOCH) // timedelta(milliseconds=1)


class DatasetInfo(BaseModel):
    """Summary of a loaded sample dataset."""

    path: str | None = Field(default=None, description="Dataset file path")
    sample_count: int = Field(ge=0, description="Number of samples")
    first_timestamp: datetime | None = Field(
        default=None, description="Timestamp of the first sample"
    )
    last_timestamp: datetime | None = Field(
        default=None, description="Timestamp of the last sample"
    )
    max_value: float | None = Field(default=None, description="Largest sample value")
