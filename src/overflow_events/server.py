"""
overflow-events server

MCP server and HTTP endpoints for detecting overflow events in the sensor
time series dataset.
"""

import json
import logging

from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from overflow_events.analysis.service import DetectionService
from overflow_events.analysis.types import DetectionResult
from overflow_events.constants import (
    DEFAULT_HOST,
    DEFAULT_MAX_GAP_MINUTES,
    DEFAULT_MIN_DURATION_MINUTES,
    DEFAULT_PORT,
    DEFAULT_THRESHOLD,
    EVENTS_ROUTE,
    HEALTH_ROUTE,
    PROBLEM_JSON_MEDIA_TYPE,
    SERVER_NAME,
)
from overflow_events.data.sample_source import DatasetError, SampleSource
from overflow_events.models.parameters import DetectionParameters
from overflow_events.models.sample import DatasetInfo
from overflow_events.utils.validation import InvalidParameterError

logger = logging.getLogger(__name__)

INSTRUCTIONS = """
overflow-events

You provide overflow event detection over a sensor time series. An overflow
event is an interval during which readings stay strictly above a threshold,
tolerating short dry gaps.

AVAILABLE TOOLS:
- detect_overflow_events: Detect events for a threshold, minimum duration and maximum gap
- get_dataset_info: Summarize the loaded time series

PARAMETERS:
- threshold: readings strictly above this value are overflowing (>= 0)
- min_duration_minutes: events shorter than this (end - start) are dropped (>= 0)
- max_gap_minutes: dry gaps up to this long after the last overflowing reading
  do not end an event (>= 0)
"""


class EventsQuery(BaseModel):
    """Query string of GET /events, durations in minutes."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    threshold: float = Field(default=DEFAULT_THRESHOLD)
    min_duration: float = Field(
        default=DEFAULT_MIN_DURATION_MINUTES, alias="minDuration"
    )
    max_gap: float = Field(default=DEFAULT_MAX_GAP_MINUTES, alias="maxGap")

    def to_parameters(self) -> DetectionParameters:
        return DetectionParameters.from_minutes(
            threshold=self.threshold,
            min_duration_minutes=self.min_duration,
            max_gap_minutes=self.max_gap,
        )


def problem_response(status: int, title: str, detail: str) -> JSONResponse:
    """Build an RFC 7807 problem details response."""
    return JSONResponse(
        {"title": title, "status": status, "detail": detail},
        status_code=status,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )


def create_server(
    source: SampleSource,
    *,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> FastMCP:
    """
    Create the server for a dataset source.

    Args:
        source: Dataset source shared by every request
        host: Bind address for HTTP transports
        port: Bind port for HTTP transports

    Returns:
        Configured FastMCP server
    """
    server = FastMCP(name=SERVER_NAME, instructions=INSTRUCTIONS, host=host, port=port)
    service = DetectionService(source)

    # ========================================================================
    # Resources (Documentation)
    # ========================================================================

    @server.resource("docs://detection")
    def get_detection_documentation() -> str:
        """Documentation of the overflow detection rules."""
        return json.dumps(
            {
                "description": "Overflow event detection rules",
                "parameters": {
                    "threshold": {
                        "default": DEFAULT_THRESHOLD,
                        "rule": "a reading overflows when value > threshold",
                    },
                    "min_duration_minutes": {
                        "default": DEFAULT_MIN_DURATION_MINUTES,
                        "rule": "events are reported when end - start >= min_duration",
                    },
                    "max_gap_minutes": {
                        "default": DEFAULT_MAX_GAP_MINUTES,
                        "rule": "an event closes at the first dry reading more than "
                        "max_gap after the last overflowing reading",
                    },
                },
                "note": "Event end is the timestamp of the last overflowing reading",
            },
            indent=2,
        )

    # ========================================================================
    # Tools (Actions)
    # ========================================================================

    @server.tool("detect_overflow_events")
    def detect_overflow_events(
        threshold: float = DEFAULT_THRESHOLD,
        min_duration_minutes: float = DEFAULT_MIN_DURATION_MINUTES,
        max_gap_minutes: float = DEFAULT_MAX_GAP_MINUTES,
    ) -> DetectionResult:
        """
        Detect overflow events in the dataset.

        Args:
            threshold: Readings strictly above this value are overflowing
            min_duration_minutes: Minimum event duration in minutes
            max_gap_minutes: Maximum tolerated dry gap in minutes

        Returns:
            DetectionResult with the events and run summary
        """
        try:
            params = DetectionParameters.from_minutes(
                threshold, min_duration_minutes, max_gap_minutes
            )
            return service.run(params)
        except ValueError as e:
            raise e
        except Exception as e:
            logger.error(f"Error detecting overflow events: {e}", exc_info=True)
            raise ValueError(f"Error detecting overflow events: {e}") from e

    @server.tool("get_dataset_info")
    def get_dataset_info() -> DatasetInfo:
        """
        Summarize the loaded dataset.

        Returns:
            Sample count, time range and largest value
        """
        try:
            return service.dataset_info()
        except Exception as e:
            logger.error(f"Error loading dataset: {e}", exc_info=True)
            raise ValueError(f"Error loading dataset: {e}") from e

    # ========================================================================
    # HTTP Routes
    # ========================================================================

    @server.custom_route(EVENTS_ROUTE, methods=["GET"], name="DetectEvents")
    async def events_endpoint(request: Request) -> Response:
        try:
            query = EventsQuery.model_validate(dict(request.query_params))
        except ValidationError as e:
            return problem_response(400, "Bad Request", _format_validation_error(e))

        try:
            events = service.detect(query.to_parameters())
        except InvalidParameterError as e:
            return problem_response(400, "Bad Request", str(e))
        except DatasetError as e:
            logger.error(f"Dataset unavailable: {e}")
            return problem_response(503, "Service Unavailable", str(e))

        return JSONResponse([event.to_json_dict() for event in events])

    @server.custom_route(HEALTH_ROUTE, methods=["GET"], name="Health")
    async def health_endpoint(request: Request) -> Response:
        return JSONResponse({"status": "ok", "datasetLoaded": source.is_loaded})

    return server


def _format_validation_error(error: ValidationError) -> str:
    parts: list[str] = []
    for detail in error.errors():
        location = ".".join(str(loc) for loc in detail["loc"])
        parts.append(f"{location}: {detail['msg']}")
    return "; ".join(parts)
