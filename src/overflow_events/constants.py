"""
Constants and defaults for overflow event detection.

Detection defaults match the HTTP endpoint defaults: threshold 0, events must
last at least 5 minutes, and dry gaps of up to 10 minutes are stitched.
"""

from pathlib import Path

# ============================================================================
# Detection Defaults
# ============================================================================

DEFAULT_THRESHOLD = 0.0
DEFAULT_MIN_DURATION_MINUTES = 5.0
DEFAULT_MAX_GAP_MINUTES = 10.0

# Keys accepted in the [detection] config section
DETECTION_CONFIG_KEYS = ("threshold", "min_duration_minutes", "max_gap_minutes")

# ============================================================================
# Dataset
# ============================================================================

# Persisted dataset: JSON array of [unix_time_ms, value] pairs
DEFAULT_DATASET_FILE = "overflow-timeseries.json"

# ============================================================================
# Server Settings
# ============================================================================

SERVER_NAME = "overflow-events"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
DEFAULT_TRANSPORT = "streamable-http"
SUPPORTED_TRANSPORTS = ("streamable-http", "sse", "stdio")

EVENTS_ROUTE = "/events"
HEALTH_ROUTE = "/_health"
PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"

# ============================================================================
# Default Settings
# ============================================================================

DEFAULT_CONFIG_DIR = Path.home() / ".overflow_events"

# Logging configuration
DEFAULT_LOG_DIR = DEFAULT_CONFIG_DIR / "logs"
DEFAULT_LOG_FILE = "overflow_events.log"
SERVER_LOG_FILE = "overflow_events_server.log"
CLI_CONSOLE_FORMAT = "%(levelname)s: %(message)s"
SERVER_CONSOLE_FORMAT = "%(asctime)s - %(threadName)s - %(levelname)s - %(message)s"
FILE_LOG_FORMAT = "%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_LOG_BACKUP_COUNT = 5

# Time calculations
SECONDS_PER_MINUTE = 60
