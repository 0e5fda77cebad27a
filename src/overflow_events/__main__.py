"""Entry point for the overflow-events server."""

import argparse
import logging

from importlib.metadata import PackageNotFoundError, version

from overflow_events.config import get_dataset_path
from overflow_events.constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_TRANSPORT,
    SUPPORTED_TRANSPORTS,
)
from overflow_events.data.sample_source import SampleSource
from overflow_events.logging_config import setup_logging
from overflow_events.server import create_server

logger = logging.getLogger("overflow_events")


def _get_version() -> str:
    try:
        return version("overflow-events")
    except PackageNotFoundError:
        return "dev"


def main() -> int:
    """Main entry point for the overflow-events server."""
    setup_logging(target="server")

    parser = argparse.ArgumentParser(
        description="overflow-events: HTTP and MCP server for overflow event detection"
    )
    parser.add_argument(
        "--dataset",
        default=None,
        help="Path to the time series JSON file (default: from config, "
        "else ./overflow-timeseries.json)",
    )
    parser.add_argument(
        "--host", default=DEFAULT_HOST, help=f"Bind address (default: {DEFAULT_HOST})"
    )
    parser.add_argument(
        "--port", type=int, default=DEFAULT_PORT, help=f"Port (default: {DEFAULT_PORT})"
    )
    parser.add_argument(
        "--transport",
        choices=SUPPORTED_TRANSPORTS,
        default=DEFAULT_TRANSPORT,
        help=f"Server transport (default: {DEFAULT_TRANSPORT})",
    )
    args = parser.parse_args()

    dataset_path = args.dataset or get_dataset_path()

    logger.info(f"Starting overflow-events v{_get_version()}...")
    logger.info(f"Using dataset: {dataset_path}")

    try:
        source = SampleSource(dataset_path)
        # Load in the background so startup is not delayed
        source.warm_up()

        server = create_server(source, host=args.host, port=args.port)
        logger.info(f"Starting server ({args.transport})...")
        server.run(transport=args.transport)
        return 0

    except Exception as e:
        logger.error(f"Server failed to start: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    exit(main())
