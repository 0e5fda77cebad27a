"""
Command-line interface for overflow-events.

Provides commands for detecting overflow events in a dataset file, inspecting
the dataset, and managing configured defaults.
"""

import json
import logging

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path

import click

from overflow_events.analysis.service import DetectionService
from overflow_events.analysis.types import DetectionResult
from overflow_events.config import (
    SETTABLE_KEYS,
    get_config_path,
    get_dataset_path,
    get_detection_defaults,
    load_config,
    set_config_value,
    unset_config_value,
)
from overflow_events.data.sample_source import DatasetError, SampleSource
from overflow_events.logging_config import setup_logging
from overflow_events.models.parameters import DetectionParameters
from overflow_events.utils.validation import InvalidParameterError

logger = logging.getLogger(__name__)

try:
    __version__ = get_version("overflow-events")
except PackageNotFoundError:
    __version__ = "dev"


def resolve_dataset(explicit_path: str | None) -> Path:
    """
    Resolve dataset path using precedence: CLI > config > default file.

    Raises:
        click.ClickException: If the resolved file does not exist
    """
    path = Path(explicit_path) if explicit_path else get_dataset_path()
    if not path.exists():
        raise click.ClickException(
            f"Dataset file not found: {path}. "
            "Pass a path or set one with: overflow-events config set dataset <path>"
        )
    return path


def _print_result(result: DetectionResult) -> None:
    click.echo(
        f"Threshold: {result.threshold:g}  "
        f"Min duration: {result.min_duration_minutes:g} min  "
        f"Max gap: {result.max_gap_minutes:g} min"
    )
    click.echo(f"Scanned {result.sample_count} samples\n")

    if not result.events:
        click.echo("No overflow events detected")
        return

    click.echo(f"{'Start':<27} {'End':<27} {'Minutes':>9} {'Peak':>10}")
    click.echo("-" * 76)
    for event in result.events:
        click.echo(
            f"{event.start.isoformat():<27} {event.end.isoformat():<27} "
            f"{event.duration_minutes:>9.1f} {event.peak_value:>10.4g}"
        )
    click.echo("-" * 76)
    click.echo(f"✓ {result.event_count} event(s), {result.total_overflow_minutes:.1f} minutes total")
    if result.max_peak_value is not None:
        click.echo(f"  Highest peak: {result.max_peak_value:g}")


@click.group()
@click.version_option(__version__, prog_name="overflow-events")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """overflow-events: Threshold Overflow Detection Tool"""
    setup_logging(target="cli", verbose=verbose)


@cli.command()
@click.argument("dataset", required=False, type=click.Path(dir_okay=False))
@click.option(
    "--threshold", "-t", type=float, help="Values strictly above this overflow"
)
@click.option(
    "--min-duration", type=float, help="Minimum event duration in minutes"
)
@click.option("--max-gap", type=float, help="Maximum stitched dry gap in minutes")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Output format",
)
def detect(
    dataset: str | None,
    threshold: float | None,
    min_duration: float | None,
    max_gap: float | None,
    output_format: str,
) -> None:
    """Detect overflow events in a time series JSON file."""
    defaults = get_detection_defaults()
    service = DetectionService(SampleSource(resolve_dataset(dataset)))
    try:
        params = DetectionParameters.from_minutes(
            threshold=defaults.threshold if threshold is None else threshold,
            min_duration_minutes=(
                defaults.min_duration_minutes if min_duration is None else min_duration
            ),
            max_gap_minutes=defaults.max_gap_minutes if max_gap is None else max_gap,
        )
        result = service.run(params)
    except InvalidParameterError as e:
        raise click.ClickException(str(e)) from e
    except DatasetError as e:
        raise click.ClickException(str(e)) from e

    if output_format == "json":
        click.echo(json.dumps([e.to_json_dict() for e in result.events], indent=2))
    else:
        _print_result(result)


@cli.command()
@click.argument("dataset", required=False, type=click.Path(dir_okay=False))
def info(dataset: str | None) -> None:
    """Show a summary of a time series JSON file."""
    source = SampleSource(resolve_dataset(dataset))
    try:
        summary = source.info()
    except DatasetError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Dataset: {summary.path}")
    click.echo(f"  Samples: {summary.sample_count}")
    if summary.first_timestamp and summary.last_timestamp:
        click.echo(f"  From: {summary.first_timestamp.isoformat()}")
        click.echo(f"  To:   {summary.last_timestamp.isoformat()}")
    if summary.max_value is not None:
        click.echo(f"  Max value: {summary.max_value:g}")


@cli.group()
def config() -> None:
    """Manage default detection settings."""


@config.command("show")
def config_show() -> None:
    """Show effective defaults and the config file location."""
    defaults = get_detection_defaults()
    click.echo(f"Config file: {get_config_path()}")
    if not load_config():
        click.echo("  (no config file, using built-in defaults)")
    click.echo(f"  threshold: {defaults.threshold:g}")
    click.echo(f"  min_duration_minutes: {defaults.min_duration_minutes:g}")
    click.echo(f"  max_gap_minutes: {defaults.max_gap_minutes:g}")
    click.echo(f"  dataset: {get_dataset_path()}")


@config.command("set")
@click.argument("key", type=click.Choice(list(SETTABLE_KEYS)))
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Set a default (threshold, min_duration_minutes, max_gap_minutes, dataset)."""
    try:
        stored = set_config_value(key, value)
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"✓ {key} = {stored}")


@config.command("unset")
@click.argument("key", type=click.Choice(list(SETTABLE_KEYS)))
def config_unset(key: str) -> None:
    """Remove a default, restoring the built-in value."""
    if unset_config_value(key):
        click.echo(f"✓ Removed {key}")
    else:
        click.echo(f"{key} was not set")


if __name__ == "__main__":
    cli()
