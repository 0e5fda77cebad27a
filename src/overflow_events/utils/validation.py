"""Validation utilities for overflow event detection."""

import math

from datetime import timedelta


class InvalidParameterError(ValueError):
    """Raised when a detection parameter is out of range."""


def validate_threshold(threshold: float) -> float:
    """
    Validate that the overflow threshold is a finite, non-negative number.

    Args:
        threshold: Magnitude strictly above which a sample overflows

    Returns:
        The threshold, unchanged

    Raises:
        InvalidParameterError: If threshold is negative, NaN or infinite
    """
    if not math.isfinite(threshold):
        raise InvalidParameterError(
            f"Invalid threshold: {threshold}. Must be a finite number"
        )
    if threshold < 0:
        raise InvalidParameterError(
            f"Invalid threshold: {threshold}. Must be greater than or equal to 0"
        )
    return threshold


def minutes_to_timedelta(name: str, minutes: float) -> timedelta:
    """
    Convert a duration in minutes to a timedelta.

    Negative values convert normally so the detector can report them.

    Args:
        name: Parameter name used in the error message
        minutes: Duration in minutes

    Returns:
        The equivalent timedelta

    Raises:
        InvalidParameterError: If minutes is NaN, infinite, or too large for a timedelta
    """
    if not math.isfinite(minutes):
        raise InvalidParameterError(
            f"Invalid {name}: {minutes} minutes. Must be a finite number"
        )
    try:
        return timedelta(minutes=minutes)
    except OverflowError:
        limit = timedelta.max.total_seconds() / 60
        raise InvalidParameterError(
            f"Invalid {name}: {minutes:g} minutes. Must be at most {limit:g} minutes"
        ) from None


def validate_non_negative_duration(name: str, value: timedelta) -> timedelta:
    """
    Validate that a duration parameter is non-negative.

    Args:
        name: Parameter name used in the error message
        value: Duration to check

    Returns:
        The duration, unchanged

    Raises:
        InvalidParameterError: If the duration is negative
    """
    if value < timedelta(0):
        raise InvalidParameterError(
            f"Invalid {name}: {value.total_seconds() / 60:g} minutes. "
            f"Must be greater than or equal to 0"
        )
    return value


def validate_detection_parameters(
    threshold: float, min_duration: timedelta, max_gap: timedelta
) -> None:
    """
    Validate all detection parameters.

    Raises:
        InvalidParameterError: If any parameter is negative or not finite
    """
    validate_threshold(threshold)
    validate_non_negative_duration("min_duration", min_duration)
    validate_non_negative_duration("max_gap", max_gap)
