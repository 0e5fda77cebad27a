"""
Sample dataset loading.

The persisted dataset is a JSON array of ``[unix_time_ms, value]`` pairs in
ascending time order. A SampleSource loads it once and serves the same
samples for the lifetime of the object.
"""

import json
import logging
import threading

from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from overflow_events.models.sample import DatasetInfo, Sample

logger = logging.getLogger(__name__)


class DatasetError(Exception):
    """Raised when a sample dataset cannot be read or parsed."""


def parse_samples(rows: object) -> list[Sample]:
    """
    Convert decoded JSON rows into samples.

    Args:
        rows: Decoded JSON document, expected to be a list of [ms, value] pairs

    Returns:
        List of samples in input order

    Raises:
        DatasetError: If the document does not have the expected shape
    """
    if not isinstance(rows, list):
        raise DatasetError(
            f"Expected a JSON array of [timestamp, value] pairs, got {type(rows).__name__}"
        )

    samples = []
    for index, row in enumerate(rows):
        if not isinstance(row, list) or len(row) != 2:
            raise DatasetError(f"Row {index} is not a [timestamp, value] pair: {row!r}")

        unix_time_ms, value = row
        if isinstance(unix_time_ms, bool) or not isinstance(unix_time_ms, int | float):
            raise DatasetError(f"Row {index} has a non-numeric timestamp: {row!r}")

        try:
            samples.append(Sample.from_unix_ms(int(unix_time_ms), value))
        except ValidationError as e:
            raise DatasetError(f"Row {index} is not a valid sample: {e}") from e

    return samples


def load_samples(path: str | Path) -> list[Sample]:
    """
    Load samples from a JSON dataset file.

    Args:
        path: Path to the dataset file

    Returns:
        List of samples in file order

    Raises:
        DatasetError: If the file is missing, unreadable or malformed
    """
    dataset_path = Path(path)
    logger.debug(f"Loading samples from {dataset_path}")

    try:
        with open(dataset_path, encoding="utf-8") as f:
            rows = json.load(f)
    except FileNotFoundError:
        raise DatasetError(f"Dataset file not found: {dataset_path}") from None
    except json.JSONDecodeError as e:
        raise DatasetError(f"Dataset file {dataset_path} is not valid JSON: {e}") from e
    except OSError as e:
        raise DatasetError(f"Cannot read dataset file {dataset_path}: {e}") from e

    samples = parse_samples(rows)
    logger.info(f"Loaded {len(samples)} samples from {dataset_path}")
    return samples


class SampleSource:
    """
    Dataset source that loads its samples once and caches them.

    Loading is guarded by a lock so concurrent first callers trigger a
    single load. A failed load is not cached; the next call retries.

    Example:
        >>> source = SampleSource("overflow-timeseries.json")
        >>> source.warm_up()
        >>> samples = source.get_samples()
    """

    def __init__(self, path: str | Path | None):
        """
        Initialize the source.

        Args:
            path: Dataset file path, or None for an in-memory source
        """
        self.path = Path(path) if path is not None else None
        self._samples: list[Sample] | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_samples(cls, samples: Sequence[Sample]) -> "SampleSource":
        """Create an already-loaded source backed by in-memory samples."""
        source = cls(None)
        source._samples = list(samples)
        return source

    @property
    def is_loaded(self) -> bool:
        """Whether the samples have been loaded."""
        return self._samples is not None

    def get_samples(self) -> list[Sample]:
        """
        Get the dataset samples, loading them on first use.

        Raises:
            DatasetError: If the dataset cannot be loaded
        """
        samples = self._samples
        if samples is not None:
            return samples

        with self._lock:
            if self._samples is None:
                if self.path is None:
                    raise DatasetError("No dataset path configured")
                self._samples = load_samples(self.path)
            return self._samples

    def warm_up(self) -> threading.Thread:
        """
        Start loading the dataset in a background thread.

        Failures are logged; they surface again on the next get_samples().

        Returns:
            The started daemon thread
        """

        def _load() -> None:
            try:
                self.get_samples()
            except DatasetError as e:
                logger.error(f"Failed to warm up dataset: {e}")

        thread = threading.Thread(target=_load, name="dataset-warm-up", daemon=True)
        thread.start()
        return thread

    def reset(self) -> None:
        """Drop cached samples so the next access reloads from disk."""
        with self._lock:
            if self.path is not None:
                self._samples = None

    def info(self) -> DatasetInfo:
        """
        Summarize the loaded dataset.

        Raises:
            DatasetError: If the dataset cannot be loaded
        """
        samples = self.get_samples()
        return DatasetInfo(
            path=str(self.path) if self.path is not None else None,
            sample_count=len(samples),
            first_timestamp=samples[0].timestamp if samples else None,
            last_timestamp=samples[-1].timestamp if samples else None,
            max_value=max((s.value for s in samples), default=None),
        )
