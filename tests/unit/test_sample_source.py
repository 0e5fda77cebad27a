"""
Tests for dataset loading and the load-once sample source.
"""

import threading

from datetime import UTC, datetime

import pytest

from overflow_events.data import sample_source as sample_source_module
from overflow_events.data.sample_source import (
    DatasetError,
    SampleSource,
    load_samples,
    parse_samples,
)
from overflow_events.models.sample import Sample


class TestParseSamples:
    """Test conversion of decoded JSON rows."""

    def test_parses_pairs_in_order(self):
        samples = parse_samples([[1704067200000, 0.0], [1704067320000, 0.25]])

        assert [s.value for s in samples] == [0.0, 0.25]
        assert samples[1].timestamp == datetime(2024, 1, 1, 0, 2, tzinfo=UTC)

    def test_integer_values_accepted(self):
        samples = parse_samples([[0, 1]])

        assert samples[0].value == 1.0

    def test_empty_array(self):
        assert parse_samples([]) == []

    @pytest.mark.parametrize(
        "rows,message",
        [
            ({"a": 1}, "JSON array"),
            ([[0]], "Row 0"),
            ([[0, 1.0], [1, 2, 3]], "Row 1"),
            ([["x", 1.0]], "non-numeric timestamp"),
            ([[True, 1.0]], "non-numeric timestamp"),
            ([[0, -1.0]], "not a valid sample"),
            ([[0, "abc"]], "not a valid sample"),
        ],
    )
    def test_malformed_rows_raise(self, rows, message):
        with pytest.raises(DatasetError, match=message):
            parse_samples(rows)


class TestLoadSamples:
    """Test loading dataset files."""

    def test_loads_recorded_fixture(self, dataset_path):
        samples = load_samples(dataset_path)

        assert len(samples) == 42
        assert samples[0].timestamp == datetime(2024, 1, 1, tzinfo=UTC)
        timestamps = [s.timestamp for s in samples]
        assert timestamps == sorted(timestamps)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DatasetError, match="not found"):
            load_samples(tmp_path / "missing.json")

    def test_invalid_json(self, write_dataset):
        path = write_dataset("[[0, 1.0],")

        with pytest.raises(DatasetError, match="not valid JSON"):
            load_samples(path)


class TestSampleSource:
    """Test the load-once source."""

    def test_loads_once(self, sample_source, monkeypatch):
        calls = []
        original = sample_source_module.load_samples

        def counting_load(path):
            calls.append(path)
            return original(path)

        monkeypatch.setattr(sample_source_module, "load_samples", counting_load)

        first = sample_source.get_samples()
        second = sample_source.get_samples()

        assert first is second
        assert len(calls) == 1
        assert sample_source.is_loaded

    def test_concurrent_first_access_loads_once(self, sample_source, monkeypatch):
        calls = []
        original = sample_source_module.load_samples

        def slow_load(path):
            calls.append(path)
            return original(path)

        monkeypatch.setattr(sample_source_module, "load_samples", slow_load)

        results = []
        threads = [
            threading.Thread(target=lambda: results.append(sample_source.get_samples()))
            for _ in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(calls) == 1
        assert len(results) == 8
        assert all(r is results[0] for r in results)

    def test_not_loaded_until_requested(self, sample_source):
        assert not sample_source.is_loaded

    def test_failed_load_is_retried(self, write_dataset):
        path = write_dataset("not json")
        source = SampleSource(path)

        with pytest.raises(DatasetError):
            source.get_samples()
        assert not source.is_loaded

        path.write_text("[[0, 1.0]]", encoding="utf-8")
        assert len(source.get_samples()) == 1

    def test_reset_reloads(self, write_dataset):
        path = write_dataset("[[0, 1.0]]")
        source = SampleSource(path)
        assert len(source.get_samples()) == 1

        path.write_text("[[0, 1.0], [1, 2.0]]", encoding="utf-8")
        assert len(source.get_samples()) == 1

        source.reset()
        assert len(source.get_samples()) == 2

    def test_warm_up_loads_in_background(self, sample_source):
        thread = sample_source.warm_up()
        thread.join(timeout=5)

        assert sample_source.is_loaded

    def test_warm_up_logs_failure(self, tmp_path, caplog):
        source = SampleSource(tmp_path / "missing.json")

        thread = source.warm_up()
        thread.join(timeout=5)

        assert not source.is_loaded
        assert "Failed to warm up dataset" in caplog.text

    def test_from_samples(self):
        samples = [Sample.from_unix_ms(0, 1.0)]
        source = SampleSource.from_samples(samples)

        assert source.is_loaded
        assert source.get_samples() == samples
        source.reset()
        assert source.get_samples() == samples

    def test_without_path_raises(self):
        with pytest.raises(DatasetError, match="No dataset path"):
            SampleSource(None).get_samples()

    def test_info(self, sample_source, dataset_path):
        info = sample_source.info()

        assert info.path == str(dataset_path)
        assert info.sample_count == 42
        assert info.first_timestamp == datetime(2024, 1, 1, tzinfo=UTC)
        assert info.last_timestamp == datetime(2024, 1, 1, 1, 22, tzinfo=UTC)
        assert info.max_value == 0.9

    def test_info_empty_dataset(self, write_dataset):
        info = SampleSource(write_dataset("[]")).info()

        assert info.sample_count == 0
        assert info.first_timestamp is None
        assert info.max_value is None
