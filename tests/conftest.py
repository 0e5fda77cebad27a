"""Pytest configuration and fixtures for overflow-events tests."""

from pathlib import Path

import pytest


def pytest_configure(config):
    """Register custom test markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that do not require external dependencies"
    )
    config.addinivalue_line(
        "markers", "business_logic: Tests for core business logic and algorithms"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests combining multiple components"
    )
    config.addinivalue_line(
        "markers", "recorded: Tests using the recorded overflow time series fixture"
    )


@pytest.fixture
def fixtures_dir():
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def dataset_path(fixtures_dir):
    """Return path to the recorded overflow time series."""
    return fixtures_dir / "overflow-timeseries.json"


@pytest.fixture
def sample_source(dataset_path):
    """Return a SampleSource backed by the recorded time series."""
    from overflow_events.data.sample_source import SampleSource

    return SampleSource(dataset_path)


@pytest.fixture
def write_dataset(tmp_path):
    """Factory writing raw JSON text to a dataset file and returning its path."""

    def _write(content: str, name: str = "dataset.json") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at a temporary location."""
    from overflow_events import config

    config_path = tmp_path / "config" / "config.toml"
    monkeypatch.setattr(config, "get_config_path", lambda: config_path)
    return config_path


@pytest.fixture(autouse=True)
def skip_logging_setup(monkeypatch):
    """Keep setup_logging from installing file and console handlers in tests."""
    from overflow_events import logging_config

    monkeypatch.setattr(logging_config, "_logging_configured", True)
