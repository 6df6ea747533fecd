"""Tests for loading iterations from JSON files."""

import json
import tempfile
from collections.abc import Iterator
from datetime import timedelta
from pathlib import Path

import pytest

from warden_seq.adapters.driving.iteration_file import load_iteration

__all__ = []


def write_temp_json(content: str) -> str:
    """Write content to a temporary .json file and return its path."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
        f.write(content)
        return f.name


@pytest.fixture
def iteration_file() -> Iterator[str]:
    """Create a temporary iteration file with two results.

    Yields:
        Path of the file.
    """
    data = {
        "warden_name": "prod",
        "results": [
            {
                "watcher_name": "api",
                "watcher_type": "WebWatcher",
                "watcher_group": "web",
                "is_valid": True,
                "started_at": "2024-05-01T12:00:00Z",
                "completed_at": "2024-05-01T12:00:02Z",
                "description": "200 OK",
            },
            {
                "watcher_name": "db",
                "watcher_type": "SqlWatcher",
                "is_valid": False,
                "started_at": "2024-05-01T12:00:00Z",
                "completed_at": "2024-05-01T12:00:05Z",
                "execution_time": 4.5,
                "exception": "TimeoutError: connection timed out",
            },
        ],
    }
    filepath = write_temp_json(json.dumps(data))
    yield filepath
    Path(filepath).unlink()


def test_load_iteration_reads_results_in_order(iteration_file: str) -> None:
    """Results should be loaded in file order with parsed timestamps."""
    iteration = load_iteration(iteration_file)

    assert iteration.warden_name == "prod"
    assert [r.watcher_name for r in iteration.results] == ["api", "db"]
    assert iteration.results[0].watcher_group == "web"
    assert iteration.results[1].exception == "TimeoutError: connection timed out"


def test_load_iteration_derives_missing_execution_time(iteration_file: str) -> None:
    """Missing execution times default to completed_at - started_at."""
    iteration = load_iteration(iteration_file)

    assert iteration.results[0].execution_time == timedelta(seconds=2)
    assert iteration.results[1].execution_time == timedelta(seconds=4.5)


def test_load_iteration_rejects_missing_file() -> None:
    """Missing files should raise ValueError."""
    with pytest.raises(ValueError, match="not found"):
        load_iteration("/nonexistent/iteration.json")


@pytest.mark.parametrize(
    "content, message",
    [
        ("{ invalid json }", "invalid JSON"),
        ("[]", "must be a JSON object"),
        ('{"results": []}', "invalid shape"),
        ('{"warden_name": "prod", "results": [{"watcher_name": "x"}]}', "invalid shape"),
    ],
)
def test_load_iteration_rejects_bad_content(content: str, message: str) -> None:
    """Malformed files should raise ValueError with a clear message."""
    filepath = write_temp_json(content)
    try:
        with pytest.raises(ValueError, match=message):
            load_iteration(filepath)
    finally:
        Path(filepath).unlink()
