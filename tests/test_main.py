"""Tests for the command line entrypoint."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, Mock, patch

import pytest

from warden_seq.core.errors import InvalidArgumentError, TransportError
from warden_seq.main import USAGE, main, run
from warden_seq.ports.iteration import CheckResult, Iteration

__all__ = []

NOW = datetime(2024, 5, 1, tzinfo=timezone.utc)


def make_iteration() -> Iteration:
    """Create a one-result iteration."""
    return Iteration(
        warden_name="prod",
        results=(
            CheckResult(
                watcher_name="api",
                watcher_type="WebWatcher",
                is_valid=True,
                started_at=NOW,
                completed_at=NOW + timedelta(seconds=1),
                execution_time=timedelta(seconds=1),
            ),
        ),
    )


@pytest.mark.asyncio
async def test_main_posts_iteration() -> None:
    """Main should load config and iteration, then post it."""
    with (
        patch("warden_seq.main.configure_logs"),
        patch("warden_seq.main.load_configuration") as mock_load_configuration,
        patch("warden_seq.main.load_iteration") as mock_load_iteration,
        patch("warden_seq.main.SeqIntegration") as mock_integration_class,
    ):
        iteration = make_iteration()
        mock_load_iteration.return_value = iteration
        mock_integration = Mock()
        mock_integration.post_iteration = AsyncMock()
        mock_integration_class.from_configuration.return_value = mock_integration

        result = await main("iteration.json")

    assert result == 0
    mock_load_iteration.assert_called_once_with("iteration.json")
    mock_integration_class.from_configuration.assert_called_once_with(
        mock_load_configuration.return_value
    )
    mock_integration.post_iteration.assert_awaited_once_with(iteration)


@pytest.mark.asyncio
async def test_main_returns_1_on_configuration_error() -> None:
    """Configuration errors should abort before reading the iteration."""
    with (
        patch("warden_seq.main.configure_logs"),
        patch("warden_seq.main.load_configuration") as mock_load_configuration,
        patch("warden_seq.main.load_iteration") as mock_load_iteration,
        patch("warden_seq.main.logger") as mock_logger,
    ):
        mock_load_configuration.side_effect = RuntimeError(
            "Missing required environment variable: SEQ_URL"
        )

        result = await main("iteration.json")

    assert result == 1
    mock_load_iteration.assert_not_called()
    mock_logger.error.assert_called()


@pytest.mark.asyncio
async def test_main_returns_1_on_invalid_iteration_file() -> None:
    """Unreadable iteration files should abort before posting."""
    with (
        patch("warden_seq.main.configure_logs"),
        patch("warden_seq.main.load_configuration"),
        patch("warden_seq.main.load_iteration") as mock_load_iteration,
        patch("warden_seq.main.SeqIntegration") as mock_integration_class,
    ):
        mock_load_iteration.side_effect = ValueError("Iteration file not found: x.json")

        result = await main("x.json")

    assert result == 1
    mock_integration_class.from_configuration.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [TransportError(status_code=500, reason="Internal Server Error"), InvalidArgumentError("Warden name can not be empty.")],
)
async def test_main_returns_1_when_posting_fails(error: Exception) -> None:
    """Fail-fast transport errors and invalid iterations exit with 1."""
    with (
        patch("warden_seq.main.configure_logs"),
        patch("warden_seq.main.load_configuration"),
        patch("warden_seq.main.load_iteration", return_value=make_iteration()),
        patch("warden_seq.main.SeqIntegration") as mock_integration_class,
    ):
        mock_integration = Mock()
        mock_integration.post_iteration = AsyncMock(side_effect=error)
        mock_integration_class.from_configuration.return_value = mock_integration

        result = await main("iteration.json")

    assert result == 1


def test_run_requires_one_argument(capsys) -> None:
    """run() should print usage and return 2 without a file argument."""
    assert run([]) == 2
    assert USAGE in capsys.readouterr().err


def test_run_executes_main() -> None:
    """run() should execute main with the file argument."""
    with patch("warden_seq.main.main", new_callable=AsyncMock) as mock_main:
        mock_main.return_value = 0
        assert run(["iteration.json"]) == 0

    mock_main.assert_awaited_once_with("iteration.json")
