"""Tests for console logging setup."""

import logging
from collections.abc import Iterator

import pytest

from warden_seq.adapters.driven.logging.logging_config import PACKAGE_LOGGER, configure_logs

__all__ = []


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Restore root handlers and levels touched by configure_logs()."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    levels = {name: logging.getLogger(name).level for name in ("", "aiohttp", "asyncio", PACKAGE_LOGGER)}
    yield
    root.handlers[:] = handlers
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


def console_handlers() -> list[logging.Handler]:
    """Return handlers installed by configure_logs()."""
    return [h for h in logging.getLogger().handlers if h.get_name() == "warden_seq.console"]


def test_configure_logs_sets_levels(restore_logging) -> None:
    """Package loggers get the requested level, frameworks are quieted."""
    configure_logs(level=logging.INFO)

    assert logging.getLogger(PACKAGE_LOGGER).level == logging.INFO
    assert logging.getLogger("aiohttp").level == logging.WARNING
    assert logging.getLogger("asyncio").level == logging.WARNING


def test_configure_logs_is_idempotent(restore_logging) -> None:
    """Calling twice should not install a second console handler."""
    configure_logs()
    configure_logs()

    assert len(console_handlers()) == 1
