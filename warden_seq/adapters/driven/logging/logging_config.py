"""Console logging for the Seq integration entrypoints."""

import logging

__all__ = ["configure_logs", "PACKAGE_LOGGER"]

PACKAGE_LOGGER = "warden_seq"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%d/%m/%y %H:%M:%S"

_HANDLER_NAME = "warden_seq.console"


def configure_logs(level: int = logging.DEBUG) -> None:
    """Configure console logging for the CLI and the health check.

    Delivery failures that are not raised (fail-fast off) only surface as
    WARNING records from the HTTP adapter, so the console handler is what
    makes best-effort posting observable.

    Sets up:
    - One named console handler on the root logger (calling again does not
      add another one).
    - Root logger at INFO level; aiohttp and asyncio at WARNING.
    - Package loggers (warden_seq) at `level`.

    Args:
        level: Level for the warden_seq loggers.
    """
    root = logging.getLogger()
    root.setLevel(logging.INFO)
    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(handler)

    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
