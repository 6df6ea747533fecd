"""Healthcheck validator for container orchestration."""

import logging

from warden_seq.adapters.driven.config.settings import load_configuration
from warden_seq.adapters.driven.logging.logging_config import configure_logs

__all__ = ["main"]

logger = logging.getLogger(__name__)


def main() -> int:
    """Check that the Seq integration can be configured.

    Validates:
    - SEQ_URL is set and is an http(s) URL.
    - SEQ_FAIL_FAST, if set, is a valid boolean flag.

    Returns:
        0 if healthy, 1 if unhealthy.
    """
    configure_logs()

    try:
        _ = load_configuration()
    except Exception as exc:
        logger.error(f"Seq integration healthcheck FAILED: {exc}")
        return 1

    logger.info("Seq integration healthcheck OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
