"""Command line entrypoint: post one iteration file to Seq."""

import asyncio
import logging
import sys

from warden_seq.adapters.driven.config.settings import load_configuration
from warden_seq.adapters.driven.logging.logging_config import configure_logs
from warden_seq.adapters.driving.iteration_file import load_iteration
from warden_seq.core.errors import InvalidArgumentError, TransportError
from warden_seq.core.integration import SeqIntegration

__all__ = ["main", "run"]

logger = logging.getLogger(__name__)

USAGE = "usage: python -m warden_seq.main ITERATION_FILE"


async def main(iteration_path: str) -> int:
    """Post the iteration stored in a JSON file.

    Startup sequence:
    1. Configure logging.
    2. Load and validate configuration.
    3. Load the iteration file.
    4. Post it to Seq.

    Args:
        iteration_path: Path to the iteration JSON file.

    Returns:
        Process exit code (0 on success).
    """
    configure_logs()

    try:
        configuration = load_configuration()
    except (RuntimeError, ValueError) as exc:
        logger.error(
            "Configuration error: %s\n"
            "Hint: check SEQ_URL, SEQ_API_KEY and SEQ_FAIL_FAST.",
            exc,
        )
        return 1

    try:
        iteration = load_iteration(iteration_path)
    except ValueError as exc:
        logger.error(f"Cannot read iteration: {exc}")
        return 1

    integration = SeqIntegration.from_configuration(configuration)
    try:
        await integration.post_iteration(iteration)
    except InvalidArgumentError as exc:
        logger.error(f"Invalid iteration: {exc}")
        return 1
    except TransportError as exc:
        logger.error(f"Posting to Seq failed: {exc}", exc_info=True)
        return 1

    logger.info(f"Posted {len(iteration.results)} check results of warden {iteration.warden_name!r}")
    return 0


def run(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print(USAGE, file=sys.stderr)
        return 2
    return asyncio.run(main(args[0]))


if __name__ == "__main__":
    try:
        raise SystemExit(run())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Interrupted by user (Ctrl+C).")
