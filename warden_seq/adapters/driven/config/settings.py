"""Default wiring and environment loading for the Seq integration."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable

from dotenv import find_dotenv, load_dotenv

from warden_seq.adapters.driven.http.client import SeqService
from warden_seq.core.configuration import Builder, SeqIntegrationConfiguration
from warden_seq.core.integration import SeqIntegration

__all__ = ["default_sender_factory", "configure", "create_integration", "load_configuration"]

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def default_sender_factory() -> SeqService:
    """Create the default aiohttp sender (one per post)."""
    return SeqService()


def configure(url: str, api_key: str | None = None) -> Builder:
    """Start a configuration builder preset with the aiohttp sender.

    Args:
        url: Base URL of the Seq instance.
        api_key: Optional API key sent in the X-Seq-ApiKey header.

    Returns:
        Builder whose sender factory can still be replaced.
    """
    return SeqIntegrationConfiguration.create(url, api_key, sender_factory=default_sender_factory)


def create_integration(
    url: str,
    api_key: str | None = None,
    configurator: Callable[[Builder], object] | None = None,
) -> SeqIntegration:
    """Build a SeqIntegration that posts with aiohttp unless reconfigured.

    Example:
        create_integration("http://seq:5341", configurator=lambda b: b.fail_fast())
    """
    return SeqIntegration.create(
        url,
        api_key,
        configurator=configurator,
        sender_factory=default_sender_factory,
    )


def _parse_flag(name: str, raw: str | None) -> bool:
    if raw is None or not raw.strip():
        return False
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise RuntimeError(f"{name} must be a boolean flag (got: {raw})")


def load_configuration() -> SeqIntegrationConfiguration:
    """Load the Seq integration configuration from the environment.

    A `.env` file in the working directory is loaded first; variables that
    are already set take precedence.

    Required environment variables:
    - SEQ_URL: Base URL of the Seq instance.

    Optional:
    - SEQ_API_KEY: API key sent in the X-Seq-ApiKey header.
    - SEQ_FAIL_FAST: Boolean flag (1/true/yes/on, 0/false/no/off).

    Returns:
        Validated configuration.

    Raises:
        RuntimeError: If required env vars are missing or invalid.
        InvalidArgumentError: If the URL is invalid.
    """
    load_dotenv(find_dotenv(usecwd=True))

    try:
        url = os.environ["SEQ_URL"]
    except KeyError as e:
        raise RuntimeError(f"Missing required environment variable: {e.args[0]}") from e

    api_key = os.getenv("SEQ_API_KEY")
    fail_fast = _parse_flag("SEQ_FAIL_FAST", os.getenv("SEQ_FAIL_FAST"))

    builder = configure(url, api_key)
    if fail_fast:
        builder.fail_fast()
    configuration = builder.build()

    logger.info(
        f"Seq integration configured: endpoint={configuration.uri}, "
        f"api_key={'<set>' if configuration.api_key else '<none>'}, "
        f"fail_fast={configuration.fail_fast}"
    )

    return configuration
