"""Seq integration entry point."""

from __future__ import annotations

import logging
from collections.abc import Callable

from warden_seq.core.configuration import Builder, SeqIntegrationConfiguration
from warden_seq.core.errors import InvalidArgumentError
from warden_seq.core.events import check_result_to_seq_json, iteration_to_seq_json
from warden_seq.ports.iteration import CheckResult, Iteration
from warden_seq.ports.sender import SenderPort

__all__ = ["SeqIntegration"]

logger = logging.getLogger(__name__)


class SeqIntegration:
    """Sends warden iterations and check results to Seq.

    Every post obtains a fresh sender from the configuration's factory, so
    instances can be used from concurrent tasks.
    """

    def __init__(self, configuration: SeqIntegrationConfiguration) -> None:
        if configuration is None:
            raise InvalidArgumentError("Seq integration configuration has not been provided.")
        self.configuration = configuration

    @classmethod
    def create(
        cls,
        url: str,
        api_key: str | None = None,
        configurator: Callable[[Builder], object] | None = None,
        sender_factory: Callable[[], SenderPort] | None = None,
    ) -> SeqIntegration:
        """Build a configuration and wrap it in an integration.

        Args:
            url: Base URL of the Seq instance.
            api_key: Optional API key sent in the X-Seq-ApiKey header.
            configurator: Optional callable customising the builder.
            sender_factory: Initial sender factory; the configurator may
                replace it.

        Returns:
            Configured SeqIntegration.

        Raises:
            InvalidArgumentError: If the URL is invalid or no sender factory
                ends up configured.

        Example:
            SeqIntegration.create("http://seq:5341", sender_factory=make_sender,
                                  configurator=lambda b: b.fail_fast())
        """
        builder = SeqIntegrationConfiguration.create(url, api_key, sender_factory)
        if configurator is not None:
            configurator(builder)
        return cls.from_configuration(builder.build())

    @classmethod
    def from_configuration(cls, configuration: SeqIntegrationConfiguration) -> SeqIntegration:
        return cls(configuration)

    async def post_iteration(self, iteration: Iteration) -> None:
        """Post every check result of an iteration as one batch of events.

        Args:
            iteration: Iteration to send.

        Raises:
            InvalidArgumentError: If iteration is None or its warden name is
                blank (nothing is sent).
            TransportError: If delivery fails and fail-fast is enabled.
        """
        if iteration is None:
            raise InvalidArgumentError("Warden iteration can not be null.")
        if not iteration.warden_name or not iteration.warden_name.strip():
            raise InvalidArgumentError("Warden name can not be empty.")

        sender = self.configuration.sender_factory()
        data = iteration_to_seq_json(iteration, self.configuration.serializer_options)
        logger.debug(
            f"Posting {len(iteration.results)} check results of warden "
            f"{iteration.warden_name!r} to {self.configuration.uri}"
        )
        await sender.post(
            self.configuration.uri,
            data,
            self.configuration.headers,
            self.configuration.fail_fast,
        )

    async def post_check_result(self, check_result: CheckResult) -> None:
        """Post a single check result as a one-event batch.

        Raises:
            InvalidArgumentError: If check_result is None.
            TransportError: If delivery fails and fail-fast is enabled.
        """
        if check_result is None:
            raise InvalidArgumentError("Check result can not be null.")

        sender = self.configuration.sender_factory()
        data = check_result_to_seq_json(check_result, self.configuration.serializer_options)
        await sender.post(
            self.configuration.uri,
            data,
            self.configuration.headers,
            self.configuration.fail_fast,
        )
