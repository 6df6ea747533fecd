"""Sender port definition (interface)."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Protocol

__all__ = ["SenderPort", "SenderFactory"]


class SenderPort(Protocol):
    """Interface for delivering a serialized event envelope.

    Implementations keep a persistent header set, so a single instance
    should not be shared between concurrent calls.
    """

    async def post(
        self,
        url: str,
        data: str,
        headers: Mapping[str, str] | None = None,
        fail_fast: bool = False,
    ) -> None:
        """POST a JSON document.

        Args:
            url: Full endpoint URL.
            data: JSON request body.
            headers: Optional headers merged into the sender's header set.
            fail_fast: Raise TransportError instead of ignoring failures.
        """
        ...


SenderFactory = Callable[[], SenderPort]
