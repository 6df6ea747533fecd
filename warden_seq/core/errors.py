"""Error types raised by the Seq integration."""

from __future__ import annotations

__all__ = ["InvalidArgumentError", "TransportError"]


class InvalidArgumentError(ValueError):
    """Bad configuration or call input, raised before any I/O."""


class TransportError(Exception):
    """Delivery to Seq failed while fail-fast was enabled.

    Attributes:
        status_code: HTTP status code when a response arrived; None otherwise.
        reason: HTTP reason phrase or a short description of the failure.
    """

    def __init__(
        self,
        *,
        status_code: int | None = None,
        reason: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.reason = reason

        super().__init__(str(self))

    def __str__(self) -> str:
        if self.status_code is not None:
            return (
                f"Received invalid HTTP response with status code: {self.status_code}. "
                f"Reason phrase: {self.reason}"
            )
        if self.reason:
            return f"There was an error while posting to Seq: {self.reason}"
        return "There was an error while posting to Seq"
