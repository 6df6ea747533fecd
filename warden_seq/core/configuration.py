"""Seq integration configuration: immutable snapshot and fluent builder."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    InstanceOf,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from warden_seq.core.errors import InvalidArgumentError
from warden_seq.core.events import DEFAULT_SERIALIZER_OPTIONS, SerializerOptions
from warden_seq.ports.sender import SenderPort

__all__ = [
    "API_KEY_HEADER",
    "EVENTS_PATH",
    "SeqIntegrationConfiguration",
    "Builder",
]

_http_url_adapter = TypeAdapter(HttpUrl)

API_KEY_HEADER = "X-Seq-ApiKey"
EVENTS_PATH = "/api/events/raw"


class SeqIntegrationConfiguration(BaseModel):
    """Read-only configuration of the Seq integration.

    Attributes:
        uri: Raw events endpoint (base URL + /api/events/raw).
        api_key: Optional API key sent in the X-Seq-ApiKey header.
        headers: Read-only extra request headers; None when no API key was given.
        fail_fast: Raise TransportError on delivery failures.
        serializer_options: JSON rendering options for event envelopes.
        sender_factory: Produces a fresh sender for every post.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    uri: str = Field(..., min_length=1, description="Seq raw events endpoint.")
    api_key: str | None = Field(default=None, description="Optional Seq API key.")
    headers: Mapping[str, str] | None = Field(default=None, description="Extra request headers.")
    fail_fast: bool = Field(default=False, description="Raise on delivery failures.")
    serializer_options: InstanceOf[SerializerOptions] = Field(default=DEFAULT_SERIALIZER_OPTIONS)
    sender_factory: Callable[[], SenderPort]

    @field_validator("headers")
    @classmethod
    def freeze_headers(cls, v: Mapping[str, str] | None) -> Mapping[str, str] | None:
        """Wrap headers in a read-only view so the snapshot cannot be mutated.

        Args:
            v: Validated header mapping (can be None).

        Returns:
            Read-only copy of the headers, or None.
        """
        if v is None:
            return None
        return MappingProxyType(dict(v))

    @classmethod
    def create(
        cls,
        url: str,
        api_key: str | None = None,
        sender_factory: Callable[[], SenderPort] | None = None,
    ) -> Builder:
        """Start a fluent builder.

        Args:
            url: Base URL of the Seq instance (http://seq.example.com).
            api_key: Optional API key.
            sender_factory: Initial sender factory; can be replaced later.

        Returns:
            Builder for the configuration.
        """
        return Builder(url, api_key, sender_factory=sender_factory)


class Builder:
    """Fluent builder for SeqIntegrationConfiguration.

    The sender factory is supplied by the caller (the HTTP adapter provides
    the default one), so this module only depends on the sender port.
    """

    def __init__(
        self,
        url: str,
        api_key: str | None = None,
        *,
        sender_factory: Callable[[], SenderPort] | None = None,
    ) -> None:
        """Validate the URL and derive the endpoint.

        Args:
            url: Base URL of the Seq instance.
            api_key: Optional API key; blank keys are ignored.
            sender_factory: Initial sender factory.

        Raises:
            InvalidArgumentError: If the URL is empty or not an http(s) URL.
        """
        if not url:
            raise InvalidArgumentError("URL can not be empty.")
        try:
            _http_url_adapter.validate_python(url)
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid Seq URL: {url}") from e

        self._uri = f"{url}{EVENTS_PATH}"
        self._api_key: str | None = None
        self._headers: dict[str, str] | None = None
        if api_key and api_key.strip():
            self._api_key = api_key
            self._headers = {API_KEY_HEADER: api_key}

        self._fail_fast = False
        self._serializer_options = DEFAULT_SERIALIZER_OPTIONS
        self._sender_factory = sender_factory

    def with_sender_factory(self, sender_factory: Callable[[], SenderPort]) -> Builder:
        """Replace the sender factory.

        Raises:
            InvalidArgumentError: If sender_factory is None.
        """
        if sender_factory is None:
            raise InvalidArgumentError("Sender factory can not be null.")
        self._sender_factory = sender_factory
        return self

    def with_serializer_options(self, serializer_options: SerializerOptions) -> Builder:
        """Replace the default JSON serializer options.

        Raises:
            InvalidArgumentError: If serializer_options is None.
        """
        if serializer_options is None:
            raise InvalidArgumentError("Serializer options can not be null.")
        self._serializer_options = serializer_options
        return self

    def fail_fast(self) -> Builder:
        """Raise TransportError when posting fails (off by default)."""
        self._fail_fast = True
        return self

    def build(self) -> SeqIntegrationConfiguration:
        """Return the immutable configuration snapshot.

        Raises:
            InvalidArgumentError: If no sender factory was provided.
        """
        if self._sender_factory is None:
            raise InvalidArgumentError("Sender factory has not been provided.")
        return SeqIntegrationConfiguration(
            uri=self._uri,
            api_key=self._api_key,
            headers=self._headers,
            fail_fast=self._fail_fast,
            serializer_options=self._serializer_options,
            sender_factory=self._sender_factory,
        )
