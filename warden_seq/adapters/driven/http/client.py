"""HTTP sender adapter for the Seq raw events endpoint."""

import logging
from collections.abc import Mapping

import aiohttp

from warden_seq.core.errors import TransportError
from warden_seq.ports.sender import SenderPort

__all__ = ["SeqService", "upsert_header", "CONTENT_TYPE"]

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json; charset=utf-8"


def upsert_header(headers: dict[str, str], name: str, value: str) -> dict[str, str]:
    """Set a header, replacing any existing one with the same name.

    Names are compared case-insensitively, so repeated calls never leave
    duplicates behind.

    Args:
        headers: Header map to update in place.
        name: Header name.
        value: Header value.

    Returns:
        The same (updated) header map.
    """
    for existing in [key for key in headers if key.casefold() == name.casefold()]:
        del headers[existing]
    headers[name] = value
    return headers


class SeqService(SenderPort):
    """Posts event envelopes to Seq with aiohttp.

    Features:
    - Persistent header set, merged on every call.
    - Optional shared session; otherwise a short-lived session per request.
    - Fail-fast switch: raise TransportError or log and carry on.

    Not safe to share between concurrent calls; create one per post.
    """

    def __init__(self, session: aiohttp.ClientSession | None = None) -> None:
        """Initialize the sender.

        Args:
            session: Optional session to reuse. The caller keeps ownership.
        """
        self.session = session
        self.headers: dict[str, str] = {}

    async def post(
        self,
        url: str,
        data: str,
        headers: Mapping[str, str] | None = None,
        fail_fast: bool = False,
    ) -> None:
        """Send one POST request with a JSON body.

        Args:
            url: Full endpoint URL.
            data: JSON request body.
            headers: Optional headers merged into the persistent header set.
            fail_fast: Raise TransportError instead of ignoring failures.

        Raises:
            TransportError: On a non-2xx response or a transport error, only
                when fail_fast is True.
        """
        self._set_request_headers(headers)

        try:
            status, reason = await self._send(url, data)
        except Exception as e:
            if not fail_fast:
                logger.warning(f"Posting events to {url} failed: {e!r}")
                return
            raise TransportError(reason=repr(e)) from e

        if 200 <= status < 300:
            logger.debug(f"Posted events to {url}, status {status}")
            return
        if not fail_fast:
            logger.warning(f"Seq at {url} rejected events with status {status} ({reason})")
            return

        raise TransportError(status_code=status, reason=reason)

    def _set_request_headers(self, headers: Mapping[str, str] | None) -> None:
        if not headers:
            return
        for name, value in headers.items():
            upsert_header(self.headers, name, value)

    async def _send(self, url: str, data: str) -> tuple[int, str | None]:
        if self.session is not None:
            return await self._post_with(self.session, url, data)

        async with aiohttp.ClientSession() as session:
            return await self._post_with(session, url, data)

    async def _post_with(
        self,
        session: aiohttp.ClientSession,
        url: str,
        data: str,
    ) -> tuple[int, str | None]:
        request_headers = upsert_header(dict(self.headers), "Content-Type", CONTENT_TYPE)
        async with session.post(url, data=data.encode("utf-8"), headers=request_headers) as resp:
            return resp.status, resp.reason
