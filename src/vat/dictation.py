"""Dictation sources polled for spoken sentences."""

import logging
from typing import Protocol

import httpx

logger = logging.getLogger(__name__)


class DictationSource(Protocol):
    """Something that may hold one dictated sentence."""

    async def poll(self) -> str:
        """Return the next pending sentence, or an empty string."""
        ...


class HttpDictationSource:
    """Polls an HTTP endpoint that returns at most one sentence per request."""

    def __init__(
        self,
        url: str,
        timeout: float = 2.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self._timeout = timeout
        self._transport = transport

    async def poll(self) -> str:
        """Fetch the pending sentence.

        Transport errors and non-success responses are logged and read as
        "nothing dictated".
        """
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(self.url)
        except httpx.TimeoutException:
            logger.debug("Dictation poll timed out after %ss", self._timeout)
            return ""
        except httpx.RequestError as e:
            logger.warning("Dictation poll failed: %s", e)
            return ""

        if not response.is_success:
            logger.warning("Dictation poll returned HTTP %s", response.status_code)
            return ""

        return response.text.strip()
