"""
HTTP transport for the processor endpoint.

A transport is any callable ``(url, body, headers) -> str`` that raises
TransportError on non-2xx answers or network failures. HttpTransport is the
httpx-backed default; tests substitute plain functions.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

import httpx
import structlog

from .exceptions import AuthenticationError, TransportError

logger = structlog.get_logger(__name__)

Transport = Callable[[str, str, Dict[str, str]], str]


class HttpTransport:
    """Blocking form POST over httpx. No retries are attempted."""

    def __init__(self, timeout: float = 30, client: Optional[httpx.Client] = None):
        self.timeout = timeout
        self._client = client

    def __call__(self, url: str, body: str, headers: Dict[str, str]) -> str:
        return self.send(url, body, headers)

    def send(self, url: str, body: str, headers: Dict[str, str]) -> str:
        if self._client is not None:
            return self._post(self._client, url, body, headers)
        with httpx.Client(timeout=self.timeout) as client:
            return self._post(client, url, body, headers)

    def _post(self, client: httpx.Client, url: str, body: str, headers: Dict[str, str]) -> str:
        try:
            response = client.post(url, content=body, headers=headers)
        except httpx.TimeoutException as e:
            logger.warning("Processor request timed out", url=url)
            raise TransportError(None, f"Request timeout: {e}") from e
        except httpx.HTTPError as e:
            logger.warning("Processor request failed", url=url, error=str(e))
            raise TransportError(None, f"HTTP error: {e}") from e

        if response.status_code == 401:
            raise AuthenticationError(response.text)
        if not response.is_success:
            raise TransportError(response.status_code, response.text)
        return response.text
