"""
Gateway exceptions.

Only EncodingError is expected to reach callers of the gateway; transport and
decoding failures are folded into failure outcomes by the action executor.
"""

from __future__ import annotations

from typing import Optional


class GatewayError(Exception):
    """Base class for all gateway errors."""


class ConfigurationError(GatewayError, ValueError):
    """Required gateway credentials are missing or invalid."""


class EncodingError(GatewayError):
    """A request tree contains a leaf that cannot be flattened."""

    def __init__(self, path: str, value: object):
        self.path = path
        self.value = value
        super().__init__(
            f"Cannot encode value of type {type(value).__name__} at '{path}'"
        )


class DecodingError(GatewayError):
    """A response body is not valid flat form encoding."""

    def __init__(self, body: str, token: Optional[str] = None):
        self.body = body
        self.token = token
        super().__init__(f"Malformed response pair: {token!r}")


class TransportError(GatewayError):
    """The processor answered with a non-2xx status or could not be reached."""

    def __init__(self, status_code: Optional[int], body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP {status_code}: {body}")


class AuthenticationError(TransportError):
    """The processor rejected the credentials (HTTP 401)."""

    def __init__(self, body: str = ""):
        super().__init__(401, body)
