"""Adapter for the Adyen flat form-encoded HTTP-POST payment protocol."""

from .config import GatewayConfig
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    DecodingError,
    EncodingError,
    GatewayError,
    TransportError,
)
from .gateway import AdyenGateway
from .models import CreditCard, Outcome

__all__ = [
    "AdyenGateway",
    "AuthenticationError",
    "ConfigurationError",
    "CreditCard",
    "DecodingError",
    "EncodingError",
    "GatewayConfig",
    "GatewayError",
    "Outcome",
    "TransportError",
]
