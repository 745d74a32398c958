"""
Flat form codec for the Adyen HTTP-POST adapter.

The processor represents nested structures as dot-joined keys in a
form-encoded body, e.g. ``paymentRequest.amount.value=500``. Responses use
the same shape and are regrouped by the last path segment.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote_plus, unquote_plus

from .exceptions import DecodingError, EncodingError

FlatPair = Tuple[str, str]

SCALAR_TYPES = (str, int, float, Decimal)


def stringify(path: str, value: Any) -> str:
    """Render a leaf value as the literal text the processor expects."""
    # bool is an int subclass, check it first
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, SCALAR_TYPES):
        return str(value)
    raise EncodingError(path, value)


def flatten(nested: Mapping[str, Any], prefix: Optional[str] = None) -> List[FlatPair]:
    """Flatten a nested mapping into ordered (dotted-key, value) pairs."""
    pairs: List[FlatPair] = []
    for key, value in nested.items():
        path = key if prefix is None else f"{prefix}.{key}"
        if isinstance(value, Mapping):
            pairs.extend(flatten(value, path))
        else:
            pairs.append((path, stringify(path, value)))
    return pairs


def encode_pairs(pairs: List[FlatPair]) -> str:
    return "&".join(f"{key}={quote_plus(value)}" for key, value in pairs)


def encode(nested: Mapping[str, Any]) -> str:
    """Encode a nested request into a form body. An empty mapping yields ''."""
    return encode_pairs(flatten(nested))


def parse(body: str) -> Dict[str, str]:
    """Parse a form body into a mapping of full dotted keys to values."""
    parsed: Dict[str, str] = {}
    if not body:
        return parsed

    for token in body.split("&"):
        if not token:
            continue
        if "=" not in token:
            raise DecodingError(body, token)
        key, value = token.split("=", 1)
        parsed[key] = unquote_plus(value)
    return parsed


def regroup(flat: Mapping[str, str]) -> Dict[str, str]:
    """
    Key a flat mapping by the last dotted segment only.

    Distinct paths sharing a last segment collapse into one entry and the
    pair that appears later wins.
    """
    return {key.rsplit(".", 1)[-1]: value for key, value in flat.items()}


def decode(body: str) -> Dict[str, str]:
    """Parse and regroup a response body."""
    return regroup(parse(body))
