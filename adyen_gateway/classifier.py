"""
Outcome classification.

The processor answers with one of two shapes and no discriminant field:

- payment results keyed by ``resultCode`` / ``authCode`` / ``pspReference``
- modification results keyed by ``response``

Key presence decides which shape applies. Success rules are evaluated in
order and the first match wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Tuple

MODIFICATION_ACKNOWLEDGEMENTS = frozenset({
    "[capture-received]",
    "[cancel-received]",
    "[refund-received]",
})

Rule = Tuple[str, Callable[[Mapping[str, str]], bool]]

SUCCESS_RULES: Tuple[Rule, ...] = (
    ("auth_code_present", lambda response: "authCode" in response),
    (
        "modification_received",
        lambda response: response.get("response") in MODIFICATION_ACKNOWLEDGEMENTS,
    ),
)

NO_MATCH = "unrecognised"


@dataclass(frozen=True)
class Classification:
    success: bool
    message: Optional[str]
    rule: str


def success_rule(response: Mapping[str, str]) -> Optional[str]:
    """Name of the first success rule matching the response, if any."""
    for name, predicate in SUCCESS_RULES:
        if predicate(response):
            return name
    return None


def message_from(response: Mapping[str, str]) -> Optional[str]:
    if "resultCode" in response:
        return response["resultCode"]
    if response.get("response"):
        return response["response"]
    return None


def classify(response: Mapping[str, str]) -> Classification:
    rule = success_rule(response)
    return Classification(
        success=rule is not None,
        message=message_from(response),
        rule=rule or NO_MATCH,
    )
