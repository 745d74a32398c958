"""
Domain value objects shared by the gateway, executor and orchestrator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class Outcome:
    """Normalized result of one gateway action. ``params`` is a read-only view."""

    success: bool
    message: Optional[str]
    params: Mapping[str, str] = field(default_factory=dict)
    authorization: Optional[str] = None
    test: bool = False

    def __post_init__(self):
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))


@dataclass
class CreditCard:
    number: str
    month: int
    year: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    verification_value: Optional[str] = None
    brand: Optional[str] = None

    @property
    def name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @property
    def last_digits(self) -> str:
        return self.number[-4:]

    def masked_number(self) -> str:
        """Return masked PAN for display"""
        return f"{self.number[:6]}******{self.last_digits}"
