"""
Gateway configuration: credentials, environment selection and auth headers.
"""

from __future__ import annotations

import base64
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from .exceptions import ConfigurationError

TEST_URL = "https://pal-test.adyen.com/pal/adapter/httppost"
LIVE_URL = "https://pal-live.adyen.com/pal/adapter/httppost"

REQUIRED_CREDENTIALS = ("company", "merchant", "password")


def _env_flag(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class GatewayConfig:
    company: str
    merchant: str
    password: str
    test: bool = True
    timeout: float = 30

    def __post_init__(self):
        missing = [name for name in REQUIRED_CREDENTIALS if not getattr(self, name)]
        if missing:
            raise ConfigurationError(f"Missing required parameter: {', '.join(missing)}")

    @classmethod
    def from_dict(cls, config: Mapping) -> "GatewayConfig":
        return cls(
            company=config.get("company"),
            merchant=config.get("merchant"),
            password=config.get("password"),
            test=config.get("test", True),
            timeout=config.get("timeout", 30),
        )

    @classmethod
    def from_env(cls) -> "GatewayConfig":
        raw_timeout = os.getenv("ADYEN_TIMEOUT", "30")
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(f"Invalid ADYEN_TIMEOUT: {raw_timeout!r}") from None

        return cls(
            company=os.getenv("ADYEN_COMPANY", ""),
            merchant=os.getenv("ADYEN_MERCHANT", ""),
            password=os.getenv("ADYEN_PASSWORD", ""),
            test=_env_flag(os.getenv("ADYEN_TEST"), True),
            timeout=timeout,
        )

    @property
    def url(self) -> str:
        return TEST_URL if self.test else LIVE_URL

    def headers(self) -> Dict[str, str]:
        """Basic auth for the ws@Company.<company> web service user."""
        credentials = f"ws@Company.{self.company}:{self.password}"
        token = base64.b64encode(credentials.encode()).decode()
        return {
            "Authorization": f"Basic {token}",
            "Content-Type": "application/x-www-form-urlencoded",
        }
