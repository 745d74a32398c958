"""
Single-action round trip against the processor.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import structlog

from . import codec
from .classifier import classify
from .config import GatewayConfig
from .exceptions import DecodingError, TransportError
from .models import Outcome
from .transport import Transport

logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials."


class ActionExecutor:
    """
    Owns the request/response cycle for one named action:

    1. Prepend the ``action`` field to the nested request
    2. Flatten and form-encode it
    3. POST it through the transport with the gateway's auth headers
    4. Decode and classify the flat response

    Every call returns an Outcome. Transport and decoding failures become
    failure outcomes, as does any other error a transport raises; only
    EncodingError, raised before anything is sent, reaches the caller.
    """

    def __init__(self, config: GatewayConfig, transport: Transport, url: Optional[str] = None):
        self.config = config
        self.transport = transport
        self.url = url or config.url

    def build_body(self, action: str, request: Mapping[str, Any]) -> str:
        # ``action`` is reserved: the action name always wins over a request key
        fields = {"action": action}
        fields.update((key, value) for key, value in request.items() if key != "action")
        return codec.encode(fields)

    def execute(
        self,
        action: str,
        request: Mapping[str, Any],
        transport: Optional[Transport] = None,
    ) -> Outcome:
        body = self.build_body(action, request)
        send = transport if transport is not None else self.transport

        try:
            raw_response = send(self.url, body, self.config.headers())
        except TransportError as e:
            return self._transport_failure(action, e)
        except Exception as e:
            logger.error("Processor transport raised", action=action, error=str(e))
            return self._failure(str(e))

        try:
            response = codec.decode(raw_response)
        except DecodingError as e:
            logger.warning("Malformed processor response", action=action, token=e.token)
            return self._failure(raw_response)

        classification = classify(response)
        outcome = Outcome(
            success=classification.success,
            message=classification.message,
            params=response,
            authorization=response.get("pspReference"),
            test=self.config.test,
        )

        logger.info(
            "Processor action completed",
            action=action,
            success=outcome.success,
            rule=classification.rule,
            psp_reference=outcome.authorization,
        )
        return outcome

    def _transport_failure(self, action: str, error: TransportError) -> Outcome:
        logger.warning(
            "Processor action rejected",
            action=action,
            status_code=error.status_code,
        )
        if error.status_code == 401:
            return self._failure(INVALID_CREDENTIALS)
        return self._failure(error.body)

    def _failure(self, message: Optional[str]) -> Outcome:
        return Outcome(
            success=False,
            message=message,
            params={},
            test=self.config.test,
        )
