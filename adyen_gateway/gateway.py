"""
Adyen gateway facade.

Builds the action-specific nested requests and hands them to the action
executor. Money is always an integer amount in minor units (cents).

Supported operations:
- authorize: Payment.authorise under ``paymentRequest``
- capture / refund: Payment.capture / Payment.refund under ``modificationRequest``
- void: Payment.cancel under ``modificationRequest``
- purchase: authorize, then capture against the returned pspReference
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import structlog

from .config import LIVE_URL, TEST_URL, GatewayConfig
from .executor import ActionExecutor
from .models import CreditCard, Outcome
from .orchestrator import run_sequence
from .transport import HttpTransport, Transport

logger = structlog.get_logger(__name__)

AUTHORISE = "Payment.authorise"
CAPTURE = "Payment.capture"
REFUND = "Payment.refund"
CANCEL = "Payment.cancel"


def compact(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop absent and empty values; the processor expects them omitted."""
    return {key: value for key, value in fields.items() if value is not None and value != ""}


def requires(options: Mapping[str, Any], *keys: str) -> None:
    for key in keys:
        if key not in options:
            raise ValueError(f"Missing required parameter: {key}")


class AdyenGateway:
    test_url = TEST_URL
    live_url = LIVE_URL

    supported_countries = ["US"]
    default_currency = "EUR"
    money_format = "cents"
    supported_cardtypes = [
        "visa", "master", "american_express", "discover",
        "diners_club", "jcb", "dankort", "maestro",
    ]

    homepage_url = "https://www.adyen.com/"
    display_name = "Adyen"

    def __init__(self, config: GatewayConfig, transport: Optional[Transport] = None):
        self.config = config
        self.transport = transport or HttpTransport(timeout=config.timeout)
        self.executor = ActionExecutor(config, self.transport, url=self.url)

    @property
    def test(self) -> bool:
        return self.config.test

    @property
    def url(self) -> str:
        return self.test_url if self.test else self.live_url

    def purchase(self, money: int, credit_card: CreditCard, options: Optional[Dict] = None) -> Outcome:
        options = options or {}
        requires(options, "order_id")

        return run_sequence([
            lambda _: self.authorize(money, credit_card, options),
            lambda authorized: self.capture(money, authorized.authorization, options),
        ])

    def authorize(self, money: int, credit_card: CreditCard, options: Optional[Dict] = None) -> Outcome:
        options = options or {}
        requires(options, "order_id")

        payment_request = self.payment_request(options)
        payment_request["amount"] = self.amount_hash(money, options.get("currency"))
        payment_request["card"] = self.credit_card_hash(credit_card)

        address = options.get("billing_address") or options.get("address")
        if address:
            payment_request["billingAddress"] = self.address_hash(address)

        if options.get("shipping_address"):
            payment_request["deliveryAddress"] = self.address_hash(options["shipping_address"])

        logger.info(
            "Authorizing payment",
            order_id=options["order_id"],
            amount=money,
            card=credit_card.masked_number(),
            card_brand=credit_card.brand,
        )
        return self.executor.execute(AUTHORISE, {"paymentRequest": payment_request})

    def capture(self, money: int, authorization: Optional[str], options: Optional[Dict] = None) -> Outcome:
        options = options or {}
        requires(options, "order_id")

        modification_request = self.modification_request(authorization)
        modification_request["modificationAmount"] = self.amount_hash(money, options.get("currency"))

        logger.info("Capturing payment", order_id=options["order_id"], reference=authorization)
        return self.executor.execute(CAPTURE, {"modificationRequest": modification_request})

    def refund(self, money: int, authorization: Optional[str], options: Optional[Dict] = None) -> Outcome:
        options = options or {}
        requires(options, "order_id")

        modification_request = self.modification_request(authorization)
        modification_request["modificationAmount"] = self.amount_hash(money, options.get("currency"))

        logger.info("Refunding payment", order_id=options["order_id"], reference=authorization)
        return self.executor.execute(REFUND, {"modificationRequest": modification_request})

    def void(self, identification: Optional[str], options: Optional[Dict] = None) -> Outcome:
        options = options or {}
        requires(options, "order_id")

        logger.info("Cancelling payment", order_id=options["order_id"], reference=identification)
        return self.executor.execute(
            CANCEL, {"modificationRequest": self.modification_request(identification)}
        )

    # Request builders

    def payment_request(self, options: Mapping[str, Any]) -> Dict[str, Any]:
        return compact({
            "merchantAccount": self.config.merchant,
            "reference": options.get("order_id"),
            "shopperEmail": options.get("email"),
            "shopperIP": options.get("ip"),
            "shopperReference": options.get("customer"),
        })

    def modification_request(self, reference: Optional[str]) -> Dict[str, Any]:
        return compact({
            "merchantAccount": self.config.merchant,
            "originalReference": reference,
        })

    def amount_hash(self, money: int, currency: Optional[str] = None) -> Dict[str, Any]:
        return {
            "currency": currency or self.default_currency,
            "value": money,
        }

    @staticmethod
    def credit_card_hash(credit_card: CreditCard) -> Dict[str, Any]:
        return compact({
            "cvc": credit_card.verification_value,
            "expiryMonth": f"{int(credit_card.month):02d}",
            "expiryYear": f"{int(credit_card.year):04d}",
            "holderName": credit_card.name,
            "number": credit_card.number,
        })

    @staticmethod
    def address_hash(address: Mapping[str, Any]) -> Dict[str, Any]:
        return compact({
            "city": address.get("city"),
            "street": address.get("address1"),
            "houseNumberOrName": address.get("address2"),
            "postalCode": address.get("zip"),
            "stateOrProvince": address.get("state"),
            "country": address.get("country"),
        })
