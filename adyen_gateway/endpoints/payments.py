"""
Payment Gateway Endpoints
"""

from functools import lru_cache
from typing import Dict, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from ..config import GatewayConfig
from ..exceptions import ConfigurationError, EncodingError
from ..gateway import AdyenGateway
from ..models import CreditCard, Outcome

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/v1/payments", tags=["payments"])


@lru_cache()
def get_gateway() -> AdyenGateway:
    """Gateway built from ADYEN_* environment variables."""
    return AdyenGateway(GatewayConfig.from_env())


def gateway_dependency() -> AdyenGateway:
    try:
        return get_gateway()
    except ConfigurationError as e:
        logger.error("Gateway not configured", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Payment gateway not configured"
        )


class AddressModel(BaseModel):
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None


class CardModel(BaseModel):
    number: str = Field(..., min_length=12, max_length=19)
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2000, le=2099)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    verification_value: Optional[str] = Field(None, min_length=3, max_length=4)


class OrderOptions(BaseModel):
    order_id: str = Field(..., min_length=1, max_length=80)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    email: Optional[str] = None
    ip: Optional[str] = None
    customer: Optional[str] = None
    billing_address: Optional[AddressModel] = None
    shipping_address: Optional[AddressModel] = None

    def to_options(self) -> Dict:
        return self.model_dump(exclude_none=True, include=set(OrderOptions.model_fields))


class CardPaymentRequest(OrderOptions):
    """Authorize or purchase request"""
    amount: int = Field(..., gt=0, description="Amount in minor units")
    card: CardModel


class ModificationRequest(OrderOptions):
    """Capture or refund request against a prior authorization"""
    amount: int = Field(..., gt=0, description="Amount in minor units")
    authorization: str = Field(..., min_length=1)


class VoidRequest(OrderOptions):
    authorization: str = Field(..., min_length=1)


class OutcomeResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    authorization: Optional[str] = None
    test: bool
    params: Dict[str, str] = {}

    @classmethod
    def from_outcome(cls, outcome: Outcome) -> "OutcomeResponse":
        return cls(
            success=outcome.success,
            message=outcome.message,
            authorization=outcome.authorization,
            test=outcome.test,
            params=dict(outcome.params),
        )


def _run(operation: str, call) -> OutcomeResponse:
    try:
        outcome = call()
    except ValueError as e:
        logger.warning("Payment validation failed", operation=operation, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except EncodingError as e:
        logger.error("Payment request encoding failed", operation=operation, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Payment processing failed"
        )
    return OutcomeResponse.from_outcome(outcome)


def _credit_card(card: CardModel) -> CreditCard:
    return CreditCard(
        number=card.number.replace(" ", ""),
        month=card.month,
        year=card.year,
        first_name=card.first_name,
        last_name=card.last_name,
        verification_value=card.verification_value,
    )


@router.get("/gateway")
def gateway_info(gateway: AdyenGateway = Depends(gateway_dependency)):
    """Describe the configured processor"""
    return {
        "display_name": gateway.display_name,
        "homepage_url": gateway.homepage_url,
        "supported_countries": gateway.supported_countries,
        "supported_cardtypes": gateway.supported_cardtypes,
        "default_currency": gateway.default_currency,
        "money_format": gateway.money_format,
        "test": gateway.test,
    }


@router.post("/authorize", response_model=OutcomeResponse)
def authorize(request: CardPaymentRequest, gateway: AdyenGateway = Depends(gateway_dependency)):
    return _run(
        "authorize",
        lambda: gateway.authorize(request.amount, _credit_card(request.card), request.to_options()),
    )


@router.post("/purchase", response_model=OutcomeResponse)
def purchase(request: CardPaymentRequest, gateway: AdyenGateway = Depends(gateway_dependency)):
    return _run(
        "purchase",
        lambda: gateway.purchase(request.amount, _credit_card(request.card), request.to_options()),
    )


@router.post("/capture", response_model=OutcomeResponse)
def capture(request: ModificationRequest, gateway: AdyenGateway = Depends(gateway_dependency)):
    return _run(
        "capture",
        lambda: gateway.capture(request.amount, request.authorization, request.to_options()),
    )


@router.post("/refund", response_model=OutcomeResponse)
def refund(request: ModificationRequest, gateway: AdyenGateway = Depends(gateway_dependency)):
    return _run(
        "refund",
        lambda: gateway.refund(request.amount, request.authorization, request.to_options()),
    )


@router.post("/void", response_model=OutcomeResponse)
def void(request: VoidRequest, gateway: AdyenGateway = Depends(gateway_dependency)):
    return _run(
        "void",
        lambda: gateway.void(request.authorization, request.to_options()),
    )
