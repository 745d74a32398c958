"""
Test configuration and fixtures for the Adyen gateway tests.
"""

from typing import Dict, List

import pytest
from faker import Faker
from fastapi.testclient import TestClient

from adyen_gateway.config import GatewayConfig
from adyen_gateway.gateway import AdyenGateway
from adyen_gateway.models import CreditCard

fake = Faker()


class StubTransport:
    """Records every call and replays queued responses in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls: List[Dict] = []

    def __call__(self, url: str, body: str, headers: Dict[str, str]) -> str:
        self.calls.append({"url": url, "body": body, "headers": headers})
        if not self.responses:
            raise AssertionError("Unexpected call to the processor")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def gateway_config():
    return GatewayConfig(company="TestCompany", merchant="TestMerchant", password="secret")


@pytest.fixture
def make_transport():
    """Factory for stub transports with queued responses."""
    return StubTransport


@pytest.fixture
def make_gateway(gateway_config):
    def factory(*responses):
        transport = StubTransport(*responses)
        return AdyenGateway(gateway_config, transport=transport), transport
    return factory


@pytest.fixture
def credit_card():
    return CreditCard(
        number="4111111111111111",
        month=8,
        year=2028,
        first_name=fake.first_name(),
        last_name=fake.last_name(),
        verification_value="737",
        brand="visa",
    )


@pytest.fixture
def order_options():
    return {
        "order_id": fake.bothify(text="order-####"),
        "email": fake.email(),
        "ip": fake.ipv4(),
        "customer": fake.uuid4(),
    }


@pytest.fixture
def billing_address():
    return {
        "address1": fake.street_name(),
        "address2": fake.building_number(),
        "city": fake.city(),
        "state": fake.state_abbr(),
        "zip": fake.postcode(),
        "country": "US",
    }


@pytest.fixture
def client():
    """Create test client."""
    from adyen_gateway.main import app

    app.dependency_overrides = {}

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides = {}
