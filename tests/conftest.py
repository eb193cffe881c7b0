"""Shared fixtures: a scripted carrier gateway and a metric store."""

from decimal import Decimal

import pytest

from correios_shipping.base_client import CarrierGateway
from correios_shipping.engine import RateComputationEngine
from correios_shipping.models import (
    Address,
    CarrierSettings,
    LineItem,
    RawCarrierResult,
    ShipmentRequest,
)
from correios_shipping.store import MetricStore


class FakeGateway(CarrierGateway):
    """Answers from a dict of service code -> RawCarrierResult or exception."""

    def __init__(self, answers: dict):
        self.answers = answers
        self.calls = []

    def quote(self, service_code, company_code, password, origin_zip, destination_zip,
              weight, quantity, length, height, width, declared_value):
        self.calls.append({
            "service_code": service_code,
            "company_code": company_code,
            "password": password,
            "origin_zip": origin_zip,
            "destination_zip": destination_zip,
            "weight": weight,
            "quantity": quantity,
            "length": length,
            "height": height,
            "width": width,
            "declared_value": declared_value,
        })
        answer = self.answers[service_code]
        if isinstance(answer, Exception):
            raise answer
        if callable(answer):
            return answer()
        return answer


def ok_result(code: str, price: str = "20,00", lead_time: str = "5") -> RawCarrierResult:
    return RawCarrierResult(service_code=code, error="0", price=price, lead_time=lead_time)


@pytest.fixture
def settings():
    return CarrierSettings(
        postal_code_from="01001-000",
        services_offered="[04510]:[04014]:",
        percentage_shipping_fee=Decimal("1.0"),
        request_timeout=2.0,
    )


@pytest.fixture
def store():
    return MetricStore(addresses={7: Address(1, 25, "13015-904", address_id=7)})


@pytest.fixture
def items():
    return (
        LineItem(weight=Decimal("0.4"), length=Decimal("20"), width=Decimal("15"),
                 height=Decimal("5"), price=Decimal("30.00"), quantity=2),
        LineItem(weight=Decimal("1.1"), length=Decimal("30"), width=Decimal("10"),
                 height=Decimal("8"), price=Decimal("50.00")),
    )


@pytest.fixture
def request_(items):
    return ShipmentRequest(
        items=items,
        shipping_address=Address(country_id=1, state_province_id=25, zip_postal_code="20040-020"),
    )


@pytest.fixture
def make_engine(settings, store):
    def _make(answers, **changes):
        gateway = FakeGateway(answers)
        engine = RateComputationEngine.for_store(settings.replace(**changes), gateway, store)
        return engine, gateway
    return _make
