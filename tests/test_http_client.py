"""Tests for the HTTP rate client."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from correios_shipping.http_client import HttpRateClient


def _quote(client, **overrides):
    kwargs = {
        "service_code": "04510",
        "company_code": "",
        "password": "",
        "origin_zip": "01001-000",
        "destination_zip": "20040-020",
        "weight": 2,
        "quantity": 1,
        "length": Decimal("30"),
        "height": Decimal("18"),
        "width": Decimal("15"),
        "declared_value": Decimal("80.00"),
    }
    kwargs.update(overrides)
    return client.quote(**kwargs)


@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return session


def _respond(session, payload):
    response = MagicMock()
    response.json.return_value = payload
    session.get.return_value = response
    return response


class TestHttpRateClient:

    def test_maps_json_into_raw_result(self, session):
        _respond(session, {"error": "0", "message": "", "price": "20,50", "lead_time": 5})
        client = HttpRateClient(url="https://rates.example.com/quote", timeout=3, session=session)

        raw = _quote(client)

        assert raw.service_code == "04510"
        assert raw.error == "0"
        assert raw.price == "20,50"
        assert raw.lead_time == "5"

    def test_numeric_price_rendered_in_brl_format(self, session):
        _respond(session, {"price": 1234.5, "lead_time": "3"})
        client = HttpRateClient(url="https://rates.example.com/quote", session=session)
        assert _quote(client).price == "1234,50"

    def test_sends_parameters_and_timeout(self, session):
        _respond(session, {"price": "20,50", "lead_time": "5"})
        client = HttpRateClient(url="https://rates.example.com/quote", timeout=3, session=session)

        _quote(client, company_code="08082650", password="secret")

        args, kwargs = session.get.call_args
        assert args == ("https://rates.example.com/quote",)
        assert kwargs["timeout"] == 3
        params = kwargs["params"]
        assert params["service_code"] == "04510"
        assert params["company_code"] == "08082650"
        assert params["weight"] == "2"
        assert params["declared_value"] == "80.00"
        assert params["insured"] == "N"

    def test_http_error_propagates(self, session):
        response = _respond(session, {})
        response.raise_for_status.side_effect = requests.HTTPError("503 Server Error")
        client = HttpRateClient(url="https://rates.example.com/quote", session=session)
        with pytest.raises(requests.HTTPError):
            _quote(client)

    def test_carrier_error_fields(self, session):
        _respond(session, {"error": "-3", "message": "CEP de destino invalido."})
        client = HttpRateClient(url="https://rates.example.com/quote", session=session)
        raw = _quote(client)
        assert raw.error == "-3"
        assert raw.message == "CEP de destino invalido."
        assert raw.price == ""
        assert raw.lead_time == ""

    def test_requested_service_code_kept(self, session):
        """Test the result belongs to the requested service, whatever the endpoint echoes."""
        _respond(session, {"service_code": "04014", "error": "0", "price": "20,50", "lead_time": "5"})
        client = HttpRateClient(url="https://rates.example.com/quote", session=session)
        assert _quote(client, service_code="04510").service_code == "04510"
