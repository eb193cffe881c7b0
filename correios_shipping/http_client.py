"""HTTP rate client for a JSON price-and-lead-time endpoint."""

import logging
import os
from decimal import Decimal

import requests
from dotenv import load_dotenv

from correios_shipping.base_client import CarrierGateway
from correios_shipping.models import DEFAULT_URL, RawCarrierResult

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def _to_brl_text(value) -> str:
    """Render a JSON number the way the carrier formats prices ("22,50")."""
    if value is None:
        return ""
    if isinstance(value, (int, float)):
        return f"{Decimal(str(value)):.2f}".replace(".", ",")
    return str(value)


class HttpRateClient(CarrierGateway):
    """Client for an HTTP endpoint that quotes one service per GET.

    The endpoint receives the quote arguments as query parameters and
    answers with a JSON object carrying ``error``, ``message``, ``price``
    and ``lead_time``.
    """

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        self.url = url or os.getenv("CORREIOS_URL", DEFAULT_URL)
        self.timeout = timeout or float(os.getenv("CORREIOS_TIMEOUT", str(DEFAULT_TIMEOUT)))
        if not self.url:
            raise ValueError("CORREIOS_URL must be set either as an argument or in a .env file.")

        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def _get(self, params: dict) -> dict:
        """Make a GET request to the rate endpoint.

        Args:
            params: Query parameters.

        Returns:
            Parsed JSON response dict.
        """
        resp = self.session.get(self.url, params=params, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def quote(
        self,
        service_code: str,
        company_code: str,
        password: str,
        origin_zip: str,
        destination_zip: str,
        weight: int,
        quantity: int,
        length: Decimal,
        height: Decimal,
        width: Decimal,
        declared_value: Decimal,
    ) -> RawCarrierResult:
        params = {
            "service_code": service_code,
            "company_code": company_code or os.getenv("CORREIOS_COMPANY_CODE", ""),
            "password": password or os.getenv("CORREIOS_PASSWORD", ""),
            "origin_zip": origin_zip,
            "destination_zip": destination_zip,
            "weight": str(weight),
            "quantity": quantity,
            "length": str(length),
            "height": str(height),
            "width": str(width),
            "insured": "N",
            "declared_value": str(declared_value),
            "notice_of_receipt": "N",
        }
        logger.debug("GET %s service=%s %s -> %s", self.url, service_code, origin_zip, destination_zip)
        data = self._get(params)

        return RawCarrierResult(
            service_code=service_code,
            error=str(data.get("error") or ""),
            message=data.get("message") or "",
            price=_to_brl_text(data.get("price")),
            lead_time=str(data.get("lead_time") or ""),
        )
