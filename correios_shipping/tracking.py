"""Shipment tracking for Correios parcels."""

import re

TRACKING_URL = "https://melhorrastreio.com.br/rastreio/{tracking_number}"

# UPU S10 identifiers: two letters, eight digits plus a check digit, country.
_TRACKING_RE = re.compile(r"^[A-Z]{2}\d{9}[A-Z]{2}$")


class CorreiosShipmentTracker:
    """Builds tracking links for Correios tracking numbers."""

    def is_match(self, tracking_number: str) -> bool:
        if not tracking_number:
            return False
        return bool(_TRACKING_RE.match(tracking_number.strip().upper()))

    def get_url(self, tracking_number: str) -> str:
        return TRACKING_URL.format(tracking_number=tracking_number.strip())

    def get_shipment_events(self, tracking_number: str) -> list[dict]:
        """Tracking events are not fetched; the tracking page shows them."""
        return []
