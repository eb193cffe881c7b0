"""Abstract base class for carrier rate clients."""

from abc import ABC, abstractmethod
from decimal import Decimal

from correios_shipping.models import RawCarrierResult


class CarrierGateway(ABC):
    """Base class that all carrier rate clients must implement."""

    @abstractmethod
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
        """Ask the carrier for a price and lead time for one service.

        Args:
            service_code: Carrier service code, e.g. "04510".
            company_code: Contract company code, empty for counter rates.
            password: Contract password.
            origin_zip: Postal code the parcel ships from.
            destination_zip: Postal code the parcel ships to.
            weight: Weight in whole kilograms.
            quantity: Number of parcels.
            length: Length in centimeters.
            height: Height in centimeters.
            width: Width in centimeters.
            declared_value: Insured value in the carrier's currency.

        Returns:
            The carrier's unvalidated answer for *service_code*.

        Raises:
            Any exception on transport failure; the caller treats it as a
            failure of this service code only.
        """
