"""Store-side services the rate engine depends on.

The engine never owns measures, addresses or currencies; the hosting
store supplies an implementation of each interface below.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from correios_shipping.models import Address, LineItem, ShipmentRequest


@dataclass(frozen=True)
class MeasureUnit:
    """A unit of weight or dimension known to the store."""

    system_keyword: str
    ratio: Decimal = Decimal("1")


@dataclass(frozen=True)
class Currency:
    code: str
    rate: Decimal = Decimal("1")


class MeasureService(ABC):
    """Resolves units by keyword and converts from the store's primary units."""

    @abstractmethod
    def get_weight_unit(self, system_keyword: str) -> MeasureUnit | None:
        """Return the weight unit for *system_keyword*, or None if unknown."""

    @abstractmethod
    def get_dimension_unit(self, system_keyword: str) -> MeasureUnit | None:
        """Return the dimension unit for *system_keyword*, or None if unknown."""

    @abstractmethod
    def convert_weight(self, value: Decimal, unit: MeasureUnit) -> Decimal:
        """Convert a weight from the primary weight unit into *unit*."""

    @abstractmethod
    def convert_dimension(self, value: Decimal, unit: MeasureUnit) -> Decimal:
        """Convert a dimension from the primary dimension unit into *unit*."""


class ShippingAggregator(ABC):
    """Aggregates line items into a single parcel."""

    @abstractmethod
    def get_total_weight(self, request: ShipmentRequest) -> Decimal:
        """Total weight of the request, in the primary weight unit."""

    @abstractmethod
    def get_dimensions(self, items: tuple[LineItem, ...]) -> tuple[Decimal, Decimal, Decimal]:
        """Return the parcel's ``(width, length, height)`` in the primary unit."""


class AddressService(ABC):

    @abstractmethod
    def get_address(self, address_id: int) -> Address | None:
        """Look up a stored address, or None if it does not exist."""


class CurrencyService(ABC):
    """Currency lookup and conversion.

    ``convert`` is the seam for cross-currency pricing. Implementations
    may leave it as a pass-through.
    """

    @abstractmethod
    def get_currency_by_code(self, code: str) -> Currency | None:
        """Return the currency with ISO *code*, or None if not configured."""

    @abstractmethod
    def get_primary_currency(self) -> Currency | None:
        """Return the store's primary pricing currency."""

    @abstractmethod
    def convert(self, amount: Decimal, source: Currency, target: Currency) -> Decimal:
        """Convert *amount* from *source* into *target*."""
