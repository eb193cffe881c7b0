"""In-memory store services for a shop that keeps kg, cm and BRL."""

from decimal import Decimal

from correios_shipping.collaborators import (
    AddressService,
    Currency,
    CurrencyService,
    MeasureService,
    MeasureUnit,
    ShippingAggregator,
)
from correios_shipping.models import Address, LineItem, ShipmentRequest

DEFAULT_WEIGHT_UNITS = {"kg": MeasureUnit("kg")}
DEFAULT_DIMENSION_UNITS = {"centimeter": MeasureUnit("centimeter")}


class MetricStore(MeasureService, ShippingAggregator, AddressService, CurrencyService):
    """Store services backed by plain dicts.

    Items are stacked on top of each other: the parcel takes the widest
    width and longest length of any item, and the sum of all heights.
    """

    def __init__(
        self,
        addresses: dict[int, Address] | None = None,
        currencies: dict[str, Currency] | None = None,
        primary_currency_code: str = "BRL",
        weight_units: dict[str, MeasureUnit] | None = None,
        dimension_units: dict[str, MeasureUnit] | None = None,
    ):
        self.addresses = dict(addresses or {})
        self.currencies = dict(currencies) if currencies is not None else {"BRL": Currency("BRL")}
        self.primary_currency_code = primary_currency_code
        self.weight_units = dict(weight_units) if weight_units is not None else dict(DEFAULT_WEIGHT_UNITS)
        self.dimension_units = (
            dict(dimension_units) if dimension_units is not None else dict(DEFAULT_DIMENSION_UNITS)
        )

    def get_weight_unit(self, system_keyword: str) -> MeasureUnit | None:
        return self.weight_units.get(system_keyword)

    def get_dimension_unit(self, system_keyword: str) -> MeasureUnit | None:
        return self.dimension_units.get(system_keyword)

    def convert_weight(self, value: Decimal, unit: MeasureUnit) -> Decimal:
        return Decimal(value) * unit.ratio

    def convert_dimension(self, value: Decimal, unit: MeasureUnit) -> Decimal:
        return Decimal(value) * unit.ratio

    def get_total_weight(self, request: ShipmentRequest) -> Decimal:
        return sum((Decimal(i.weight) * i.quantity for i in request.items or ()), Decimal("0"))

    def get_dimensions(self, items: tuple[LineItem, ...]) -> tuple[Decimal, Decimal, Decimal]:
        if not items:
            return Decimal("0"), Decimal("0"), Decimal("0")
        width = max(Decimal(i.width) for i in items)
        length = max(Decimal(i.length) for i in items)
        height = sum((Decimal(i.height) * i.quantity for i in items), Decimal("0"))
        return width, length, height

    def get_address(self, address_id: int) -> Address | None:
        return self.addresses.get(address_id)

    def get_currency_by_code(self, code: str) -> Currency | None:
        return self.currencies.get(code)

    def get_primary_currency(self) -> Currency | None:
        return self.currencies.get(self.primary_currency_code)

    def convert(self, amount: Decimal, source: Currency, target: Currency) -> Decimal:
        # Exchange rates are not applied; amounts pass through unchanged.
        return amount
