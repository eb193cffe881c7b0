"""Builds one rate request per enabled Correios service."""

import logging
from dataclasses import dataclass
from decimal import Decimal

from correios_shipping.collaborators import (
    AddressService,
    MeasureService,
    MeasureUnit,
    ShippingAggregator,
)
from correios_shipping.currency import CarrierCurrency
from correios_shipping.errors import ConfigurationError
from correios_shipping.models import CarrierSettings, LineItem, ShipmentRequest
from correios_shipping.units import (
    DIMENSION_KEYWORD,
    WEIGHT_KEYWORD,
    normalize_dimension,
    normalize_weight,
)

logger = logging.getLogger(__name__)

# Correios refuses declared values above this amount (BRL).
MAXIMUM_DECLARED_VALUE = Decimal("3000.0")


@dataclass(frozen=True)
class RateRequest:
    """Arguments for a single CarrierGateway.quote call."""

    service_code: str
    company_code: str
    password: str
    origin_zip: str
    destination_zip: str
    weight: int
    length: Decimal
    height: Decimal
    width: Decimal
    declared_value: Decimal
    quantity: int = 1

    def as_kwargs(self) -> dict:
        return {
            "service_code": self.service_code,
            "company_code": self.company_code,
            "password": self.password,
            "origin_zip": self.origin_zip,
            "destination_zip": self.destination_zip,
            "weight": self.weight,
            "quantity": self.quantity,
            "length": self.length,
            "height": self.height,
            "width": self.width,
            "declared_value": self.declared_value,
        }


class RateRequestBuilder:
    """Turns a shipment into carrier-ready rate requests."""

    def __init__(
        self,
        settings: CarrierSettings,
        measure_service: MeasureService,
        aggregator: ShippingAggregator,
        address_service: AddressService,
        currency: CarrierCurrency,
    ):
        self.settings = settings
        self.measure_service = measure_service
        self.aggregator = aggregator
        self.address_service = address_service
        self.currency = currency

    def build(self, request: ShipmentRequest) -> list[RateRequest]:
        """Return one RateRequest per enabled service code.

        Raises:
            ConfigurationError: the kg/centimeter units or the BRL currency
                are not configured in the store.
        """
        origin_zip = self.get_origin_zip(request)
        width, length, height = self.get_dimensions(request)
        weight = self.get_weight(request)
        declared_value = self.get_declared_value(request)

        settings = self.settings
        return [
            RateRequest(
                service_code=code,
                company_code=settings.company_code or "",
                password=settings.password or "",
                origin_zip=origin_zip,
                destination_zip=request.shipping_address.zip_postal_code,
                weight=weight,
                length=length,
                height=height,
                width=width,
                declared_value=declared_value,
            )
            for code in settings.enabled_services
        ]

    def get_origin_zip(self, request: ShipmentRequest) -> str:
        """Warehouse address zip, then the request's own zip, then settings."""
        warehouse = request.warehouse_from
        if warehouse is not None and warehouse.address_id is not None:
            address = self.address_service.get_address(warehouse.address_id)
            if address is not None and address.zip_postal_code:
                return address.zip_postal_code
        if request.zip_postal_code_from:
            return request.zip_postal_code_from
        return self.settings.postal_code_from

    def get_declared_value(self, request: ShipmentRequest) -> Decimal:
        # Unit prices are summed without multiplying by quantity.
        total = sum((Decimal(item.price) for item in request.items), Decimal("0"))
        declared_value = self.currency.from_primary(total)
        return max(declared_value, Decimal(self.settings.declared_minimum_value))

    def get_weight(self, request: ShipmentRequest) -> int:
        unit = self._weight_unit()
        total = self.measure_service.convert_weight(self.aggregator.get_total_weight(request), unit)
        return normalize_weight(total, self.settings.minimum_weight, self.settings.maximum_weight)

    def get_dimensions(self, request: ShipmentRequest) -> tuple[Decimal, Decimal, Decimal]:
        """Return ``(width, length, height)`` in centimeters within bounds."""
        unit = self._dimension_unit()
        settings = self.settings
        width, length, height = self.aggregator.get_dimensions(request.items)

        length = normalize_dimension(
            self.measure_service.convert_dimension(length, unit),
            settings.minimum_length, settings.maximum_length,
        )
        height = normalize_dimension(
            self.measure_service.convert_dimension(height, unit),
            settings.minimum_height, settings.maximum_height,
        )
        width = normalize_dimension(
            self.measure_service.convert_dimension(width, unit),
            settings.minimum_width, settings.maximum_width,
        )
        return width, length, height

    def deny_product_shipping(self, items: list[LineItem]) -> bool:
        """Return True when Correios cannot carry these items at all.

        That is the case when any single item exceeds a maximum dimension,
        or when the items' declared value is above what Correios insures.
        """
        unit = self._dimension_unit()
        settings = self.settings
        for item in items:
            length = self.measure_service.convert_dimension(item.length, unit)
            height = self.measure_service.convert_dimension(item.height, unit)
            width = self.measure_service.convert_dimension(item.width, unit)
            if (
                length > settings.maximum_length
                or height > settings.maximum_height
                or width > settings.maximum_width
            ):
                logger.debug("Item exceeds Correios dimensions: %s x %s x %s", length, width, height)
                return True

        total = sum((Decimal(item.price) for item in items), Decimal("0"))
        return self.currency.from_primary(total) > MAXIMUM_DECLARED_VALUE

    def _weight_unit(self) -> MeasureUnit:
        unit = self.measure_service.get_weight_unit(WEIGHT_KEYWORD)
        if unit is None:
            raise ConfigurationError(
                f'Correios shipping service. Could not load "{WEIGHT_KEYWORD}" measure weight'
            )
        return unit

    def _dimension_unit(self) -> MeasureUnit:
        unit = self.measure_service.get_dimension_unit(DIMENSION_KEYWORD)
        if unit is None:
            raise ConfigurationError(
                f'Correios shipping service. Could not load "{DIMENSION_KEYWORD}" measure dimension'
            )
        return unit
