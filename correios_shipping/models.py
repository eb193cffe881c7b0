"""Shared data models for the Correios shipping rate engine."""

import os
from dataclasses import dataclass, field, replace
from decimal import Decimal

from dotenv import load_dotenv

from correios_shipping.services import decode_services, is_service_enabled

DEFAULT_URL = "http://ws.correios.com.br/calculador/CalcPrecoPrazo.asmx"


@dataclass(frozen=True)
class LineItem:
    """A product line being shipped, measured in the store's primary units."""

    weight: Decimal
    length: Decimal
    width: Decimal
    height: Decimal
    price: Decimal
    quantity: int = 1


@dataclass(frozen=True)
class Address:
    """A postal address as referenced by the store."""

    country_id: int | None
    state_province_id: int | None
    zip_postal_code: str | None
    address_id: int | None = None


@dataclass(frozen=True)
class Warehouse:
    """A shipping origin with an address kept by the store."""

    warehouse_id: int
    address_id: int | None = None


@dataclass(frozen=True)
class ShipmentRequest:
    """Everything needed to quote one shipment."""

    items: tuple[LineItem, ...] | None
    shipping_address: Address | None
    zip_postal_code_from: str | None = None
    warehouse_from: Warehouse | None = None


@dataclass(frozen=True)
class CarrierSettings:
    """Operator configuration for the Correios carrier.

    Instances are immutable and may be shared between concurrent quoting
    calls. Use ``dataclasses.replace`` (or :meth:`replace`) to derive a
    modified copy.
    """

    url: str = DEFAULT_URL
    company_code: str = ""
    password: str = ""
    postal_code_from: str = ""
    add_days_for_delivery: int = 0
    percentage_shipping_fee: Decimal = Decimal("1.0")
    declared_minimum_value: Decimal = Decimal("19.5")
    minimum_weight: int = 1
    maximum_weight: int = 30
    minimum_length: Decimal = Decimal("16.0")
    maximum_length: Decimal = Decimal("105.0")
    minimum_width: Decimal = Decimal("11.0")
    maximum_width: Decimal = Decimal("105.0")
    minimum_height: Decimal = Decimal("2.0")
    maximum_height: Decimal = Decimal("105.0")
    service_name_default: str = ""
    shipping_rate_default: Decimal = Decimal("0")
    qtd_days_for_delivery_default: int = 0
    services_offered: str = ""
    request_timeout: float = 10.0

    @property
    def enabled_services(self) -> list[str]:
        """Service codes decoded from ``services_offered``, in stored order."""
        return decode_services(self.services_offered)

    def offers(self, service_code: str) -> bool:
        return is_service_enabled(self.services_offered, service_code)

    def replace(self, **changes) -> "CarrierSettings":
        return replace(self, **changes)

    @classmethod
    def from_env(cls, **overrides) -> "CarrierSettings":
        """Build settings from ``CORREIOS_*`` environment variables.

        A ``.env`` file in the working directory is loaded first. Keyword
        arguments that are not ``None`` take precedence over the environment.
        """
        load_dotenv()
        values = {
            "url": os.getenv("CORREIOS_URL", DEFAULT_URL),
            "company_code": os.getenv("CORREIOS_COMPANY_CODE", ""),
            "password": os.getenv("CORREIOS_PASSWORD", ""),
            "postal_code_from": os.getenv("CORREIOS_POSTAL_CODE_FROM", ""),
            "services_offered": os.getenv("CORREIOS_SERVICES_OFFERED", ""),
            "add_days_for_delivery": int(os.getenv("CORREIOS_ADD_DAYS", "0")),
            "percentage_shipping_fee": Decimal(os.getenv("CORREIOS_FEE_MULTIPLIER", "1.0")),
            "service_name_default": os.getenv("CORREIOS_DEFAULT_SERVICE_NAME", ""),
            "shipping_rate_default": Decimal(os.getenv("CORREIOS_DEFAULT_RATE", "0")),
            "qtd_days_for_delivery_default": int(os.getenv("CORREIOS_DEFAULT_DAYS", "0")),
            "request_timeout": float(os.getenv("CORREIOS_TIMEOUT", "10")),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass(frozen=True)
class RawCarrierResult:
    """What the carrier reported for one service code, before validation."""

    service_code: str
    error: str = ""
    message: str = ""
    price: str = ""
    lead_time: str = ""


@dataclass(frozen=True)
class ShippingOption:
    """A priced, labelled option offered to the customer."""

    name: str
    rate: Decimal

    def __post_init__(self):
        if self.rate < 0:
            raise ValueError(f"Shipping rate cannot be negative: {self.rate}")


@dataclass
class ShippingOptionResponse:
    """Result of a quoting call: errors and the options that survived."""

    errors: list[str] = field(default_factory=list)
    shipping_options: list[ShippingOption] = field(default_factory=list)

    def add_error(self, message: str):
        self.errors.append(message)

    @property
    def success(self) -> bool:
        return not self.errors
