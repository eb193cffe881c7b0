"""Exceptions and user-facing messages for the Correios rate engine."""

MESSAGES = {
    "no_shipment_items": "No shipment items",
    "address_not_set": "Shipping address is not set",
    "country_not_set": "Shipping country is not set",
    "state_not_set": "Shipping state is not set",
    "postal_code_not_set": "Shipping zip postal code is not set",
    "delivery_uninformed": "Delivery uninformed",
    "invalid_value_delivery": "Invalid value delivery",
}


class CorreiosError(Exception):
    """Base class for errors raised by the rate engine."""


class ConfigurationError(CorreiosError):
    """The deployment is missing a unit system or currency the carrier needs."""


class CarrierServiceError(CorreiosError):
    """A single service code could not produce a usable quote."""

    def __init__(self, message: str, service_code: str | None = None, code: str | None = None):
        self.message = message
        self.service_code = service_code
        self.code = code
        super().__init__(message)

    def __str__(self) -> str:
        if self.service_code:
            return f"[{self.service_code}] {self.message}"
        return self.message
