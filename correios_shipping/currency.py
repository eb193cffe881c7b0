"""Conversion between the store's primary currency and the carrier's."""

from decimal import Decimal

from correios_shipping.collaborators import Currency, CurrencyService
from correios_shipping.errors import ConfigurationError

CURRENCY_CODE = "BRL"


class CarrierCurrency:
    """Moves amounts between the store currency and BRL.

    Both currencies must be configured in the store; a missing one is a
    deployment problem and raises :class:`ConfigurationError`.
    """

    def __init__(self, currency_service: CurrencyService, carrier_code: str = CURRENCY_CODE):
        self.currency_service = currency_service
        self.carrier_code = carrier_code

    def supported_currency(self) -> Currency:
        currency = self.currency_service.get_currency_by_code(self.carrier_code)
        if currency is None:
            raise ConfigurationError(
                f'Correios shipping service. Could not load "{self.carrier_code}" currency'
            )
        return currency

    def primary_currency(self) -> Currency:
        currency = self.currency_service.get_primary_currency()
        if currency is None:
            raise ConfigurationError("Correios shipping service. Primary store currency is not set")
        return currency

    def from_primary(self, amount: Decimal) -> Decimal:
        """Store currency -> carrier currency."""
        return self._convert(amount, self.primary_currency(), self.supported_currency())

    def to_primary(self, amount: Decimal) -> Decimal:
        """Carrier currency -> store currency."""
        return self._convert(amount, self.supported_currency(), self.primary_currency())

    def _convert(self, amount: Decimal, source: Currency, target: Currency) -> Decimal:
        if source.code == target.code:
            return amount
        return self.currency_service.convert(amount, source, target)
