"""Turns validated carrier quotes into shipping options."""

from decimal import ROUND_HALF_UP, Decimal

from correios_shipping.currency import CarrierCurrency
from correios_shipping.models import CarrierSettings, ShippingOption

CENTS = Decimal("0.01")


def format_option_name(service_name: str, lead_time: int, observation: str | None = None) -> str:
    name = f"{service_name} - {lead_time} day(s)"
    if observation:
        name += f" - {observation}"
    return name


class QuoteComposer:
    """Applies markup, extra delivery days and currency to a carrier quote."""

    def __init__(self, settings: CarrierSettings, currency: CarrierCurrency):
        self.settings = settings
        self.currency = currency

    def apply_additional_fee(self, price: Decimal) -> Decimal:
        fee = Decimal(self.settings.percentage_shipping_fee)
        return price * fee if fee > 0 else price

    def delivery_days(self, lead_time: int) -> int:
        if self.settings.add_days_for_delivery > 0:
            return lead_time + self.settings.add_days_for_delivery
        return lead_time

    def option(self, rate: Decimal, service_name: str, lead_time: int,
               observation: str | None = None) -> ShippingOption:
        """Build an option from a final carrier-currency rate."""
        rate = self.currency.to_primary(Decimal(rate)).quantize(CENTS, rounding=ROUND_HALF_UP)
        return ShippingOption(name=format_option_name(service_name, lead_time, observation), rate=rate)

    def compose(self, price: Decimal, service_name: str, lead_time: int,
                observation: str | None = None) -> ShippingOption:
        return self.option(
            self.apply_additional_fee(price),
            service_name,
            self.delivery_days(lead_time),
            observation,
        )

    def fallback(self, options: list[ShippingOption]) -> ShippingOption | None:
        """The configured default option, if nothing else could be quoted.

        The default rate is final: no fee multiplier and no extra days.
        """
        settings = self.settings
        if options:
            return None
        if settings.shipping_rate_default > 0 and settings.qtd_days_for_delivery_default > 0:
            return self.option(
                settings.shipping_rate_default,
                settings.service_name_default,
                settings.qtd_days_for_delivery_default,
            )
        return None
