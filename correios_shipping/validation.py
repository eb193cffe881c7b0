"""Validation of raw per-service carrier results."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from correios_shipping.errors import MESSAGES, CarrierServiceError
from correios_shipping.models import RawCarrierResult

SUCCESS_CODE = "0"

# Carrier errors that still come with a usable price and lead time.
ADVISORY_CODES = frozenset({"009", "010", "011"})


@dataclass(frozen=True)
class ServiceOutcome:
    """Either a validated quote or the error that ruled the service out."""

    service_code: str
    price: Decimal | None = None
    lead_time: int | None = None
    observation: str | None = None
    error: CarrierServiceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, service_code: str, message: str, code: str | None = None) -> "ServiceOutcome":
        return cls(service_code=service_code, error=CarrierServiceError(message, service_code, code))


def parse_brl_decimal(text) -> Decimal:
    """Parse a pt-BR formatted number such as ``"1.234,56"``.

    Numbers that are already numeric are taken as they are.
    """
    if isinstance(text, (int, float, Decimal)):
        cleaned = str(text)
    else:
        cleaned = str(text or "").strip().replace(".", "").replace(",", ".")
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Not a pt-BR decimal: {text!r}") from None
    if not value.is_finite():
        raise ValueError(f"Not a pt-BR decimal: {text!r}")
    return value


def parse_lead_time(text) -> int:
    if isinstance(text, (int, float, Decimal)):
        return int(text)
    return int(str(text or "").strip())


def validate(raw: RawCarrierResult) -> ServiceOutcome:
    """Classify a raw carrier result.

    Checks run in order: carrier error code, lead time, price. Advisory
    codes keep the result and carry the carrier's message forward as an
    observation.
    """
    code = raw.service_code
    observation = None
    error = str(raw.error or "")
    if error and error != SUCCESS_CODE:
        if error not in ADVISORY_CODES:
            return ServiceOutcome.failed(code, f"{error} - {raw.message}", error)
        observation = raw.message

    try:
        lead_time = parse_lead_time(raw.lead_time)
    except (ValueError, OverflowError):
        lead_time = 0
    if lead_time <= 0:
        return ServiceOutcome.failed(code, MESSAGES["delivery_uninformed"])

    try:
        price = parse_brl_decimal(raw.price)
    except ValueError:
        price = Decimal("0")
    if price <= 0:
        return ServiceOutcome.failed(code, MESSAGES["invalid_value_delivery"])

    return ServiceOutcome(service_code=code, price=price, lead_time=lead_time, observation=observation)
