"""Conversion of store measures into the bounds Correios accepts."""

from decimal import ROUND_CEILING, Decimal

# Units the carrier expects, resolved through the store's measure service.
WEIGHT_KEYWORD = "kg"
DIMENSION_KEYWORD = "centimeter"


def normalize_weight(total_weight, minimum: int, maximum: int) -> int:
    """Round a weight in kilograms up to a whole kilogram and clamp it.

    Out-of-range weights are quoted at the nearest bound rather than
    rejected.
    """
    weight = int(Decimal(str(total_weight)).to_integral_value(rounding=ROUND_CEILING))
    return min(max(weight, minimum), maximum)


def normalize_dimension(value, minimum, maximum) -> Decimal:
    """Clamp a dimension in centimeters into ``[minimum, maximum]``."""
    return min(max(Decimal(str(value)), Decimal(str(minimum))), Decimal(str(maximum)))
