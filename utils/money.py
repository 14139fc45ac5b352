"""
Decimal helpers shared by all analytics services.

Every ratio in the analytics API goes through these functions so that
division by zero resolves to 0 and rounding is identical everywhere.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Optional

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Any) -> Decimal:
    """
    Convert a database value to Decimal.

    None, empty strings and unparseable values become 0.
    """
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ZERO


def round_decimal(value: Decimal, places: int = 2) -> Decimal:
    """Round Decimal to specified decimal places (half up)."""
    return value.quantize(Decimal(f"0.{'0' * places}"), rounding=ROUND_HALF_UP)


def round_to_int(value: Decimal) -> int:
    """Round half up to the nearest integer."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percentage(part: Decimal, whole: Decimal) -> Decimal:
    """
    part / whole × 100, rounded to 2 places.

    Returns 0 when whole is 0.
    """
    if whole == 0:
        return round_decimal(ZERO)
    return round_decimal(part / whole * HUNDRED)


def margin_percent(purchase_price: Any, sold_price: Optional[Any]) -> Decimal:
    """
    Margin as a percentage of the sold price.

    (sold - purchase) / sold × 100, rounded to 2 places.
    0 when the sold price is missing, zero or negative.

    Args:
        purchase_price: Supplier cost per unit
        sold_price: Listing price per unit

    Returns:
        Decimal margin percent
    """
    sold = to_decimal(sold_price)
    if sold <= 0:
        return round_decimal(ZERO)
    purchase = to_decimal(purchase_price)
    return percentage(sold - purchase, sold)
