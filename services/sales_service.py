"""
Sale arithmetic.

Stored sale rows carry total_sale_amount and profit. These helpers are
what the sale CRUD endpoints use to fill them in, both when a sale is
recorded and when an administrator corrects quantity or price, so the
analytics sums always agree with quantity × price.
"""

from decimal import Decimal
from typing import Any

from models.sales import SaleEvent, SaleTotals, SaleCorrection
from utils.money import round_decimal, to_decimal
from exceptions import EmptySaleCorrectionError, ValidationError


def calculate_sale_totals(quantity: int, unit_price: Any, purchase_price: Any) -> SaleTotals:
    """
    Total and profit for a sale.

    total  = quantity × unit price
    profit = (unit price - purchase price) × quantity

    Raises:
        ValidationError: If quantity is not positive or a price is negative
    """
    if quantity <= 0:
        raise ValidationError(
            "Quantity sold must be positive",
            code="SALE_INVALID_QUANTITY",
            details={"quantity_sold": quantity}
        )

    price = to_decimal(unit_price)
    cost = to_decimal(purchase_price)
    if price < 0 or cost < 0:
        raise ValidationError(
            "Prices must not be negative",
            code="SALE_INVALID_PRICE",
            details={"sold_price_per_unit": str(price), "supplier_purchase_price": str(cost)}
        )

    qty = Decimal(quantity)
    return SaleTotals(
        total_sale_amount=round_decimal(price * qty),
        profit=round_decimal((price - cost) * qty),
    )


def apply_sale_correction(
    sale: SaleEvent,
    correction: SaleCorrection,
    purchase_price: Any
) -> SaleEvent:
    """
    Return a copy of the sale with the correction applied.

    Quantity and price fall back to the recorded values when not
    provided; total and profit are always recomputed.

    Raises:
        EmptySaleCorrectionError: If neither field is provided
    """
    if correction.quantity_sold is None and correction.sold_price_per_unit is None:
        raise EmptySaleCorrectionError(str(sale.id))

    quantity = correction.quantity_sold if correction.quantity_sold is not None else sale.quantity_sold
    price = (
        correction.sold_price_per_unit
        if correction.sold_price_per_unit is not None
        else sale.sold_price_per_unit
    )
    totals = calculate_sale_totals(quantity, price, purchase_price)

    return sale.model_copy(update={
        "quantity_sold": quantity,
        "sold_price_per_unit": price,
        "total_sale_amount": totals.total_sale_amount,
        "profit": totals.profit,
        "supplier_purchase_price": to_decimal(purchase_price),
    })
