"""
Unit tests for sale arithmetic.
"""

import pytest
from decimal import Decimal
from pydantic import ValidationError as SchemaValidationError

from models.sales import SaleCorrection
from services.sales_service import apply_sale_correction, calculate_sale_totals
from exceptions import EmptySaleCorrectionError, ValidationError
from tests.factories import SaleFactory


class TestCalculateSaleTotals:

    def test_totals(self):
        totals = calculate_sale_totals(3, "12.50", "8")

        assert totals.total_sale_amount == Decimal("37.50")
        assert totals.profit == Decimal("13.50")

    def test_loss(self):
        totals = calculate_sale_totals(2, "5", "7")
        assert totals.profit == Decimal("-4.00")

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_quantity_must_be_positive(self, quantity):
        with pytest.raises(ValidationError) as exc_info:
            calculate_sale_totals(quantity, "10", "5")
        assert exc_info.value.code == "SALE_INVALID_QUANTITY"

    def test_negative_price(self):
        with pytest.raises(ValidationError) as exc_info:
            calculate_sale_totals(1, "-1", "5")
        assert exc_info.value.code == "SALE_INVALID_PRICE"

    def test_recorded_sale_needs_units(self):
        with pytest.raises(SchemaValidationError):
            SaleFactory.build(quantity_sold=0)


class TestApplySaleCorrection:

    def test_quantity_change_recomputes(self):
        sale = SaleFactory.build(quantity_sold=2, sold_price_per_unit="20", supplier_purchase_price="10")

        corrected = apply_sale_correction(sale, SaleCorrection(quantity_sold=5), "10")

        assert corrected.quantity_sold == 5
        assert corrected.total_sale_amount == Decimal("100.00")
        assert corrected.profit == Decimal("50.00")
        assert sale.quantity_sold == 2

    def test_price_change_uses_current_cost(self):
        sale = SaleFactory.build(quantity_sold=2, sold_price_per_unit="20", supplier_purchase_price="10")

        corrected = apply_sale_correction(sale, SaleCorrection(sold_price_per_unit=Decimal("25")), "12")

        assert corrected.total_sale_amount == Decimal("50.00")
        assert corrected.profit == Decimal("26.00")

    def test_empty_correction(self):
        sale = SaleFactory.build()

        with pytest.raises(EmptySaleCorrectionError):
            apply_sale_correction(sale, SaleCorrection(), "10")
