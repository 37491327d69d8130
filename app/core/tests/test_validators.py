"""Tests for shared validators."""

from decimal import Decimal

import pytest

from core.exceptions import ValidationError
from core.validators import validate_positive_amount


class TestValidatePositiveAmount:
    def test_normalizes_input(self):
        assert validate_positive_amount("250") == Decimal("250.00")

    @pytest.mark.parametrize("value", ["0", "-5.00", "0.004"])
    def test_rejects_zero_and_negative(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_positive_amount(value)
        assert exc_info.value.error_code == "INVALID_AMOUNT"

    def test_rejects_garbage_with_field_name(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_positive_amount("ten", field_name="total_amount")
        assert exc_info.value.details == {"total_amount": "ten"}

    def test_rejects_floats(self):
        with pytest.raises(ValidationError):
            validate_positive_amount(12.5)


    @pytest.mark.parametrize("value", ["1e15", "1e30"])
    def test_rejects_out_of_range_amounts(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_positive_amount(value)
        assert exc_info.value.error_code == "INVALID_AMOUNT"
