import pytest
from datetime import date, datetime
from decimal import Decimal

from models.category import Category
from models.exceptions import ExpenseValidationError
from models.validation import validate_expense_input

TODAY = date(2024, 3, 10)


class TestValidateExpenseInput:
    """Tests for validate_expense_input."""

    def test_valid_text_input(self):
        """Test that text input is parsed and normalized."""
        result = validate_expense_input("2024-03-01", "12.50", "Food", "  Lunch  ", TODAY)

        assert result == (date(2024, 3, 1), Decimal("12.50"), Category.FOOD, "Lunch")

    def test_valid_typed_input(self):
        """Test that already-typed values pass through."""
        result = validate_expense_input(
            date(2024, 3, 10), Decimal("60"), Category.BILLS, "Phone", TODAY
        )

        assert result == (date(2024, 3, 10), Decimal("60"), Category.BILLS, "Phone")

    def test_datetime_is_reduced_to_date(self):
        result = validate_expense_input(
            datetime(2024, 3, 9, 18, 30), 5, "Other", "Parking", TODAY
        )

        assert result[0] == date(2024, 3, 9)

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_date(self, value):
        with pytest.raises(ExpenseValidationError) as exc_info:
            validate_expense_input(value, "5", "Food", "Lunch", TODAY)

        assert exc_info.value.errors == {"date": "Date is required"}

    def test_malformed_date(self):
        with pytest.raises(ExpenseValidationError) as exc_info:
            validate_expense_input("2024-02-30", "5", "Food", "Lunch", TODAY)

        assert exc_info.value.errors == {"date": "Date must be in YYYY-MM-DD format"}

    def test_future_date(self):
        """Test that dates after today are rejected."""
        with pytest.raises(ExpenseValidationError) as exc_info:
            validate_expense_input("2024-03-11", "5", "Food", "Lunch", TODAY)

        assert exc_info.value.errors == {"date": "Date cannot be in the future"}

    @pytest.mark.parametrize("value", [None, "", "abc", "0", "-3", "0.00", "NaN", "Infinity", True])
    def test_amount_must_be_positive(self, value):
        with pytest.raises(ExpenseValidationError) as exc_info:
            validate_expense_input("2024-03-01", value, "Food", "Lunch", TODAY)

        assert exc_info.value.errors == {"amount": "Amount must be greater than 0"}

    @pytest.mark.parametrize("value", ["0.12345678901234567891", "1e-400", "19.999"])
    def test_amount_with_too_many_decimal_places(self, value):
        """Test that amounts finer than cents are rejected."""
        with pytest.raises(ExpenseValidationError) as exc_info:
            validate_expense_input("2024-03-01", value, "Food", "Lunch", TODAY)

        assert exc_info.value.errors == {
            "amount": "Amount must have at most 2 decimal places"
        }

    def test_amount_trailing_zeros_allowed(self):
        result = validate_expense_input("2024-03-01", "12.500", "Food", "Lunch", TODAY)

        assert result[1] == Decimal("12.5")

    @pytest.mark.parametrize("value", ["1000000000000", "1e15"])
    def test_amount_too_large(self, value):
        with pytest.raises(ExpenseValidationError) as exc_info:
            validate_expense_input("2024-03-01", value, "Food", "Lunch", TODAY)

        assert exc_info.value.errors == {
            "amount": "Amount must be less than 1,000,000,000,000"
        }

    def test_unknown_category(self):
        with pytest.raises(ExpenseValidationError) as exc_info:
            validate_expense_input("2024-03-01", "5", "Groceries", "Lunch", TODAY)

        assert "category" in exc_info.value.errors
        assert "Food" in exc_info.value.errors["category"]

    @pytest.mark.parametrize("value", [None, "", "   \t"])
    def test_blank_description(self, value):
        with pytest.raises(ExpenseValidationError) as exc_info:
            validate_expense_input("2024-03-01", "5", "Food", value, TODAY)

        assert exc_info.value.errors == {"description": "Description is required"}

    def test_all_errors_reported_together(self):
        """Test that every failing field is reported in one error."""
        with pytest.raises(ExpenseValidationError) as exc_info:
            validate_expense_input("", "-1", "Nope", "", TODAY)

        assert set(exc_info.value.errors) == {"date", "amount", "category", "description"}

    def test_error_is_value_error(self):
        with pytest.raises(ValueError, match="amount"):
            validate_expense_input("2024-03-01", "0", "Food", "Lunch", TODAY)
