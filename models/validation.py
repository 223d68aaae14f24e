"""Validation of raw expense input.

Input arrives as text (CLI arguments, CSV cells) or already-typed values;
everything is checked together so that every failing field is reported at once.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Dict, Tuple, Union

from models.category import Category
from models.exceptions import ExpenseValidationError

DateInput = Union[date, str, None]
AmountInput = Union[Decimal, int, float, str, None]

AMOUNT_DECIMAL_PLACES = 2
MAX_AMOUNT = Decimal("1000000000000")
POSITIVE_AMOUNT_MESSAGE = "Amount must be greater than 0"


def validate_expense_input(
    expense_date: DateInput,
    amount: AmountInput,
    category: Union[Category, str, None],
    description: Union[str, None],
    today: date,
) -> Tuple[date, Decimal, Category, str]:
    """Validate and normalize expense fields.

    Args:
        expense_date: Date object or ISO (YYYY-MM-DD) string.
        amount: Positive amount as a number or numeric string.
        category: Category member or its display name.
        description: Free text; surrounding whitespace is trimmed.
        today: Latest allowed date.

    Returns:
        Tuple of (date, amount, category, description) ready for an Expense.

    Raises:
        ExpenseValidationError: If any field is invalid.
    """
    errors: Dict[str, str] = {}

    parsed_date = None
    if expense_date is None or (isinstance(expense_date, str) and not expense_date.strip()):
        errors["date"] = "Date is required"
    elif isinstance(expense_date, datetime):
        parsed_date = expense_date.date()
    elif isinstance(expense_date, date):
        parsed_date = expense_date
    else:
        try:
            parsed_date = date.fromisoformat(expense_date.strip())
        except ValueError:
            errors["date"] = "Date must be in YYYY-MM-DD format"
    if parsed_date is not None and parsed_date > today:
        errors["date"] = "Date cannot be in the future"
        parsed_date = None

    parsed_amount, amount_error = _parse_amount(amount)
    if amount_error:
        errors["amount"] = amount_error

    parsed_category = None
    try:
        parsed_category = Category.parse(category)
    except ValueError:
        errors["category"] = f"Category must be one of: {', '.join(Category.names())}"

    cleaned_description = (description or "").strip()
    if not cleaned_description:
        errors["description"] = "Description is required"

    if errors:
        raise ExpenseValidationError(errors)

    return parsed_date, parsed_amount, parsed_category, cleaned_description


def _parse_amount(amount: AmountInput):
    """Return (amount, None) for a valid amount, or (None, message)."""
    if amount is None or isinstance(amount, bool):
        return None, POSITIVE_AMOUNT_MESSAGE
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount).strip())
    except InvalidOperation:
        return None, POSITIVE_AMOUNT_MESSAGE
    if not value.is_finite() or value <= 0:
        return None, POSITIVE_AMOUNT_MESSAGE
    # Amounts are stored as JSON numbers; cents below this bound survive a float round trip
    if value.normalize().as_tuple().exponent < -AMOUNT_DECIMAL_PLACES:
        return None, f"Amount must have at most {AMOUNT_DECIMAL_PLACES} decimal places"
    if value >= MAX_AMOUNT:
        return None, f"Amount must be less than {MAX_AMOUNT:,}"
    return value, None
