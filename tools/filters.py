"""Filtering and ordering of expense collections."""

from datetime import date
from typing import List, Optional, Sequence, Union

from models.category import ALL_CATEGORIES, Category
from models.expense import Expense

DateBound = Union[date, str, None]


def _parse_bound(bound: DateBound) -> Optional[date]:
    """Normalize a date bound; empty strings and None mean "no bound"."""
    if bound is None:
        return None
    if isinstance(bound, date):
        return bound
    bound = bound.strip()
    if not bound:
        return None
    return date.fromisoformat(bound)


def filter_expenses(
    expenses: Sequence[Expense],
    search: Optional[str] = "",
    category: Union[Category, str, None] = ALL_CATEGORIES,
    start_date: DateBound = None,
    end_date: DateBound = None,
) -> List[Expense]:
    """Return the expenses matching every active criterion, in input order.

    Args:
        expenses: Collection to filter.
        search: Case-insensitive substring of the description. Empty matches all.
        category: Category member or name; "All", None or "" matches all.
        start_date: Inclusive lower bound (date or YYYY-MM-DD); empty means none.
        end_date: Inclusive upper bound (date or YYYY-MM-DD); empty means none.

    Returns:
        New list of matching expenses.

    Raises:
        ValueError: If a date bound string is not a valid ISO date, or the
            category is not recognized.
    """
    term = (search or "").lower()
    wanted = None
    if category and category != ALL_CATEGORIES:
        wanted = Category.parse(category)
    start = _parse_bound(start_date)
    end = _parse_bound(end_date)

    result = []
    for expense in expenses:
        if term and term not in expense.description.lower():
            continue
        if wanted is not None and expense.category != wanted:
            continue
        if start is not None and expense.date < start:
            continue
        if end is not None and expense.date > end:
            continue
        result.append(expense)
    return result


def sort_by_date_desc(expenses: Sequence[Expense]) -> List[Expense]:
    """Newest first; expenses on the same date keep their relative order."""
    return sorted(expenses, key=lambda e: e.date, reverse=True)
