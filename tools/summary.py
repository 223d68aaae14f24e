"""Spending summaries over an expense collection.

Every function here is pure: it takes the collection (and, where time matters,
an explicit ``now``) and returns derived figures without touching storage or
the system clock.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from dateutil.relativedelta import relativedelta

from models.category import Category
from models.expense import Expense

SECONDS_PER_DAY = 24 * 60 * 60
RECENT_WINDOW_DAYS = 7
SERIES_MONTHS = 6


@dataclass
class CategoryTotal:
    category: Category
    amount: Decimal


@dataclass
class CategoryShare:
    category: Category
    amount: Decimal
    percentage: float  # 0-100


@dataclass
class MonthlyAmount:
    month_label: str  # abbreviated month name, e.g. "Jan"
    amount: Decimal
    year: int
    month: int


@dataclass
class SpendingSummary:
    """Dashboard figures for a collection at a point in time."""

    total_spending: Decimal
    monthly_spending: Decimal
    last_7_days: Decimal
    category_totals: Dict[Category, Decimal]
    top_category: Optional[CategoryTotal]
    monthly_series: List[MonthlyAmount]
    expense_count: int


def _sum(expenses: Iterable[Expense]) -> Decimal:
    total = Decimal("0")
    for expense in expenses:
        total += expense.amount
    return total


def total_spending(expenses: Sequence[Expense]) -> Decimal:
    """Sum of all expense amounts."""
    return _sum(expenses)


def monthly_spending(expenses: Sequence[Expense], now: datetime) -> Decimal:
    """Sum of expenses dated in the same calendar month and year as ``now``."""
    return _sum(
        e for e in expenses if e.date.year == now.year and e.date.month == now.month
    )


def days_since(expense_date: date, now: datetime) -> float:
    """Elapsed days from midnight of ``expense_date`` to ``now``.

    Negative when the date lies after ``now``.
    """
    start = datetime(expense_date.year, expense_date.month, expense_date.day)
    return (now.replace(tzinfo=None) - start).total_seconds() / SECONDS_PER_DAY


def last_7_days_spending(expenses: Sequence[Expense], now: datetime) -> Decimal:
    """Sum of expenses at most 7.0 elapsed days old.

    The window is continuous time, not calendar days: an expense dated exactly
    seven days before ``now`` at the same time of day is included.
    """
    return _sum(e for e in expenses if days_since(e.date, now) <= RECENT_WINDOW_DAYS)


def category_totals(expenses: Sequence[Expense]) -> Dict[Category, Decimal]:
    """Per-category sums. Categories without expenses are absent."""
    totals: Dict[Category, Decimal] = {}
    for expense in expenses:
        if expense.category not in totals:
            totals[expense.category] = Decimal("0")
        totals[expense.category] += expense.amount
    return totals


def _ranked(totals: Dict[Category, Decimal]) -> List[CategoryTotal]:
    """Categories by amount, highest first; ties keep declaration order."""
    order = {category: index for index, category in enumerate(Category)}
    ranked = sorted(totals.items(), key=lambda item: (-item[1], order[item[0]]))
    return [CategoryTotal(category=c, amount=a) for c, a in ranked]


def top_category(expenses: Sequence[Expense]) -> Optional[CategoryTotal]:
    """Category with the highest total, or None for an empty collection."""
    ranked = _ranked(category_totals(expenses))
    return ranked[0] if ranked else None


def category_breakdown(expenses: Sequence[Expense]) -> List[CategoryShare]:
    """Each category's total and share of overall spending, highest first."""
    totals = category_totals(expenses)
    overall = _sum(totals.values())
    return [
        CategoryShare(
            category=entry.category,
            amount=entry.amount,
            percentage=float(entry.amount / overall * 100) if overall > 0 else 0.0,
        )
        for entry in _ranked(totals)
    ]


def monthly_series(
    expenses: Sequence[Expense], now: datetime, months: int = SERIES_MONTHS
) -> List[MonthlyAmount]:
    """Monthly totals for the trailing ``months`` calendar months.

    Returns exactly ``months`` entries, oldest first, the last one being the
    month containing ``now``. Months without expenses have amount 0.
    """
    current = date(now.year, now.month, 1)
    buckets: Dict[tuple, Decimal] = {}
    keys = []
    for offset in range(months - 1, -1, -1):
        month_start = current - relativedelta(months=offset)
        key = (month_start.year, month_start.month)
        keys.append(key)
        buckets[key] = Decimal("0")

    for expense in expenses:
        key = (expense.date.year, expense.date.month)
        if key in buckets:
            buckets[key] += expense.amount

    return [
        MonthlyAmount(
            month_label=calendar.month_abbr[month],
            amount=buckets[(year, month)],
            year=year,
            month=month,
        )
        for year, month in keys
    ]


def get_spending_summary(expenses: Sequence[Expense], now: datetime) -> SpendingSummary:
    """Compute every dashboard figure for ``expenses`` as of ``now``."""
    totals = category_totals(expenses)
    ranked = _ranked(totals)
    return SpendingSummary(
        total_spending=total_spending(expenses),
        monthly_spending=monthly_spending(expenses, now),
        last_7_days=last_7_days_spending(expenses, now),
        category_totals=totals,
        top_category=ranked[0] if ranked else None,
        monthly_series=monthly_series(expenses, now),
        expense_count=len(expenses),
    )
