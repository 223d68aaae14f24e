"""Display formatting for amounts and dates."""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP


def format_currency(amount: Decimal) -> str:
    """Format an amount as US dollars, e.g. ``$1,234.56``."""
    cents = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if cents < 0 else ""
    return f"{sign}${abs(cents):,.2f}"


def format_date(value: date) -> str:
    """Format a date for list views, e.g. ``Jan 15, 2024``."""
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def render_bar(amount: Decimal, max_amount: Decimal, width: int = 30) -> str:
    """Text bar proportional to ``amount / max_amount``.

    The scale never drops below 1 so an all-zero series renders empty bars.
    """
    scale = max(Decimal(max_amount), Decimal("1"))
    filled = int((Decimal(amount) / scale * width).to_integral_value(rounding=ROUND_HALF_UP))
    return "#" * max(0, min(width, filled))
