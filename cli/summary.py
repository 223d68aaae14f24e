#!/usr/bin/env python3

from datetime import datetime

from logger import get_logger
from tools.formatting import format_currency, render_bar
from tools.summary import category_breakdown, get_spending_summary

logger = get_logger()


def cmd_show(args, services):
    """Show the spending dashboard: headline figures and trend charts."""
    expenses = services.expenses.find_all()
    summary = get_spending_summary(expenses, datetime.now())

    logger.info("\nSpending Summary")
    logger.info("=" * 60)
    logger.info(
        f"Total Spending: {format_currency(summary.total_spending):>14}"
        f"   ({summary.expense_count} transactions)"
    )
    logger.info(f"This Month:     {format_currency(summary.monthly_spending):>14}")
    logger.info(f"Last 7 Days:    {format_currency(summary.last_7_days):>14}")
    if summary.top_category:
        logger.info(
            f"Top Category:   {summary.top_category.category.value:>14}"
            f"   ({format_currency(summary.top_category.amount)})"
        )
    else:
        logger.info(f"Top Category:   {'N/A':>14}   (No expenses yet)")

    logger.info("\nMonthly Spending (last 6 months)")
    logger.info("-" * 60)
    max_amount = max(entry.amount for entry in summary.monthly_series)
    for entry in summary.monthly_series:
        bar = render_bar(entry.amount, max_amount)
        logger.info(
            f"{entry.month_label:<5}{bar:<31}{format_currency(entry.amount):>14}"
        )

    breakdown = category_breakdown(expenses)
    if breakdown:
        logger.info("\nSpending by Category")
        logger.info("-" * 60)
        top_amount = breakdown[0].amount
        for share in breakdown:
            bar = render_bar(share.amount, top_amount, width=20)
            logger.info(
                f"{share.category.value:<16}{bar:<21}"
                f"{format_currency(share.amount):>12} {share.percentage:5.1f}%"
            )


def setup_parser(subparsers):
    """Setup summary subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "summary",
        help="Spending dashboard and trends",
        description="Show aggregate spending figures",
    )

    summary_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available summary commands",
        dest="subcommand",
        required=True,
    )

    show_parser = summary_subparsers.add_parser(
        "show", help="Show totals, top category and monthly/category charts"
    )
    show_parser.set_defaults(func=cmd_show)
