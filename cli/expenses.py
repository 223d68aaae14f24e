#!/usr/bin/env python3

import sys
from datetime import date
from pathlib import Path

from logger import get_logger
from models.category import ALL_CATEGORIES, Category
from models.exceptions import ExpenseNotFoundError, ExpenseValidationError
from tools.export import default_export_filename, export_csv, parse_csv
from tools.filters import filter_expenses, sort_by_date_desc
from tools.formatting import format_currency, format_date
from tools.summary import total_spending

logger = get_logger()


def _report_validation_errors(error: ExpenseValidationError):
    for field, message in error.errors.items():
        logger.error(f"  {field}: {message}")


def _filtered(args, services):
    """Apply the list/export filter options to the full collection."""
    try:
        return filter_expenses(
            services.expenses.find_all(),
            search=args.search,
            category=args.category,
            start_date=args.start_date,
            end_date=args.end_date,
        )
    except ValueError as e:
        logger.error(f"Invalid filter: {e}")
        logger.error("Use YYYY-MM-DD format for --start-date and --end-date")
        sys.exit(1)


def cmd_add(args, services):
    """Record a new expense."""
    try:
        expense = services.expenses.add(
            args.date or date.today().isoformat(),
            args.amount,
            args.category,
            args.description,
        )
    except ExpenseValidationError as e:
        logger.error("Expense not saved:")
        _report_validation_errors(e)
        sys.exit(1)

    logger.info(f"✓ Expense added with ID: {expense.id}")
    logger.info(f"  {format_date(expense.date)}  {expense.category}  {format_currency(expense.amount)}")
    logger.info(f"  {expense.description}")


def cmd_edit(args, services):
    """Replace an expense, keeping any field that was not given."""
    existing = services.expenses.find(args.expense_id)
    if not existing:
        logger.error(f"Expense with ID '{args.expense_id}' not found.")
        sys.exit(1)

    try:
        expense = services.expenses.update(
            existing.id,
            args.date if args.date is not None else existing.date,
            args.amount if args.amount is not None else existing.amount,
            args.category if args.category is not None else existing.category,
            args.description if args.description is not None else existing.description,
        )
    except ExpenseNotFoundError as e:
        logger.error(str(e))
        sys.exit(1)
    except ExpenseValidationError as e:
        logger.error("Expense not updated:")
        _report_validation_errors(e)
        sys.exit(1)

    logger.info("✓ Expense updated successfully")
    logger.info(f"  {format_date(expense.date)}  {expense.category}  {format_currency(expense.amount)}")
    logger.info(f"  {expense.description}")


def cmd_delete(args, services):
    """Delete an expense by ID."""
    expense = services.expenses.find(args.expense_id)
    if not expense:
        logger.error(f"Expense with ID '{args.expense_id}' not found.")
        sys.exit(1)

    logger.info("\nExpense to delete:")
    logger.info(f"  {format_date(expense.date)}  {expense.category}  {format_currency(expense.amount)}")
    logger.info(f"  {expense.description}")

    if not args.yes:
        confirm = (
            input("\nAre you sure you want to delete this expense? (yes/no): ")
            .strip()
            .lower()
        )
        if confirm != "yes":
            logger.info("Deletion cancelled.")
            return

    if services.expenses.delete(expense.id):
        logger.info("✓ Expense deleted successfully.")
    else:
        logger.error("Failed to delete expense.")
        sys.exit(1)


def cmd_list(args, services):
    """List expenses, newest first, with optional filters."""
    expenses = sort_by_date_desc(_filtered(args, services))

    if not expenses:
        logger.info("No expenses found.")
        return

    logger.info(f"\n{'Date':<14}{'Category':<16}{'Amount':>12}  Description")
    logger.info("=" * 80)
    for expense in expenses:
        logger.info(
            f"{format_date(expense.date):<14}{expense.category.value:<16}"
            f"{format_currency(expense.amount):>12}  {expense.description}"
        )
        logger.info(f"{'':<14}ID: {expense.id}")
    logger.info("-" * 80)
    logger.info(
        f"{len(expenses)} expense(s), total {format_currency(total_spending(expenses))}"
    )


def cmd_export(args, services):
    """Export (filtered) expenses to CSV."""
    expenses = _filtered(args, services)

    if not expenses:
        logger.info("No expenses found for the specified criteria.")
        sys.exit(0)

    if args.output:
        output_path = Path(args.output)
    else:
        output_path = services.config.export_dir / default_export_filename(date.today())

    try:
        export_csv(expenses, output_path)
    except OSError as e:
        logger.error(f"Error exporting expenses: {e}")
        sys.exit(1)

    logger.info(f"✓ Exported {len(expenses)} expense(s) to: {output_path}")


def cmd_import(args, services):
    """Add expenses from a CSV file in export format."""
    csv_path = Path(args.csv_file)
    if not csv_path.exists():
        logger.error(f"File not found: {args.csv_file}")
        sys.exit(1)

    with open(csv_path, "r", encoding="utf-8", newline="") as f:
        rows = parse_csv(f)

    if not rows:
        logger.info("No expenses to import.")
        return

    added, failures = services.expenses.add_many(rows)
    for row, error in failures:
        logger.warning(f"Skipping line {row['line']}:")
        _report_validation_errors(error)

    logger.info(f"✓ Imported {len(added)} expense(s)")
    if failures:
        logger.info(f"  ({len(failures)} invalid row(s) skipped)")


def cmd_clear(args, services):
    """Delete every stored expense."""
    count = len(services.expenses.find_all())
    if not args.yes:
        confirm = (
            input(f"\nThis will delete ALL {count} expense(s). Continue? (yes/no): ")
            .strip()
            .lower()
        )
        if confirm != "yes":
            logger.info("Clear cancelled.")
            return

    services.expenses.clear()
    logger.info(f"✓ Cleared {count} expense(s).")


def _add_filter_arguments(parser):
    parser.add_argument(
        "--search",
        default="",
        help="Case-insensitive text to look for in descriptions",
    )
    parser.add_argument(
        "--category",
        default=ALL_CATEGORIES,
        choices=[ALL_CATEGORIES] + Category.names(),
        help="Only expenses in this category (default: All)",
    )
    parser.add_argument(
        "--start-date",
        default="",
        help="Earliest date, inclusive, in YYYY-MM-DD format",
    )
    parser.add_argument(
        "--end-date",
        default="",
        help="Latest date, inclusive, in YYYY-MM-DD format",
    )


def setup_parser(subparsers):
    """Setup expenses subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "expenses",
        help="Record, browse, import and export expenses",
        description="Record, browse, import and export expenses",
    )

    expenses_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available expense commands",
        dest="subcommand",
        required=True,
    )

    # expenses add
    add_parser = expenses_subparsers.add_parser(
        "add",
        help="Record a new expense",
        epilog="""
Examples:
  python -m cli expenses add --amount 12.50 --category Food --description "Lunch"
  python -m cli expenses add --date 2024-01-15 --amount 60 --category Bills --description "Phone"
        """,
    )
    add_parser.add_argument(
        "--date",
        help="Expense date in YYYY-MM-DD format (default: today)",
    )
    add_parser.add_argument("--amount", required=True, help="Amount, greater than 0")
    add_parser.add_argument(
        "--category",
        required=True,
        help=f"One of: {', '.join(Category.names())}",
    )
    add_parser.add_argument("--description", required=True, help="What the expense was")
    add_parser.set_defaults(func=cmd_add)

    # expenses edit
    edit_parser = expenses_subparsers.add_parser(
        "edit",
        help="Edit an expense",
        description="Replace an expense; fields not given keep their current values",
    )
    edit_parser.add_argument("expense_id", help="Expense ID")
    edit_parser.add_argument("--date", help="New date in YYYY-MM-DD format")
    edit_parser.add_argument("--amount", help="New amount")
    edit_parser.add_argument("--category", help="New category")
    edit_parser.add_argument("--description", help="New description")
    edit_parser.set_defaults(func=cmd_edit)

    # expenses delete
    delete_parser = expenses_subparsers.add_parser("delete", help="Delete an expense")
    delete_parser.add_argument("expense_id", help="Expense ID")
    delete_parser.add_argument(
        "--yes", action="store_true", help="Do not ask for confirmation"
    )
    delete_parser.set_defaults(func=cmd_delete)

    # expenses list
    list_parser = expenses_subparsers.add_parser(
        "list",
        help="List expenses, newest first",
        epilog="""
Examples:
  python -m cli expenses list
  python -m cli expenses list --search coffee --category Food
  python -m cli expenses list --start-date 2024-01-01 --end-date 2024-01-31
        """,
    )
    _add_filter_arguments(list_parser)
    list_parser.set_defaults(func=cmd_list)

    # expenses export
    export_parser = expenses_subparsers.add_parser(
        "export",
        help="Export expenses to CSV",
        description="Export the expenses matching the filters to a CSV file",
    )
    _add_filter_arguments(export_parser)
    export_parser.add_argument(
        "--output",
        help="Output CSV file path (default: expenses-<today>.csv in the export directory)",
    )
    export_parser.set_defaults(func=cmd_export)

    # expenses import
    import_parser = expenses_subparsers.add_parser(
        "import",
        help="Import expenses from a CSV file",
        description="Add expenses from a CSV file with a date,amount,category,description header",
    )
    import_parser.add_argument("csv_file", help="Path to the CSV file to import")
    import_parser.set_defaults(func=cmd_import)

    # expenses clear
    clear_parser = expenses_subparsers.add_parser(
        "clear", help="Delete all stored expenses"
    )
    clear_parser.add_argument(
        "--yes", action="store_true", help="Do not ask for confirmation"
    )
    clear_parser.set_defaults(func=cmd_clear)
