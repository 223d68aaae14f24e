"""CSV export and re-import of expense collections."""

import csv
import io
import logging
from datetime import date
from pathlib import Path
from typing import List, Sequence, TextIO

from models.expense import Expense

logger = logging.getLogger(__name__)

CSV_FIELDS = ["date", "amount", "category", "description"]


def expense_to_row(expense: Expense) -> List[str]:
    """Flatten an expense into CSV cells in column order."""
    return [
        expense.date.isoformat(),
        format(expense.amount, "f"),
        expense.category.value,
        expense.description,
    ]


def format_csv(expenses: Sequence[Expense]) -> str:
    """Render expenses as CSV text with a header row.

    Rows follow the order of ``expenses``. Cells containing commas, quotes or
    newlines are quoted with internal quotes doubled, so the output reads
    back unchanged with any standard CSV reader.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_FIELDS)
    for expense in expenses:
        writer.writerow(expense_to_row(expense))
    return buffer.getvalue()


def default_export_filename(today: date) -> str:
    """File name for an export taken on ``today``."""
    return f"expenses-{today.isoformat()}.csv"


def export_csv(expenses: Sequence[Expense], path: Path) -> Path:
    """Write ``format_csv(expenses)`` to ``path`` as UTF-8.

    Returns:
        The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(format_csv(expenses))
    logger.info(f"Exported {len(expenses)} expense(s) to {path}")
    return path


def parse_csv(source: TextIO) -> List[dict]:
    """Read exported CSV rows back into field dictionaries.

    Expected format:
    - Header row (line 1): date,amount,category,description
    - Expense rows (line 2+), values left as text for validation

    Returns:
        One dict per data row, keyed by CSV_FIELDS plus "line" (the
        source line the row ends on). An empty list if the header is missing
        or wrong.
    """
    reader = csv.reader(source)

    try:
        header = next(reader)
    except StopIteration:
        logger.error("Empty CSV file")
        return []
    if [column.strip().lower() for column in header] != CSV_FIELDS:
        logger.error(f"Invalid header format: {header}")
        return []

    rows = []
    for row in reader:
        if not row:
            continue
        if len(row) != len(CSV_FIELDS):
            logger.warning(f"Skipping malformed line {reader.line_num}: {row}")
            continue
        record = dict(zip(CSV_FIELDS, row))
        record["line"] = reader.line_num
        rows.append(record)

    return rows
