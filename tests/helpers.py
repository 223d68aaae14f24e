"""Helper utilities for tests."""

from datetime import date
from decimal import Decimal
from pathlib import Path
import sqlite3

from config import get_migrations_dir
from models.category import Category
from models.expense import Expense


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in filename order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    for migration_file in sorted(migrations_dir.glob("*.sql")):
        conn.executescript(migration_file.read_text())

    conn.commit()


def make_expense(
    expense_date=date(2024, 1, 15),
    amount="50",
    category=Category.FOOD,
    description="Lunch",
    expense_id=None,
) -> Expense:
    """Build an Expense directly, bypassing input validation."""
    expense = Expense.create(
        date=expense_date,
        amount=Decimal(amount),
        category=category,
        description=description,
    )
    if expense_id is not None:
        expense.id = expense_id
    return expense


class _TestConnectionContext:
    """Context manager for test database connections."""

    def __init__(self, conn):
        self.conn = conn

    def __enter__(self):
        return self.conn

    def __exit__(self, exc_type, exc_val, exc_tb):
        # Don't close the connection - let the fixture handle it
        pass


class TestDatabaseManager:
    """Database manager that hands out one shared in-memory connection."""

    __test__ = False

    def __init__(self, conn):
        self.conn = conn

    def connect(self):
        """Return a context manager for the test connection."""
        return _TestConnectionContext(self.conn)

    def get_db_path(self):
        """Return a fake path for the test database."""
        return Path(":memory:")

    def exists(self):
        return True

    def get_migrations_dir(self):
        return get_migrations_dir()


class UnavailableDatabaseManager:
    """Database manager whose connections always fail."""

    def connect(self):
        raise sqlite3.OperationalError("unable to open database file")
