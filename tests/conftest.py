"""Shared pytest fixtures for all tests."""

import sqlite3
import pytest
from datetime import date

from config import Config, get_migrations_dir
from db.store import RecordStore
from models.category import Category
from services.base import Services
from tests.helpers import TestDatabaseManager, make_expense, run_migrations


@pytest.fixture
def test_db():
    """Create an in-memory SQLite database for testing.

    Yields:
        sqlite3.Connection: Connection to in-memory database.
    """
    conn = sqlite3.connect(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration rooted in a temporary directory.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "spendlog",
        db_data_dir=tmp_path / "spendlog" / "db",
        db_filename="test.db",
        log_level="DEBUG",
        log_dir=tmp_path / "spendlog" / "logs",
        export_dir=tmp_path / "spendlog" / "exports",
    )


@pytest.fixture
def db_manager_with_schema(test_db):
    """Create a database manager over an in-memory database with migrations applied.

    Args:
        test_db: In-memory database connection fixture.

    Returns:
        TestDatabaseManager: Database manager with schema ready.
    """
    run_migrations(test_db, get_migrations_dir())
    return TestDatabaseManager(test_db)


@pytest.fixture
def store(db_manager_with_schema):
    """Record store backed by the in-memory test database."""
    return RecordStore(db_manager_with_schema)


@pytest.fixture
def services(test_config, db_manager_with_schema):
    """Create a Services container with test database.

    Args:
        test_config: Test configuration fixture.
        db_manager_with_schema: Database manager with schema set up.

    Returns:
        Services: Services container for testing.
    """
    return Services(test_config, db_manager=db_manager_with_schema)


@pytest.fixture
def lunch_and_dinner():
    """The two-record Food collection used throughout the scenarios."""
    return [
        make_expense(date(2024, 1, 15), "50", Category.FOOD, "Lunch", "1"),
        make_expense(date(2024, 1, 20), "30", Category.FOOD, "Dinner", "2"),
    ]
