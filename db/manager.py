"""SQLite connection handling for the local key-value store."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path

from config import Config, get_migrations_dir


class DatabaseManager:
    """Opens connections to the Spendlog database file.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        self.config = config

    @contextmanager
    def connect(self):
        """Open a connection, creating the data directory on first use.

        Yields:
            sqlite3.Connection: Database connection, closed on exit.

        Raises:
            OSError: If the data directory cannot be created.
            sqlite3.Error: If the database file cannot be opened.
        """
        db_path = self.config.db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(db_path)
        try:
            yield conn
        finally:
            conn.close()

    def get_db_path(self) -> Path:
        """Path to the database file."""
        return self.config.db_path

    def exists(self) -> bool:
        """Whether the database file has been created yet."""
        return self.config.db_path.exists()

    def get_migrations_dir(self) -> Path:
        """Directory holding the ordered .sql migration files."""
        return get_migrations_dir()
