"""Record store: the whole expense collection persisted as one JSON document.

The collection lives under a single key in the ``storage`` table. Every save
overwrites the document, so there is no partial state to reconcile. Storage is
best-effort: read failures degrade to an empty collection and write failures
are logged, never raised.
"""

import json
import sqlite3
from typing import List, Sequence

from config import DEFAULT_STORAGE_KEY
from logger import get_logger
from models.expense import Expense

STORAGE_KEY = DEFAULT_STORAGE_KEY

logger = get_logger()


class RecordStore:
    """Loads, saves and clears the persisted expense collection.

    Args:
        db_manager: Provides ``connect()`` yielding a sqlite3 connection.
        key: Storage key the collection is kept under.
    """

    def __init__(self, db_manager, key: str = STORAGE_KEY):
        self.db_manager = db_manager
        self.key = key

    def load(self) -> List[Expense]:
        """Return the persisted collection, or an empty list if unavailable.

        Returns an empty list when nothing has been saved yet, when the
        database cannot be read, or when the stored payload is not a valid
        serialized collection.
        """
        try:
            with self.db_manager.connect() as conn:
                cursor = conn.execute(
                    "SELECT value FROM storage WHERE key = ?", (self.key,)
                )
                row = cursor.fetchone()
        except (sqlite3.Error, OSError) as e:
            logger.warning(f"Expense storage unavailable, starting empty: {e}")
            return []

        if row is None:
            return []

        try:
            return deserialize(row[0])
        except (ValueError, KeyError, TypeError) as e:
            # json.JSONDecodeError is a ValueError
            logger.error(f"Discarding unreadable expense data: {e}")
            return []

    def save(self, expenses: Sequence[Expense]) -> None:
        """Overwrite the persisted collection with ``expenses``."""
        payload = serialize(expenses)
        try:
            with self.db_manager.connect() as conn:
                conn.execute(
                    """
                    INSERT INTO storage (key, value, updated_at)
                    VALUES (?, ?, CURRENT_TIMESTAMP)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (self.key, payload),
                )
                conn.commit()
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Error saving {len(expenses)} expense(s): {e}")
            return

        logger.debug(f"Saved {len(expenses)} expense(s)")

    def clear(self) -> None:
        """Remove the persisted collection entirely."""
        try:
            with self.db_manager.connect() as conn:
                conn.execute("DELETE FROM storage WHERE key = ?", (self.key,))
                conn.commit()
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Error clearing expense storage: {e}")


def serialize(expenses: Sequence[Expense]) -> str:
    """Serialize a collection to the stored JSON array."""
    return json.dumps([expense.to_dict() for expense in expenses])


def _reject_constant(name: str):
    raise ValueError(f"Unsupported JSON constant: {name}")


def deserialize(payload: str) -> List[Expense]:
    """Parse a stored JSON array back into expenses.

    Raises:
        ValueError: If the payload is not valid JSON or a field is invalid.
        KeyError: If a record is missing a field.
        TypeError: If the payload or a field has the wrong shape.
    """
    data = json.loads(payload, parse_constant=_reject_constant)
    if not isinstance(data, list):
        raise TypeError(f"Expected a list of expenses, got {type(data).__name__}")
    return [Expense.from_dict(item) for item in data]
