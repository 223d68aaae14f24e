import pytest
from datetime import date
from decimal import Decimal

from db.store import STORAGE_KEY, RecordStore
from models.category import Category
from services.expenses import ExpenseService
from tests.helpers import TestDatabaseManager, UnavailableDatabaseManager, make_expense


def _write_raw(conn, value, key=STORAGE_KEY):
    conn.execute(
        "INSERT OR REPLACE INTO storage (key, value) VALUES (?, ?)", (key, value)
    )
    conn.commit()


class TestRecordStore:
    """Tests for RecordStore."""

    def test_load_without_saved_data(self, store):
        """Test that a fresh store loads as an empty collection."""
        assert store.load() == []

    def test_save_and_load_round_trip(self, store):
        """Test that saved expenses load back equal and in order."""
        expenses = [
            make_expense(date(2024, 1, 20), "30", Category.FOOD, "Dinner"),
            make_expense(date(2024, 1, 15), "50", Category.FOOD, "Lunch"),
            make_expense(date(2023, 12, 1), "12.34", Category.BILLS, 'Phone, "mobile"'),
        ]

        store.save(expenses)

        assert store.load() == expenses

    def test_save_overwrites_previous_payload(self, store):
        """Test that each save replaces the whole collection."""
        store.save([make_expense(description="First"), make_expense(description="Second")])
        replacement = [make_expense(description="Only")]

        store.save(replacement)

        assert store.load() == replacement

    def test_save_empty_collection(self, store):
        store.save([make_expense()])
        store.save([])

        assert store.load() == []

    def test_payload_is_json_array(self, store, test_db):
        """Test the persisted layout: one JSON array under the fixed key."""
        store.save([make_expense(expense_id="abc", amount="12.5")])

        row = test_db.execute(
            "SELECT value FROM storage WHERE key = ?", ("expense-tracker-data",)
        ).fetchone()

        assert row[0] == (
            '[{"id": "abc", "date": "2024-01-15", "amount": 12.5, '
            '"category": "Food", "description": "Lunch"}]'
        )

    def test_clear_removes_payload(self, store, test_db):
        store.save([make_expense()])

        store.clear()

        assert store.load() == []
        assert test_db.execute("SELECT COUNT(*) FROM storage").fetchone()[0] == 0

    def test_clear_without_data(self, store):
        store.clear()

        assert store.load() == []

    def test_separate_keys_are_independent(self, db_manager_with_schema):
        primary = RecordStore(db_manager_with_schema)
        other = RecordStore(db_manager_with_schema, key="other")

        primary.save([make_expense()])

        assert other.load() == []
        assert len(primary.load()) == 1

    def test_load_invalid_json(self, store, test_db):
        """Test that a corrupt payload loads as empty instead of raising."""
        _write_raw(test_db, "{not json")

        assert store.load() == []

    def test_load_non_list_payload(self, store, test_db):
        _write_raw(test_db, '{"id": "1"}')

        assert store.load() == []

    def test_load_structurally_incompatible_record(self, store, test_db):
        """Test that one bad record discards the whole payload."""
        _write_raw(
            test_db,
            '[{"id": "1", "date": "2024-01-15", "amount": 5, "category": "Food", "description": "ok"},'
            ' {"id": "2", "date": "2024-01-16", "amount": 5, "category": "Groceries", "description": "bad"}]',
        )

        assert store.load() == []

    def test_load_record_missing_field(self, store, test_db):
        _write_raw(test_db, '[{"id": "1", "date": "2024-01-15", "amount": 5}]')

        assert store.load() == []

    def test_load_when_unavailable(self):
        """Test that an unreachable database loads as empty."""
        store = RecordStore(UnavailableDatabaseManager())

        assert store.load() == []

    def test_load_without_schema(self, test_db):
        """Test that a database without the storage table loads as empty."""
        store = RecordStore(TestDatabaseManager(test_db))

        assert store.load() == []

    def test_save_failure_is_swallowed(self):
        """Test that a failed write does not raise."""
        store = RecordStore(UnavailableDatabaseManager())

        store.save([make_expense()])

    def test_clear_failure_is_swallowed(self):
        store = RecordStore(UnavailableDatabaseManager())

        store.clear()

    def test_amounts_keep_their_value(self, store):
        store.save([make_expense(amount="19.99")])

        assert store.load()[0].amount == Decimal("19.99")

    @pytest.mark.parametrize("amount", ["0.01", "19.99", "1234.5", "999999999999.99"])
    def test_added_amounts_reload_unchanged(self, db_manager_with_schema, amount):
        """Test that an accepted amount survives a save and a fresh load."""
        service = ExpenseService(RecordStore(db_manager_with_schema))
        service.add("2024-01-15", amount, "Food", "Lunch", today=date(2024, 3, 10))

        reloaded = RecordStore(db_manager_with_schema).load()

        assert reloaded == service.find_all()
        assert reloaded[0].amount == Decimal(amount)

    @pytest.mark.parametrize("amount", ["NaN", "Infinity", "-Infinity", "0", "-5"])
    def test_load_record_with_unusable_amount(self, store, test_db, amount):
        """Test that non-finite or non-positive stored amounts discard the payload."""
        _write_raw(
            test_db,
            '[{"id": "1", "date": "2024-01-15", "amount": %s, '
            '"category": "Food", "description": "Lunch"}]' % amount,
        )

        assert store.load() == []
