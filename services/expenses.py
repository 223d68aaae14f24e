"""Expense service: the in-memory collection and its write-back."""

from datetime import date
from typing import List, Optional, Tuple

from db.store import RecordStore
from logger import get_logger
from models.expense import Expense
from models.exceptions import ExpenseNotFoundError, ExpenseValidationError
from models.validation import validate_expense_input

logger = get_logger()


class ExpenseService:
    """Service for managing expenses.

    The collection is loaded from the store once, when the service is created.
    After that the in-memory list is the source of truth: every mutation
    updates it and then rewrites the whole collection to the store.
    """

    def __init__(self, store: RecordStore):
        """Initialize the expense service.

        Args:
            store: Record store the collection is loaded from and saved to.
        """
        self.store = store
        self._expenses: List[Expense] = store.load()
        logger.debug(f"Loaded {len(self._expenses)} expense(s)")

    def find_all(self) -> List[Expense]:
        """Get all expenses.

        Returns:
            A copy of the collection, in insertion order.
        """
        return list(self._expenses)

    def find(self, expense_id: str) -> Optional[Expense]:
        """Get a single expense by ID.

        Args:
            expense_id: The expense ID.

        Returns:
            Expense object if found, None otherwise.
        """
        for expense in self._expenses:
            if expense.id == expense_id:
                return expense
        return None

    def add(
        self,
        expense_date,
        amount,
        category,
        description,
        today: Optional[date] = None,
    ) -> Expense:
        """Validate input and append a new expense.

        Args:
            expense_date: Date object or YYYY-MM-DD string.
            amount: Positive amount (number or numeric string).
            category: Category member or display name.
            description: Non-blank description; trimmed before storing.
            today: Latest allowed date (defaults to the current date).

        Returns:
            The created Expense with a fresh ID.

        Raises:
            ExpenseValidationError: If any field is invalid.
        """
        fields = validate_expense_input(
            expense_date, amount, category, description, today or date.today()
        )
        expense = Expense.create(*fields)
        self._expenses = self._expenses + [expense]
        self.store.save(self._expenses)
        return expense

    def add_many(
        self, entries: List[dict], today: Optional[date] = None
    ) -> Tuple[List[Expense], List[Tuple[dict, ExpenseValidationError]]]:
        """Validate a batch of entries and append the valid ones.

        The collection is written back once, after the whole batch.

        Args:
            entries: Dicts with date, amount, category and description keys.
            today: Latest allowed date (defaults to the current date).

        Returns:
            Tuple of (added expenses, list of (entry, error) for rejected entries).
        """
        today = today or date.today()
        added = []
        failures = []
        for entry in entries:
            try:
                fields = validate_expense_input(
                    entry["date"],
                    entry["amount"],
                    entry["category"],
                    entry["description"],
                    today,
                )
            except ExpenseValidationError as e:
                failures.append((entry, e))
                continue
            added.append(Expense.create(*fields))

        if added:
            self._expenses = self._expenses + added
            self.store.save(self._expenses)
        return added, failures

    def update(
        self,
        expense_id: str,
        expense_date,
        amount,
        category,
        description,
        today: Optional[date] = None,
    ) -> Expense:
        """Replace an existing expense with newly validated fields.

        Args:
            expense_id: ID of the expense to replace; it is kept.
            expense_date: Date object or YYYY-MM-DD string.
            amount: Positive amount (number or numeric string).
            category: Category member or display name.
            description: Non-blank description; trimmed before storing.
            today: Latest allowed date (defaults to the current date).

        Returns:
            The replacement Expense.

        Raises:
            ExpenseNotFoundError: If no expense has this ID.
            ExpenseValidationError: If any field is invalid.
        """
        if self.find(expense_id) is None:
            raise ExpenseNotFoundError(f"Expense with ID '{expense_id}' not found")

        fields = validate_expense_input(
            expense_date, amount, category, description, today or date.today()
        )
        replacement = Expense(expense_id, *fields)
        self._expenses = [
            replacement if expense.id == expense_id else expense
            for expense in self._expenses
        ]
        self.store.save(self._expenses)
        return replacement

    def delete(self, expense_id: str) -> bool:
        """Delete an expense by ID.

        Returns:
            True if the expense was deleted, False if not found.
        """
        remaining = [e for e in self._expenses if e.id != expense_id]
        if len(remaining) == len(self._expenses):
            return False

        self._expenses = remaining
        self.store.save(self._expenses)
        return True

    def clear(self) -> None:
        """Remove every expense, in memory and in the store."""
        self._expenses = []
        self.store.clear()
