"""Expense model and its stored dictionary shape."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
import uuid

from models.category import Category


@dataclass
class Expense:
    id: str  # opaque, assigned once at creation
    date: date
    amount: Decimal  # always positive
    category: Category
    description: str

    @classmethod
    def create(
        cls,
        date: date,
        amount: Decimal,
        category: Category,
        description: str,
    ) -> "Expense":
        """Create an Expense with a freshly generated ID."""
        return cls(
            id=uuid.uuid4().hex,
            date=date,
            amount=amount,
            category=category,
            description=description,
        )

    def to_dict(self) -> dict:
        """Convert expense to the dictionary shape used for storage."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "amount": float(self.amount),
            "category": self.category.value,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Expense":
        """Build an Expense from its stored dictionary shape.

        Raises:
            KeyError: If a field is missing.
            TypeError: If a field has the wrong type.
            ValueError: If a date, amount or category cannot be parsed.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected an object, got {type(data).__name__}")

        expense_id = data["id"]
        description = data["description"]
        if not isinstance(expense_id, str) or not isinstance(description, str):
            raise TypeError("id and description must be strings")

        amount = data["amount"]
        # bool is an int subclass; reject it explicitly
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise TypeError(f"amount must be a number, got {amount!r}")
        value = Decimal(str(amount))
        if not value.is_finite() or value <= 0:
            raise ValueError(f"amount must be a positive number, got {amount!r}")

        return cls(
            id=expense_id,
            date=date.fromisoformat(data["date"]),
            amount=value,
            category=Category.parse(data["category"]),
            description=description,
        )
