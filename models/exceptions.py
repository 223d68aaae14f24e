"""Domain-specific exceptions for expense handling."""

from typing import Dict


class ExpenseValidationError(ValueError):
    """Raised when expense input does not meet validation requirements.

    Attributes:
        errors: Field name mapped to a human readable message.
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        summary = "; ".join(f"{field}: {message}" for field, message in self.errors.items())
        super().__init__(f"Invalid expense ({summary})")


class ExpenseNotFoundError(LookupError):
    """Raised when an expense ID is not present in the collection."""
