"""Category enumeration for expenses."""

from enum import Enum

# Filter sentinel meaning "every category"; not a Category member.
ALL_CATEGORIES = "All"


class Category(str, Enum):
    """Closed set of expense categories.

    Declaration order is significant: it is the order categories are listed
    in and the tie-break order for spending rankings.
    """

    FOOD = "Food"
    TRANSPORTATION = "Transportation"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    BILLS = "Bills"
    OTHER = "Other"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "Category":
        """Look up a category by its display name (exact match).

        Raises:
            ValueError: If the name is not a known category.
        """
        for category in cls:
            if category.value == value:
                return category
        raise ValueError(f"Unknown category: {value!r}")

    @classmethod
    def names(cls) -> list:
        """Display names in declaration order."""
        return [category.value for category in cls]
