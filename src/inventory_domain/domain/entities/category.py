"""Item category value object."""

from enum import Enum


class Category(str, Enum):
    """Closed set of categories an inventory item can belong to."""

    ELECTRONICS = "Electronics"
    ACCESSORIES = "Accessories"
    FASHION = "Fashion"
    FURNITURE = "Furniture"
    OFFICE_SUPPLIES = "Office Supplies"
    OTHERS = "Others"

    @classmethod
    def parse(cls, value: "str | Category | None", default: "Category | None" = None) -> "Category":
        """
        Resolves a category from its display value or member name, case-insensitively.

        Raises ValueError for unknown values unless a default is given.
        """
        if isinstance(value, cls):
            return value
        if value:
            normalized = str(value).strip().lower()
            for member in cls:
                if normalized in (member.value.lower(), member.name.lower()):
                    return member
        if default is not None:
            return default
        raise ValueError(f"Unknown category: {value!r}")
