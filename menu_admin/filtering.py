"""Category and free-text filtering over the canonical menu order."""

from __future__ import annotations

from typing import Iterable

from menu_admin.constant import ALL_CATEGORIES, CATEGORIES
from menu_admin.errors import ValidationError
from menu_admin.models import MenuItem


def filter_items(items: Iterable[MenuItem], category: str, search_term: str) -> list[MenuItem]:
    """Return the displayed subsequence of `items`, keeping relative order."""
    current = list(items)

    if category and category != ALL_CATEGORIES:
        current = [item for item in current if item.category == category]

    if search_term:
        needle = search_term.lower()
        current = [
            item
            for item in current
            if needle in item.name.lower() or needle in item.description.lower()
        ]

    return current


class MenuView:
    """Holds the user's filter inputs; derives the visible items on demand."""

    def __init__(self) -> None:
        self.category = ALL_CATEGORIES
        self.search_term = ""

    def set_category_filter(self, value: str) -> None:
        if value != ALL_CATEGORIES and value not in CATEGORIES:
            raise ValidationError("category", f"Invalid input: unknown category {value!r}")
        self.category = value

    def set_search_term(self, value: str) -> None:
        self.search_term = value

    def cycle_category(self, delta: int = 1) -> str:
        options = (ALL_CATEGORIES, *CATEGORIES)
        idx = options.index(self.category)
        self.category = options[(idx + delta) % len(options)]
        return self.category

    def visible(self, items: Iterable[MenuItem]) -> list[MenuItem]:
        return filter_items(items, self.category, self.search_term)
