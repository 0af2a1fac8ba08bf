"""Error taxonomy surfaced to the presentation layer."""

from __future__ import annotations


class MenuError(Exception):
    """Base class for every user-visible menu failure."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(MenuError):
    """Draft input was rejected before any remote call."""

    def __init__(self, field: str, message: str | None = None) -> None:
        super().__init__(message or f"Invalid input: {field} is required")
        self.field = field


class PersistenceError(MenuError):
    """A remote write failed and the local mutation was rolled back."""

    def __init__(self, operation: str, message: str | None = None) -> None:
        super().__init__(message or f"Could not save {operation}, please retry.")
        self.operation = operation


class LoadError(MenuError):
    """Fetching the menu failed; local state was left as it was."""

    def __init__(self, message: str = "Could not load menu, press Ctrl+R to retry.") -> None:
        super().__init__(message)


class ItemPendingError(MenuError):
    """A mutation targeted an item whose previous round trip is unresolved."""

    def __init__(self, item_id: str | None = None) -> None:
        what = "Menu" if item_id is None else f"Item {item_id}"
        super().__init__(f"{what} is still saving, wait a moment.")
        self.item_id = item_id


class StoreError(Exception):
    """Raised by remote collaborators when the backend call fails."""
