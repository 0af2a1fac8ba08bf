"""Domain models for menu-admin."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MenuItem:
    """A persisted, orderable menu listing."""

    item_id: str
    name: str
    price: int
    description: str
    category: str
    image_url: str | None = None
    order: int = 0


@dataclass
class MenuDraft:
    """User input for a menu item that does not exist remotely yet."""

    name: str = ""
    price: str = ""
    description: str = ""
    category: str = ""
    image_url: str | None = None
