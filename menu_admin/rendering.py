"""Rendering helpers for menu rows and the filter bar."""

from __future__ import annotations

from rich.text import Text

from menu_admin.constant import ALL_CATEGORIES
from menu_admin.currency import display_price
from menu_admin.models import MenuItem

_BADGE_STYLES: dict[str, str] = {
    "Makanan": "bold #ffffff on #b23a48",
    "Minuman": "bold #ffffff on #2f6db5",
    "Dessert": "bold #2c1a00 on #ffd700",
    "Snack": "bold #0b1f0f on #6b8e23",
}


def badge_style(category: str) -> str:
    """Return a consistent badge style for category tags."""
    return _BADGE_STYLES.get(category, "bold #ffffff on #555555")


def format_item_row(position: int, item: MenuItem, selected: bool = False, pending: bool = False) -> Text:
    """Render one menu row: pointer, position, badge, name, price and notes."""
    text = Text()
    text.append("➤ " if selected else "  ")
    text.append(f"{position}. ")
    text.append(f" {item.category} ", style=badge_style(item.category))
    text.append(f" {item.name}", style="bold" if selected else "")
    text.append(f"  {display_price(item.price)}", style="#e74c3c")
    if item.image_url:
        text.append("  [img]", style="dim")
    if pending:
        text.append("  …", style="italic dim")

    summary = item.description.strip().splitlines()[0] if item.description.strip() else ""
    if summary:
        text.append(f"\n      {summary}", style="dim")
    return text


def format_filter_bar(category: str, search_term: str, searching: bool) -> Text:
    """Render the active category filter and search term."""
    text = Text()
    if category == ALL_CATEGORIES:
        text.append(f" {ALL_CATEGORIES} ", style="reverse")
    else:
        text.append(f" {category} ", style=badge_style(category))
    text.append("  Search: ")
    text.append(search_term or ("" if searching else "-"))
    if searching:
        text.append("|", style="bold")
    return text
