"""Editable static category and remote schema configuration."""

from __future__ import annotations

CATEGORIES: tuple[str, ...] = ("Makanan", "Minuman", "Dessert", "Snack")

# Filter-only sentinel; never stored on an item.
ALL_CATEGORIES = "All"

# Local field name -> remote column name.
REMOTE_FIELD_BY_LOCAL: dict[str, str] = {
    "item_id": "id",
    "name": "name",
    "price": "Harga",
    "description": "Deskripsi",
    "category": "Kategori",
    "image_url": "foto_url",
    "order": "order",
}
