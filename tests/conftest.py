from __future__ import annotations

import asyncio
from typing import Any

import pytest

from menu_admin.collection import MenuCollection
from menu_admin.errors import StoreError


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class FakeMenuStore:
    """In-memory store speaking the remote schema, with failure injection."""

    def __init__(self, rows: list[dict[str, Any]] | None = None) -> None:
        self.rows: dict[str, dict[str, Any]] = {str(row["id"]): dict(row) for row in rows or []}
        self.calls: list[tuple[Any, ...]] = []
        self.fail_on: set[str] = set()
        self.fail_update_ids: set[str] = set()
        self.gate: asyncio.Event | None = None
        self._next_id = 100

    async def _maybe_wait(self) -> None:
        if self.gate is not None:
            await self.gate.wait()

    async def list_items(self) -> list[dict[str, Any]]:
        self.calls.append(("list",))
        await self._maybe_wait()
        if "list" in self.fail_on:
            raise StoreError("list failed")
        return sorted((dict(row) for row in self.rows.values()), key=lambda row: row["order"])

    async def create(self, record: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("create", dict(record)))
        await self._maybe_wait()
        if "create" in self.fail_on:
            raise StoreError("create failed")
        self._next_id += 1
        row = {"id": str(self._next_id), **record}
        self.rows[row["id"]] = row
        return dict(row)

    async def delete(self, item_id: str) -> None:
        self.calls.append(("delete", item_id))
        await self._maybe_wait()
        if "delete" in self.fail_on:
            raise StoreError("delete failed")
        self.rows.pop(item_id, None)

    async def update_order(self, item_id: str, order: int) -> None:
        self.calls.append(("update_order", item_id, order))
        await self._maybe_wait()
        if "update_order" in self.fail_on or item_id in self.fail_update_ids:
            raise StoreError("update failed")
        if item_id in self.rows:
            self.rows[item_id]["order"] = order

    def remote_order(self) -> list[str]:
        return [row["id"] for row in sorted(self.rows.values(), key=lambda row: row["order"])]


def make_row(item_id: str, order: int, category: str = "Makanan", name: str | None = None, desc: str = "") -> dict[str, Any]:
    return {
        "id": item_id,
        "name": name or item_id,
        "Harga": 10000,
        "Deskripsi": desc,
        "Kategori": category,
        "foto_url": "",
        "order": order,
    }


@pytest.fixture
def store() -> FakeMenuStore:
    return FakeMenuStore(
        [
            make_row("A", 0, "Makanan", "Nasi Goreng", "fried rice with egg"),
            make_row("B", 1, "Minuman", "Kopi Susu Aren", "iced coffee"),
            make_row("C", 2, "Makanan", "Mie Ayam", "chicken noodles"),
        ]
    )


@pytest.fixture
def collection(store: FakeMenuStore) -> MenuCollection:
    return MenuCollection(store, timeout=1)
