"""Remote menu store contract and the Supabase-backed implementation."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx
from postgrest.exceptions import APIError
from supabase import AsyncClient, acreate_client

from menu_admin.constant import REMOTE_FIELD_BY_LOCAL as F
from menu_admin.errors import StoreError
from menu_admin.models import MenuItem

logger = logging.getLogger(__name__)


class RemoteMenuStore(Protocol):
    """Persistence backend keyed by item id. Rows use the remote schema."""

    async def list_items(self) -> list[dict[str, Any]]: ...

    async def create(self, record: dict[str, Any]) -> dict[str, Any]: ...

    async def delete(self, item_id: str) -> None: ...

    async def update_order(self, item_id: str, order: int) -> None: ...


def item_from_record(row: dict[str, Any]) -> MenuItem:
    """Map one remote row onto the local data model."""
    image_url = row.get(F["image_url"]) or None
    return MenuItem(
        item_id=str(row[F["item_id"]]),
        name=str(row.get(F["name"]) or ""),
        price=int(row.get(F["price"]) or 0),
        description=str(row.get(F["description"]) or ""),
        category=str(row.get(F["category"]) or ""),
        image_url=str(image_url) if image_url else None,
        order=int(row.get(F["order"]) or 0),
    )


def record_from_draft(
    name: str,
    price: int,
    description: str,
    category: str,
    image_url: str | None,
    order: int,
) -> dict[str, Any]:
    """Build the remote create payload; `id` is always assigned remotely."""
    return {
        F["name"]: name,
        F["price"]: price,
        F["description"]: description,
        F["category"]: category,
        F["image_url"]: image_url or "",
        F["order"]: order,
    }


class SupabaseMenuStore:
    """`RemoteMenuStore` over a Supabase table."""

    def __init__(self, url: str, key: str, table: str) -> None:
        self.url = url
        self.key = key
        self.table = table
        self._client: AsyncClient | None = None

    async def _connect(self) -> AsyncClient:
        if self._client is None:
            self._client = await acreate_client(self.url, self.key)
        return self._client

    async def list_items(self) -> list[dict[str, Any]]:
        client = await self._connect()
        try:
            response = await client.table(self.table).select("*").order(F["order"]).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise StoreError(f"list {self.table} failed: {exc}") from exc
        return list(response.data or [])

    async def create(self, record: dict[str, Any]) -> dict[str, Any]:
        client = await self._connect()
        try:
            response = await client.table(self.table).insert(record).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise StoreError(f"insert into {self.table} failed: {exc}") from exc
        if not response.data:
            raise StoreError(f"insert into {self.table} returned no row")
        logger.debug("created row id=%s", response.data[0].get(F["item_id"]))
        return response.data[0]

    async def delete(self, item_id: str) -> None:
        client = await self._connect()
        try:
            await client.table(self.table).delete().eq(F["item_id"], item_id).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise StoreError(f"delete {item_id} failed: {exc}") from exc

    async def update_order(self, item_id: str, order: int) -> None:
        client = await self._connect()
        try:
            await client.table(self.table).update({F["order"]: order}).eq(F["item_id"], item_id).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise StoreError(f"update order of {item_id} failed: {exc}") from exc
