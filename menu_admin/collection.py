"""Authoritative ordered menu list, reconciled against the remote store."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Any, Awaitable, Callable, Iterator, Sequence

from menu_admin.config import REMOTE_TIMEOUT_SECONDS
from menu_admin.constant import CATEGORIES
from menu_admin.currency import parse_price
from menu_admin.errors import ItemPendingError, LoadError, PersistenceError, StoreError, ValidationError
from menu_admin.models import MenuDraft, MenuItem
from menu_admin.reorder import compute_reorder, renumber
from menu_admin.store import RemoteMenuStore, item_from_record, record_from_draft

logger = logging.getLogger(__name__)

_REMOTE_FAILURES = (StoreError, asyncio.TimeoutError)


def validate_draft(draft: MenuDraft) -> tuple[str, int, str]:
    """Return the cleaned `(name, price, category)` or raise `ValidationError`."""
    name = draft.name.strip()
    if not name:
        raise ValidationError("name")
    price = parse_price(draft.price)
    if draft.category not in CATEGORIES:
        raise ValidationError("category", "Invalid input: category must be one of " + ", ".join(CATEGORIES))
    return name, price, draft.category


class MenuCollection:
    """
    Owns the in-memory menu for one admin session.

    Mutations are applied locally first and then persisted. A failed remote
    call rolls the local mutation back and raises `PersistenceError`. Once
    `close()` is called, late responses are ignored.
    """

    def __init__(self, store: RemoteMenuStore, timeout: float | None = REMOTE_TIMEOUT_SECONDS) -> None:
        self.store = store
        self.timeout = timeout
        self._items: list[MenuItem] = []
        # Last order value known to be stored remotely, by item id.
        self._persisted: dict[str, int] = {}
        self._pending: set[str] = set()
        self._adds_in_flight = 0
        self._reordering = False
        self._loading = False
        self._closed = False
        self._listeners: list[Callable[[], None]] = []

    @property
    def items(self) -> tuple[MenuItem, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[MenuItem]:
        return iter(tuple(self._items))

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def busy(self) -> bool:
        return bool(self._pending) or self._adds_in_flight > 0 or self._reordering or self._loading

    def get(self, item_id: str) -> MenuItem | None:
        index = self._index_of(item_id)
        return None if index is None else self._items[index]

    def is_pending(self, item_id: str) -> bool:
        return item_id in self._pending

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def close(self) -> None:
        self._closed = True
        self._listeners.clear()

    async def load(self) -> None:
        """
        Replace local state with the remote menu, sorted by `order`.

        Refused while any mutation or another load is in flight, since their
        rollbacks would land on top of the fresh rows.
        """
        if self.busy:
            raise ItemPendingError()

        self._loading = True
        try:
            rows = await self._call(self.store.list_items())
            loaded = sorted((item_from_record(row) for row in rows), key=lambda item: item.order)
        except (*_REMOTE_FAILURES, KeyError, ValueError) as exc:
            if self._closed:
                return
            logger.error("menu load failed: %r", exc)
            raise LoadError() from exc
        finally:
            self._loading = False

        if self._closed:
            return
        self._persisted = {item.item_id: item.order for item in loaded}
        self._items = renumber(loaded)
        logger.debug("menu loaded rows=%d", len(self._items))
        self._notify()

    async def add_item(self, draft: MenuDraft) -> MenuItem | None:
        """Validate `draft`, create it remotely, then append the stored item."""
        name, price, category = validate_draft(draft)
        if self._reordering or self._loading:
            raise ItemPendingError()

        record = record_from_draft(
            name=name,
            price=price,
            description=draft.description.strip(),
            category=category,
            image_url=draft.image_url,
            order=len(self._items),
        )
        logger.debug("add_item name=%r order=%d", name, record["order"])

        self._adds_in_flight += 1
        try:
            created = item_from_record(await self._call(self.store.create(record)))
        except (*_REMOTE_FAILURES, KeyError, ValueError) as exc:
            logger.warning("add_item failed name=%r error=%r", name, exc)
            if self._closed:
                return None
            raise PersistenceError("add", f"Could not save {name!r}, please retry.") from exc
        finally:
            self._adds_in_flight -= 1

        if self._closed:
            return None

        self._persisted[created.item_id] = created.order
        item = replace(created, order=len(self._items))
        self._items.append(item)
        self._notify()

        # The list may have shrunk while the create was in flight.
        if item.order != created.order:
            await self._sync_orders("add")
        return item

    async def delete_item(self, item_id: str) -> None:
        """Remove `item_id` optimistically; unknown ids are ignored."""
        index = self._index_of(item_id)
        if index is None:
            return
        if item_id in self._pending or self._reordering or self._loading:
            raise ItemPendingError(item_id)

        removed = self._items[index]
        rank = {item.item_id: pos for pos, item in enumerate(self._items)}
        self._items = renumber(self._items[:index] + self._items[index + 1 :])
        self._pending.add(item_id)
        logger.debug("delete_item id=%s index=%d", item_id, index)
        self._notify()

        try:
            await self._call(self.store.delete(item_id))
        except _REMOTE_FAILURES as exc:
            self._pending.discard(item_id)
            if self._closed:
                return
            position = sum(1 for item in self._items if rank.get(item.item_id, len(rank)) < rank[item_id])
            self._items.insert(position, removed)
            self._items = renumber(self._items)
            logger.warning("delete_item rolled back id=%s error=%r", item_id, exc)
            self._notify()
            raise PersistenceError("delete", f"Could not delete {removed.name!r}, please retry.") from exc

        self._pending.discard(item_id)
        self._persisted.pop(item_id, None)
        if self._closed:
            return
        self._notify()
        await self._sync_orders("delete")

    async def reorder(
        self,
        item_id: str,
        target_index: int,
        visible_ids: Sequence[str] | None = None,
    ) -> list[MenuItem]:
        """
        Move `item_id` to `target_index` of the displayed sequence.

        Returns the items whose order changed. On any failed write the whole
        move is undone locally and already-written orders are reverted
        remotely.
        """
        if self.busy:
            raise ItemPendingError(item_id if item_id in self._pending else None)

        result = compute_reorder(self._items, item_id, target_index, visible_ids)
        if not result.changed:
            return []

        snapshot = list(self._items)
        changed_ids = {item.item_id for item in result.changed}
        self._items = result.items
        self._pending |= changed_ids
        self._reordering = True
        logger.debug("reorder id=%s target=%d changed=%d", item_id, target_index, len(result.changed))
        self._notify()

        written: list[MenuItem] = []
        try:
            for item in result.changed:
                await self._call(self.store.update_order(item.item_id, item.order))
                self._persisted[item.item_id] = item.order
                written.append(item)
        except _REMOTE_FAILURES as exc:
            if self._closed:
                return []
            self._items = snapshot
            logger.warning("reorder rolled back id=%s error=%r", item_id, exc)
            await self._revert_written(written, snapshot)
            raise PersistenceError("reorder", "Could not save the new menu order, please retry.") from exc
        finally:
            self._reordering = False
            self._pending -= changed_ids
            self._notify()

        return result.changed

    async def _revert_written(self, written: list[MenuItem], snapshot: list[MenuItem]) -> None:
        previous = {item.item_id: item.order for item in snapshot}
        for item in written:
            try:
                await self._call(self.store.update_order(item.item_id, previous[item.item_id]))
            except _REMOTE_FAILURES as exc:
                logger.warning("could not revert order id=%s error=%r", item.item_id, exc)
                continue
            self._persisted[item.item_id] = previous[item.item_id]

    async def _sync_orders(self, operation: str) -> None:
        """Persist order values that drifted from the remote copy."""
        stale = [
            item
            for item in self._items
            if self._persisted.get(item.item_id) != item.order and item.item_id not in self._pending
        ]
        if not stale:
            return

        stale_ids = {item.item_id for item in stale}
        self._pending |= stale_ids
        self._notify()
        try:
            for item in stale:
                await self._call(self.store.update_order(item.item_id, item.order))
                self._persisted[item.item_id] = item.order
        except _REMOTE_FAILURES as exc:
            logger.warning("order sync after %s failed error=%r", operation, exc)
            if self._closed:
                return
            raise PersistenceError(
                "reindex", f"Menu {operation} saved but the new positions were not, please retry."
            ) from exc
        finally:
            self._pending -= stale_ids
            self._notify()

    async def _call(self, awaitable: Awaitable[Any]) -> Any:
        return await asyncio.wait_for(awaitable, self.timeout)

    def _index_of(self, item_id: str) -> int | None:
        for idx, item in enumerate(self._items):
            if item.item_id == item_id:
                return idx
        return None

    def _notify(self) -> None:
        if self._closed:
            return
        for callback in list(self._listeners):
            callback()
