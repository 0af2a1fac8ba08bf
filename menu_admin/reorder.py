"""Pure reorder computation for the canonical menu list."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

from menu_admin.models import MenuItem


@dataclass(frozen=True)
class ReorderResult:
    """New canonical list plus the items whose `order` has to be persisted."""

    items: list[MenuItem]
    changed: list[MenuItem]


def renumber(items: Sequence[MenuItem]) -> list[MenuItem]:
    """Reassign `order = 0..N-1` by list position."""
    return [item if item.order == idx else replace(item, order=idx) for idx, item in enumerate(items)]


def compute_reorder(
    items: Sequence[MenuItem],
    moved_id: str,
    new_index: int,
    visible_ids: Sequence[str] | None = None,
) -> ReorderResult:
    """
    Move `moved_id` to `new_index` of the displayed sequence.

    `items` must be sorted by `order`. `visible_ids` is the displayed (possibly
    filtered) sequence; it defaults to every item. Displayed items are written
    back into the canonical slots they occupied, so hidden items never move.
    """
    canonical = list(items)
    if visible_ids is None:
        visible_ids = [item.item_id for item in canonical]

    visible_set = set(visible_ids)
    slots = [idx for idx, item in enumerate(canonical) if item.item_id in visible_set]
    shown = [canonical[idx] for idx in slots]
    shown_ids = [item.item_id for item in shown]

    if moved_id not in shown_ids:
        return ReorderResult(items=canonical, changed=[])

    current_index = shown_ids.index(moved_id)
    target = min(max(new_index, 0), len(shown) - 1)
    if target == current_index:
        return ReorderResult(items=canonical, changed=[])

    moved = shown.pop(current_index)
    shown.insert(target, moved)

    rearranged = list(canonical)
    for slot, item in zip(slots, shown):
        rearranged[slot] = item

    before = {item.item_id: item.order for item in canonical}
    renumbered = renumber(rearranged)
    changed = [item for item in renumbered if before[item.item_id] != item.order]
    return ReorderResult(items=renumbered, changed=changed)
