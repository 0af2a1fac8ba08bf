from menu_admin.models import MenuItem
from menu_admin.reorder import compute_reorder


def item(item_id: str, order: int, category: str = "X") -> MenuItem:
    return MenuItem(item_id, item_id, 1000, "", category, order=order)


def layout(items: list[MenuItem]) -> list[tuple[str, int]]:
    return [(entry.item_id, entry.order) for entry in items]


def test_move_to_front_without_filter() -> None:
    result = compute_reorder([item("A", 0), item("B", 1), item("C", 2)], "C", 0)
    assert layout(result.items) == [("C", 0), ("A", 1), ("B", 2)]
    assert {entry.item_id for entry in result.changed} == {"A", "B", "C"}


def test_move_down_only_reports_changed_items() -> None:
    items = [item("A", 0), item("B", 1), item("C", 2), item("D", 3)]
    result = compute_reorder(items, "A", 1)
    assert layout(result.items) == [("B", 0), ("A", 1), ("C", 2), ("D", 3)]
    assert layout(result.changed) == [("B", 0), ("A", 1)]


def test_move_to_own_position_is_a_no_op() -> None:
    items = [item("A", 0), item("B", 1), item("C", 2)]
    result = compute_reorder(items, "B", 1)
    assert result.changed == []
    assert result.items == items


def test_unknown_item_is_a_no_op() -> None:
    items = [item("A", 0), item("B", 1)]
    result = compute_reorder(items, "Z", 0)
    assert result.changed == []
    assert result.items == items


def test_index_past_end_clamps_to_last_position() -> None:
    result = compute_reorder([item("A", 0), item("B", 1), item("C", 2)], "A", 99)
    assert layout(result.items) == [("B", 0), ("C", 1), ("A", 2)]


def test_filtered_move_uses_displayed_neighbours() -> None:
    items = [item("A", 0, "X"), item("B", 1, "Y"), item("C", 2, "X")]
    result = compute_reorder(items, "C", 0, visible_ids=["A", "C"])
    assert layout(result.items) == [("C", 0), ("B", 1), ("A", 2)]
    assert {entry.item_id for entry in result.changed} == {"A", "C"}


def test_filtered_move_keeps_hidden_items_in_place() -> None:
    items = [item("A", 0, "X"), item("B", 1, "Y"), item("C", 2, "X"), item("D", 3, "Y"), item("E", 4, "X")]
    result = compute_reorder(items, "A", 5, visible_ids=["A", "C", "E"])
    assert layout(result.items) == [("C", 0), ("B", 1), ("E", 2), ("D", 3), ("A", 4)]


def test_input_is_not_mutated() -> None:
    items = [item("A", 0), item("B", 1)]
    compute_reorder(items, "B", 0)
    assert layout(items) == [("A", 0), ("B", 1)]
