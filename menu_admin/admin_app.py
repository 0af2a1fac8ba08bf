"""Main Textual app class."""

from __future__ import annotations

import logging
from typing import Awaitable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.widgets import Header, Static

from menu_admin.collection import MenuCollection
from menu_admin.errors import MenuError, PersistenceError, StoreError, ValidationError
from menu_admin.filtering import MenuView
from menu_admin.item_modal import ItemModal, ItemSubmission
from menu_admin.models import MenuItem
from menu_admin.rendering import format_filter_bar, format_item_row
from menu_admin.uploader import ImageAssetUploader

logger = logging.getLogger(__name__)


class MenuAdminApp(App):
    """A Textual app for composing, filtering and reordering a menu."""

    TITLE = "Menu Admin"
    SUB_TITLE = "Makanan / Minuman / Dessert / Snack"

    CSS = """
    Screen {
        layout: vertical;
    }

    #menu-pane {
        height: 1fr;
        border: round $primary;
        padding: 1;
    }

    #filter-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #menu-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    selected_index = reactive(0)

    BINDINGS = [
        ("up", "move_selection(-1)", "Previous item"),
        ("down", "move_selection(1)", "Next item"),
        ("backspace", "backspace_search", "Delete search char"),
        ("escape", "leave_search", "Leave search"),
        Binding("ctrl+r", "reload", "Reload", priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, collection: MenuCollection, uploader: ImageAssetUploader | None = None) -> None:
        super().__init__()
        self.collection = collection
        self.uploader = uploader
        self.menu_view = MenuView()
        self.system_status = ""
        self._retry_submission: ItemSubmission | None = None
        self.collection.add_listener(self._refresh_all)

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="menu-pane"):
            yield Static(id="filter-bar")
            yield Static("Menu (0 items)", id="menu-title", classes="pane-title")
            yield Static("(menu is empty)", id="menu-list")

    def on_mount(self) -> None:
        logger.debug("on_mount")
        self._refresh_all()
        self.run_worker(self._load(), group="menu")

    def on_unmount(self) -> None:
        self.collection.close()

    def visible_items(self) -> list[MenuItem]:
        return self.menu_view.visible(self.collection)

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, ItemModal):
            return

        if self.input_state == "search":
            if event.key == "enter":
                self.action_leave_search()
                event.stop()
                return
            if event.is_printable and event.character:
                self.menu_view.set_search_term(self.menu_view.search_term + event.character)
                self.selected_index = 0
                self._refresh_all()
                event.stop()
            return

        if not event.is_printable or not event.character:
            return

        key = event.character
        if key == "/":
            self.input_state = "search"
            self._refresh_all()
            event.stop()
            return

        if key == "a":
            self._open_item_modal()
        elif key == "d":
            self._delete_selected()
        elif key == "j":
            self.action_move_selection(1)
        elif key == "k":
            self.action_move_selection(-1)
        elif key == "J":
            self._move_selected_item(1)
        elif key == "K":
            self._move_selected_item(-1)
        elif key == "c":
            self.menu_view.cycle_category()
            self.selected_index = 0
            self._refresh_all()
        else:
            return
        event.stop()

    def action_move_selection(self, delta: int) -> None:
        if isinstance(self.screen, ItemModal):
            return
        visible = self.visible_items()
        if not visible:
            self.selected_index = 0
            return
        self.selected_index = (self.selected_index + delta) % len(visible)
        self._refresh_menu(visible)

    def action_backspace_search(self) -> None:
        if isinstance(self.screen, ItemModal):
            return
        if self.input_state != "search" or not self.menu_view.search_term:
            return
        self.menu_view.set_search_term(self.menu_view.search_term[:-1])
        self.selected_index = 0
        self._refresh_all()

    def action_leave_search(self) -> None:
        if isinstance(self.screen, ItemModal):
            return
        if self.input_state == "normal":
            return
        self.input_state = "normal"
        self._refresh_all()

    def action_reload(self) -> None:
        if isinstance(self.screen, ItemModal):
            return
        if self.collection.busy:
            self._set_status("Menu is still saving, wait a moment")
            return
        self.run_worker(self._load(), group="menu")

    def _selected_item(self) -> MenuItem | None:
        visible = self.visible_items()
        if not (0 <= self.selected_index < len(visible)):
            return None
        return visible[self.selected_index]

    def _open_item_modal(self) -> None:
        self.push_screen(ItemModal(self._retry_submission), callback=self._on_item_submitted)

    def _on_item_submitted(self, submission: ItemSubmission | None) -> None:
        if submission is None:
            return
        self.run_worker(self._add(submission), group="menu")

    def _delete_selected(self) -> None:
        item = self._selected_item()
        if item is None:
            return
        if self.collection.is_pending(item.item_id):
            self._set_status(f"{item.name} is still saving")
            return
        self.run_worker(self._guarded(self.collection.delete_item(item.item_id), f"Deleted {item.name}"), group="menu")

    def _move_selected_item(self, delta: int) -> None:
        visible = self.visible_items()
        item = self._selected_item()
        if item is None:
            return
        target = self.selected_index + delta
        if not (0 <= target < len(visible)):
            return
        if self.collection.busy:
            self._set_status("Menu is still saving, wait a moment")
            return
        visible_ids = [entry.item_id for entry in visible]
        self.run_worker(self._reorder(item, target, visible_ids), group="menu")

    async def _load(self) -> None:
        self._set_status("Loading menu…")
        try:
            await self.collection.load()
        except MenuError as exc:
            self._set_status(exc.message)
            return
        self._set_status(f"Loaded {len(self.collection)} items")

    async def _add(self, submission: ItemSubmission) -> None:
        draft = submission.draft
        try:
            if submission.image_path:
                if self.uploader is None:
                    raise ValidationError("image", "Invalid input: image upload is not configured")
                try:
                    draft.image_url = await self.uploader.upload(submission.image_path)
                except StoreError as exc:
                    raise PersistenceError("image", "Could not upload image, please retry.") from exc
            item = await self.collection.add_item(draft)
        except MenuError as exc:
            self._retry_submission = submission
            logger.debug("add failed error=%r", exc)
            self._set_status(exc.message)
            return
        self._retry_submission = None
        if item is not None:
            self._set_status(f"Added {item.name}")

    async def _reorder(self, item: MenuItem, target: int, visible_ids: list[str]) -> None:
        previous = self.selected_index
        # The pointer follows the item; it goes back if the move is rolled back.
        self.selected_index = target
        try:
            await self.collection.reorder(item.item_id, target, visible_ids)
        except MenuError as exc:
            logger.debug("reorder failed error=%r", exc)
            self.selected_index = previous
            self._set_status(exc.message)
            self._refresh_menu(self.visible_items())
            return
        self._set_status(f"Moved {item.name}")

    async def _guarded(self, operation: Awaitable[object], success: str) -> None:
        try:
            await operation
        except MenuError as exc:
            logger.debug("operation failed error=%r", exc)
            self._set_status(exc.message)
            return
        self._set_status(success)

    def _set_status(self, message: str) -> None:
        self.system_status = message
        self._refresh_filter_bar()

    def _refresh_all(self) -> None:
        self._refresh_filter_bar()
        self._refresh_menu(self.visible_items())

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        # Rows with a description take two lines.
        return max(1, height // 2)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            start = max(0, selected - rows // 2)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_filter_bar(self) -> None:
        try:
            bar = self.query_one("#filter-bar", Static)
        except NoMatches:
            return
        text = format_filter_bar(self.menu_view.category, self.menu_view.search_term, self.input_state == "search")
        text.append("\n")
        text.append(self.system_status or "a add, d delete, J/K move, c category, / search", style="dim")
        bar.update(text)

    def _refresh_menu(self, visible: list[MenuItem]) -> None:
        try:
            title = self.query_one("#menu-title", Static)
            menu_widget = self.query_one("#menu-list", Static)
        except NoMatches:
            return
        title.update(f"Menu ({len(visible)} items)")

        if not visible:
            menu_widget.update("(no matching items)" if len(self.collection) else "(menu is empty)")
            return

        if self.selected_index >= len(visible):
            self.selected_index = len(visible) - 1

        start, end = self._window_bounds(len(visible), self._visible_rows(menu_widget), self.selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            item = visible[idx]
            lines.append_text(
                format_item_row(
                    idx + 1,
                    item,
                    selected=idx == self.selected_index,
                    pending=self.collection.is_pending(item.item_id),
                )
            )

        if end < len(visible):
            lines.append("\n⋮", style="dim")

        menu_widget.update(lines)
