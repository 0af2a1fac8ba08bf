"""Add-item modal screen."""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from menu_admin.collection import validate_draft
from menu_admin.constant import CATEGORIES
from menu_admin.currency import format_currency, strip_digits
from menu_admin.errors import ValidationError
from menu_admin.models import MenuDraft
from menu_admin.rendering import badge_style


@dataclass
class ItemSubmission:
    """What the add form produced: the draft and an optional local image file."""

    draft: MenuDraft = field(default_factory=MenuDraft)
    image_path: str = ""


class ItemModal(ModalScreen[ItemSubmission | None]):
    """Form for a new menu item. Enter advances; Enter on the last field submits."""

    CSS = """
    ItemModal {
        align: center middle;
        background: $background 60%;
    }

    #item-dialog {
        width: 72;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #item-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #item-body {
        margin-bottom: 1;
        color: white;
    }

    #item-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #item-help {
        color: #dddddd;
    }
    """

    FIELDS = (
        ("name", "Name"),
        ("price", "Price"),
        ("description", "Description"),
        ("category", "Category"),
        ("image_path", "Image file"),
    )

    def __init__(self, submission: ItemSubmission | None = None) -> None:
        super().__init__()
        previous = submission or ItemSubmission()
        self.values: dict[str, str] = {
            "name": previous.draft.name,
            "price": strip_digits(previous.draft.price),
            "description": previous.draft.description,
            "category": previous.draft.category,
            "image_path": previous.image_path,
        }
        self.cursor_index = 0
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="item-dialog"):
            yield Static("New Menu Item", id="item-title")
            yield Static(id="item-body")
            yield Static(id="item-error")
            yield Static(
                "↑/↓ field, ←/→ category, Enter next/save, Esc cancel.",
                id="item-help",
            )

    def on_mount(self) -> None:
        self._refresh_content()

    @property
    def current_field(self) -> str:
        return self.FIELDS[self.cursor_index][0]

    def on_key(self, event: Key) -> None:
        if event.key == "escape":
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            if self.cursor_index == len(self.FIELDS) - 1:
                self._confirm()
            else:
                self._move_cursor(1)
            event.stop()
            return

        if event.key in {"up", "down"}:
            self._move_cursor(-1 if event.key == "up" else 1)
            event.stop()
            return

        if self.current_field == "category":
            if event.key in {"left", "right"}:
                self._cycle_category(-1 if event.key == "left" else 1)
            event.stop()
            return

        if event.key == "backspace":
            value = self.values[self.current_field]
            if value:
                self.values[self.current_field] = value[:-1]
                self.error = ""
                self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            if self.current_field == "price" and not event.character.isdigit():
                event.stop()
                return
            self.values[self.current_field] += event.character
            self.error = ""
            self._refresh_content()
            event.stop()

    def build_submission(self) -> ItemSubmission:
        draft = MenuDraft(
            name=self.values["name"],
            price=self.values["price"],
            description=self.values["description"],
            category=self.values["category"],
        )
        return ItemSubmission(draft=draft, image_path=self.values["image_path"].strip())

    def _move_cursor(self, delta: int) -> None:
        self.cursor_index = (self.cursor_index + delta) % len(self.FIELDS)
        self._refresh_content()

    def _cycle_category(self, delta: int) -> None:
        current = self.values["category"]
        if current in CATEGORIES:
            idx = (CATEGORIES.index(current) + delta) % len(CATEGORIES)
        else:
            idx = 0 if delta > 0 else len(CATEGORIES) - 1
        self.values["category"] = CATEGORIES[idx]
        self.error = ""
        self._refresh_content()

    def _confirm(self) -> None:
        submission = self.build_submission()
        try:
            validate_draft(submission.draft)
        except ValidationError as exc:
            self.error = exc.message
            self.cursor_index = [name for name, _ in self.FIELDS].index(exc.field)
            self._refresh_content()
            return
        self.dismiss(submission)

    def _refresh_content(self) -> None:
        body = self.query_one("#item-body", Static)
        error_widget = self.query_one("#item-error", Static)

        content = Text(style="white")
        for idx, (name, label) in enumerate(self.FIELDS):
            if idx > 0:
                content.append("\n")
            active = idx == self.cursor_index
            content.append("➤ " if active else "  ")
            content.append(f"{label:<12}", style="bold" if active else "")

            value = self.values[name]
            if name == "category":
                if value:
                    content.append(f" {value} ", style=badge_style(value))
                else:
                    content.append("Pick a category", style="dim")
                continue
            if name == "price":
                value = format_currency(value)
            content.append(value)
            if active:
                content.append("|", style="bold")

        body.update(content)
        error_widget.update(self.error or "")
