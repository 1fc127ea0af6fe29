"""Item dialog: pick a kind, optionally name it. Dismisses with an ItemRequest or None."""

from __future__ import annotations

from dataclasses import dataclass

from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select

from commitembed.items import ItemKind
from commitembed.screens.base import DIALOG_BINDINGS


@dataclass(frozen=True)
class ItemRequest:
    name: str
    kind: ItemKind


KIND_OPTIONS = [(kind.value, kind) for kind in ItemKind]


class ItemDialog(ModalScreen[ItemRequest | None]):
    """Modal asking for the new item's kind and name. Empty names are allowed."""

    BINDINGS = DIALOG_BINDINGS

    DEFAULT_CSS = """
    ItemDialog {
        align: center middle;
    }
    #item-dialog {
        width: 60;
        height: auto;
        background: $surface;
        border: tall $accent;
        padding: 1 2;
    }
    #item-dialog-title {
        text-style: bold;
        margin-bottom: 1;
    }
    #item-dialog-buttons {
        height: auto;
        margin-top: 1;
        align: right middle;
    }
    #item-dialog-buttons Button {
        margin-left: 1;
    }
    """

    def __init__(self, kind: ItemKind = ItemKind.THEOREM) -> None:
        super().__init__()
        self.initial_kind = kind

    def compose(self):
        with Vertical(id="item-dialog"):
            yield Label("Create item", id="item-dialog-title")
            yield Label("Type")
            yield Select(KIND_OPTIONS, value=self.initial_kind, allow_blank=False, id="kind-select")
            yield Label("Name")
            yield Input(
                placeholder=f"(optional) {self.initial_kind.value} name",
                id="name-input",
            )
            with Horizontal(id="item-dialog-buttons"):
                yield Button("Save", id="btn-save", variant="primary")
                yield Button("Cancel", id="btn-cancel")

    def on_mount(self) -> None:
        self.query_one("#name-input", Input).focus()

    @property
    def kind(self) -> ItemKind:
        value = self.query_one("#kind-select", Select).value
        return value if isinstance(value, ItemKind) else ItemKind.THEOREM

    def on_select_changed(self, event: Select.Changed) -> None:
        if isinstance(event.value, ItemKind):
            self.query_one("#name-input", Input).placeholder = f"(optional) {event.value.value} name"

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.action_submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-save":
            self.action_submit()
        elif event.button.id == "btn-cancel":
            self.action_cancel()

    def action_submit(self) -> None:
        name = self.query_one("#name-input", Input).value.strip()
        self.dismiss(ItemRequest(name=name, kind=self.kind))

    def action_cancel(self) -> None:
        self.dismiss(None)
