"""Shared bindings and base screen for the commit-embed TUI."""

from __future__ import annotations

from textual.binding import Binding
from textual.screen import Screen

BACK_BINDINGS = [
    Binding("escape", "back", "Back"),
    Binding("ctrl+c", "back", "Back", key_display="^c", priority=True),
]

DIALOG_BINDINGS = [
    Binding("escape", "cancel", "Cancel"),
    Binding("ctrl+c", "cancel", "Cancel", key_display="^c", priority=True),
]

EDITOR_BINDINGS = [
    Binding("ctrl+t", "commit", "Commit & embed", key_display="^t", priority=True),
    Binding("ctrl+s", "save", "Save", key_display="^s", priority=True),
    Binding("ctrl+g", "settings", "Settings", key_display="^g", priority=True),
    Binding("ctrl+q", "quit", "Quit", key_display="^q", priority=True),
]


class BackScreen(Screen[None]):
    """Screen that provides escape -> back."""

    BINDINGS = BACK_BINDINGS

    def action_back(self) -> None:
        self.dismiss(None)
