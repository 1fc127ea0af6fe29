"""Settings: item counter and target folder."""

from __future__ import annotations

from typing import Any, Callable

from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Input, Static

from commitembed.config import DEFAULT_TARGET_FOLDER, save_config, set_counter, set_target_folder
from commitembed.screens.base import BackScreen


class SettingsScreen(BackScreen):
    """Edit the shared settings dict in place and save on every change."""

    DEFAULT_CSS = """
    SettingsScreen .screen-frame {
        height: 1fr;
    }
    SettingsScreen .top-bar {
        height: 3;
        background: $accent;
        padding: 1 1;
    }
    SettingsScreen .top-bar.compact {
        height: 1;
        padding: 0 1;
    }
    SettingsScreen .brand {
        width: auto;
        text-style: bold;
        margin-right: 2;
    }
    SettingsScreen .top-bar-section {
        width: 1fr;
        text-style: italic;
    }
    SettingsScreen .screen-body {
        height: 1fr;
        padding: 1 2;
    }
    SettingsScreen .screen-body Input {
        margin-bottom: 1;
    }
    SettingsScreen .spacer {
        height: 1fr;
    }
    SettingsScreen .btn {
        width: auto;
        min-width: 20;
    }
    SettingsScreen .btn.secondary {
        background: $panel;
    }
    """

    def __init__(
        self,
        settings: dict[str, Any],
        save_settings: Callable[[dict[str, Any]], None] = save_config,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.settings = settings
        self.save_settings = save_settings

    def compose(self):
        with Vertical(classes="screen-frame"):
            with Horizontal(classes="top-bar compact"):
                yield Static("commit-embed", classes="brand")
                yield Static("Settings", classes="top-bar-section")
            with Vertical(classes="screen-body"):
                yield Static("Item counter (the next item gets this number + 1):")
                yield Input(value=str(self.settings.get("counter", 0)), id="counter-input", placeholder="0")
                yield Static("Target folder for new notes (inside the vault):")
                yield Input(
                    value=self.settings.get("target_folder") or DEFAULT_TARGET_FOLDER,
                    id="folder-input",
                    placeholder=DEFAULT_TARGET_FOLDER,
                )
                yield Static("", classes="spacer")
                yield Button("esc Back to editor", id="btn-back", classes="btn secondary")

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "counter-input":
            # Non-numeric input keeps the previous value.
            if set_counter(self.settings, event.value):
                self.save_settings(self.settings)
        elif event.input.id == "folder-input":
            set_target_folder(self.settings, event.value)
            self.save_settings(self.settings)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-back":
            self.action_back()
