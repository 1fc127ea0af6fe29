"""TUI screens: item dialog, settings."""

from commitembed.screens.base import BackScreen
from commitembed.screens.naming import ItemDialog, ItemRequest
from commitembed.screens.settings import SettingsScreen

__all__ = [
    "BackScreen",
    "ItemDialog",
    "ItemRequest",
    "SettingsScreen",
]
