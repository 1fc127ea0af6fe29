"""Tests for global/back key binding coverage."""

from __future__ import annotations

import pytest

pytest.importorskip("textual")

from commitembed.screens.base import BACK_BINDINGS, EDITOR_BINDINGS
from commitembed.screens.naming import ItemDialog


def _binding_exists(bindings, key: str, action: str, *, priority: bool | None = None) -> bool:
    for binding in bindings:
        if binding.key == key and binding.action == action:
            if priority is None or bool(binding.priority) == priority:
                return True
    return False


def test_back_screens_support_escape_and_ctrl_c() -> None:
    assert _binding_exists(BACK_BINDINGS, "escape", "back")
    assert _binding_exists(BACK_BINDINGS, "ctrl+c", "back", priority=True)


def test_dialog_escape_cancels() -> None:
    assert _binding_exists(ItemDialog.BINDINGS, "escape", "cancel")
    assert _binding_exists(ItemDialog.BINDINGS, "ctrl+c", "cancel", priority=True)


def test_editor_bindings_beat_text_area() -> None:
    assert _binding_exists(EDITOR_BINDINGS, "ctrl+t", "commit", priority=True)
    assert _binding_exists(EDITOR_BINDINGS, "ctrl+s", "save", priority=True)
    assert _binding_exists(EDITOR_BINDINGS, "ctrl+g", "settings", priority=True)
