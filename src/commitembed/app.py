"""Textual editor for one Markdown document inside a vault.

Layout:
┌──────────────────────────────┬──────────────────┐
│  commit-embed  notes/cat.md  │                  │
├──────────────────────────────┤  Embeds          │
│  ...text with a selection... │  > [!lemma] ...  │
│                              │  > ...           │
├──────────────────────────────┴──────────────────┤
│  ^t Commit & embed  ^s Save  ^g Settings  ^q    │
└─────────────────────────────────────────────────┘
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from textual.app import App, ComposeResult
from textual.command import DiscoveryHit, Hit, Provider
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Footer, Static, TextArea

from commitembed.config import save_config
from commitembed.embeds import find_embeds, resolve_embed
from commitembed.screens.base import EDITOR_BINDINGS
from commitembed.screens.naming import ItemDialog, ItemRequest
from commitembed.screens.settings import SettingsScreen
from commitembed.synthesizer import NoteSynthesizer
from commitembed.vault import VaultStore

logger = logging.getLogger(__name__)

COMMIT_COMMAND = "Commit and Embed Selection"


class CommitEmbedCommands(Provider):
    """Command palette provider for the commit action."""

    async def search(self, query: str):
        matcher = self.matcher(query)
        app = self.app
        for name, action, help_text in _palette_entries(app):
            if (score := matcher.match(name)) > 0:
                yield Hit(score, matcher.highlight(name), action, help=help_text)

    async def discover(self):
        for name, action, help_text in _palette_entries(self.app):
            yield DiscoveryHit(name, action, help=help_text)


def _palette_entries(app: Any) -> list[tuple[str, Callable[[], Any], str]]:
    return [
        (COMMIT_COMMAND, app.action_commit, "Move the selection into a new note and embed it"),
        ("Commit and Embed Settings", app.action_settings, "Edit the item counter and target folder"),
    ]


class EditorDocument:
    """Document surface over the editor's TextArea."""

    def __init__(self, text_area: TextArea, path: Path | None) -> None:
        self.text_area = text_area
        self.path = path

    def get_selection(self) -> str:
        return self.text_area.selected_text

    def replace_selection(self, text: str) -> None:
        selection = self.text_area.selection
        start, end = sorted((selection.start, selection.end))
        self.text_area.replace(text, start, end)

    def get_text(self) -> str:
        return self.text_area.text

    def sync(self) -> bool:
        if self.path is None:
            return False
        self.path.write_text(self.text_area.text, encoding="utf-8")
        return True


class EditorApp(App[None]):
    """Edit one document; commit selections into numbered notes."""

    TITLE = "commit-embed"
    COMMANDS = App.COMMANDS | {CommitEmbedCommands}
    BINDINGS = EDITOR_BINDINGS

    CSS = """
    #status-bar {
        dock: top;
        height: 1;
        background: $accent;
        color: $text;
        padding: 0 1;
    }

    #editor {
        width: 2fr;
    }

    #preview {
        width: 1fr;
        border-left: solid $accent;
        padding: 0 1;
    }

    #preview-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    def __init__(
        self,
        document_path: str | Path,
        store: VaultStore,
        settings: dict[str, Any],
        save_settings: Callable[[dict[str, Any]], None] = save_config,
    ) -> None:
        super().__init__()
        self.document_path = Path(document_path)
        self.store = store
        self.settings = settings
        self.save_settings = save_settings
        self.synthesizer = NoteSynthesizer(
            store,
            settings,
            save_settings=save_settings,
            notify=self.notify,
        )
        self.document: EditorDocument | None = None

    def compose(self) -> ComposeResult:
        text = self.document_path.read_text(encoding="utf-8") if self.document_path.exists() else ""
        yield Static("", id="status-bar")
        with Horizontal():
            yield TextArea(text, id="editor")
            with VerticalScroll(id="preview"):
                yield Static("Embeds", id="preview-title")
                yield Static("", id="preview-body", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        editor = self.query_one("#editor", TextArea)
        self.document = EditorDocument(editor, self.document_path)
        self.store.subscribe(self._on_vault_changed)
        self._update_status()
        self._refresh_preview()
        editor.focus()

    def on_unmount(self) -> None:
        self.store.unsubscribe(self._on_vault_changed)

    def _update_status(self) -> None:
        rel = self.store.relative(self.document_path) or str(self.document_path)
        counter = self.settings.get("counter", 0)
        self.query_one("#status-bar", Static).update(
            f"  commit-embed  {rel}  |  next item #{counter + 1}"
        )

    def _on_vault_changed(self, path: str) -> None:
        logger.debug("Vault changed: %s", path)
        self._refresh_preview()

    def _refresh_preview(self) -> None:
        if self.document is None:
            return
        blocks: list[str] = []
        for embed in find_embeds(self.document.get_text()):
            block = resolve_embed(self.store, embed)
            blocks.append(block if block is not None else f"(unresolved) {embed}")
        body = "\n\n".join(blocks) if blocks else "No embeds in this document."
        self.query_one("#preview-body", Static).update(body)

    def action_commit(self) -> None:
        """Ask for kind and name, then commit the current selection."""
        if self.document is None:
            return
        # One dialog at a time: the selection is read only when it confirms.
        if any(isinstance(screen, ItemDialog) for screen in self.screen_stack):
            return
        if not self.document.get_selection():
            self.notify("Error: No text selected.")
            return
        self.push_screen(ItemDialog(), self._on_item_chosen)

    def _on_item_chosen(self, request: ItemRequest | None) -> None:
        if request is None or self.document is None:
            self.notify("Cancelled.")
            return
        self.synthesizer.commit(self.document, request.name, request.kind)
        self._update_status()
        self._refresh_preview()

    def action_save(self) -> None:
        if self.document is None:
            return
        try:
            self.document.sync()
        except OSError as exc:
            logger.error("Could not save %s: %s", self.document_path, exc)
            self.notify(f"Could not save: {exc}", severity="error")
            return
        rel = self.store.relative(self.document_path)
        if rel is not None:
            self.store.notify_changed(rel)
        self.notify(f"Saved {self.document_path.name}")

    def action_settings(self) -> None:
        self.push_screen(SettingsScreen(self.settings, self.save_settings), lambda _: self._update_status())
