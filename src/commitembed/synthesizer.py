"""Commit a selection as a new note and embed it back into the document.

Order of effects, one commit:

1. refuse an empty selection (nothing touched)
2. counter + 1, saved immediately (a failed save aborts); never rolled back afterwards
3. ensure the target folder exists (failure aborts)
4-6. build the draft: anchor, safe title, header
7. create the note file (failure aborts, document untouched)
8. append the proof/details section (failure only logged)
9. notify the store that the note changed
10. replace the selection with the embed reference
11. write the document back and notify again (failure only logged)
12. report success

Two overlapping commits against the same settings file may hand out the same
number; the second then fails at step 7 with "might already exist".
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

from commitembed.config import DEFAULT_TARGET_FOLDER, save_config
from commitembed.document import DocumentSurface
from commitembed.items import ItemKind, NoteDraft, draft_note
from commitembed.vault import VaultStore

logger = logging.getLogger(__name__)

# Same call shape as textual's App.notify(message, severity=...)
Notify = Callable[..., None]


class CommitError(Exception):
    """A commit that stopped before the embed was inserted."""

    severity = "error"


class EmptySelection(CommitError):
    severity = "information"

    def __init__(self) -> None:
        super().__init__("Error: No text selected.")


class SettingsSaveFailed(CommitError):
    def __init__(self) -> None:
        super().__init__("Error: Could not save the item counter.")


class FolderCreationFailed(CommitError):
    def __init__(self, folder: str) -> None:
        super().__init__(f'Error creating "{folder}" folder.')
        self.folder = folder


class FileCreationFailed(CommitError):
    def __init__(self, file_name: str) -> None:
        super().__init__(f'Error: File "{file_name}" might already exist.')
        self.file_name = file_name


@dataclass(frozen=True)
class CommitResult:
    draft: NoteDraft
    appendix_written: bool
    document_synced: bool

    @property
    def embed_reference(self) -> str:
        return self.draft.embed_reference

    @property
    def file_path(self) -> str:
        return self.draft.file_path


def _discard(message: str, severity: str = "information", **_: Any) -> None:
    logger.debug("[%s] %s", severity, message)


class NoteSynthesizer:
    """Runs commits against one vault, one settings dict, and a notice sink.

    *settings* is shared and mutated in place (``counter``); *save_settings*
    persists it after every increment.
    """

    def __init__(
        self,
        store: VaultStore,
        settings: dict[str, Any],
        *,
        save_settings: Callable[[dict[str, Any]], None] = save_config,
        notify: Notify | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.store = store
        self.settings = settings
        self.save_settings = save_settings
        self.notify = notify or _discard
        self.clock = clock

    @property
    def target_folder(self) -> str:
        folder = str(self.settings.get("target_folder") or "").strip().strip("/")
        return folder or DEFAULT_TARGET_FOLDER

    def commit(self, document: DocumentSurface, raw_title: str, kind: ItemKind) -> CommitResult | None:
        """Run one commit. Returns None (after notifying) when it aborted."""
        try:
            result = self._commit(document, raw_title, kind)
        except CommitError as exc:
            if exc.severity == "error":
                logger.error("%s", exc)
            self.notify(str(exc), severity=exc.severity)
            return None
        label = result.draft.safe_title
        self.notify(f'{kind.value} "{label}" created successfully.', severity="information")
        return result

    def _commit(self, document: DocumentSurface, raw_title: str, kind: ItemKind) -> CommitResult:
        selection = document.get_selection()
        if not selection:
            raise EmptySelection()

        counter = int(self.settings.get("counter", 0))
        self.settings["counter"] = counter + 1
        try:
            self.save_settings(self.settings)
        except OSError as exc:
            # Nothing was persisted, so the number is still free.
            self.settings["counter"] = counter
            logger.error("Could not save settings: %s", exc)
            raise SettingsSaveFailed() from exc

        folder = self.target_folder
        self._ensure_folder(folder)

        draft = draft_note(selection, raw_title, kind, counter, folder, clock=self.clock)
        self._create(draft)
        appendix_written = self._append_appendix(draft)

        self.store.notify_changed(draft.file_path)
        document.replace_selection(draft.embed_reference)
        synced = self._refresh_document(document)

        logger.info("Committed %s as %s", kind.value, draft.embed_reference)
        return CommitResult(draft=draft, appendix_written=appendix_written, document_synced=synced)

    def _ensure_folder(self, folder: str) -> None:
        try:
            if not self.store.folder_exists(folder):
                self.store.create_folder(folder)
        except (OSError, ValueError) as exc:
            logger.error("Error creating folder %s: %s", folder, exc)
            raise FolderCreationFailed(folder) from exc

    def _create(self, draft: NoteDraft) -> None:
        try:
            self.store.create_file(draft.file_path, draft.header)
        except (OSError, ValueError) as exc:
            # Collisions and permission errors are reported alike.
            logger.error("Error creating file %s: %s", draft.file_path, exc)
            raise FileCreationFailed(draft.file_name) from exc

    def _append_appendix(self, draft: NoteDraft) -> bool:
        try:
            self.store.append(draft.file_path, draft.appendix)
        except OSError as exc:
            logger.warning("Appending %s section to %s failed: %s", draft.kind.appendix_heading, draft.file_path, exc)
            return False
        return True

    def _refresh_document(self, document: DocumentSurface) -> bool:
        try:
            synced = document.sync()
        except OSError as exc:
            logger.warning("Could not write back %s: %s", document.path, exc)
            return False
        if synced and document.path is not None:
            rel = self.store.relative(document.path)
            if rel is not None:
                self.store.notify_changed(rel)
        return synced
