"""Vault file store: a directory of Markdown notes addressed by vault-relative paths.

Paths use forward slashes (``Theorems/Lemma 7 - Yoneda.md``) regardless of
platform. Reads are cached until ``notify_changed`` drops the entry, which is
also how embed previews learn that a note needs re-rendering.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Callable, Iterator

logger = logging.getLogger(__name__)

ChangeListener = Callable[[str], None]


class VaultStore:
    """Filesystem-backed hierarchical file store rooted at *root*."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).expanduser().resolve()
        self._cache: dict[str, str] = {}
        self._listeners: list[ChangeListener] = []

    def resolve(self, path: str) -> Path:
        """Absolute filesystem path for a vault path; refuses to leave the vault."""
        rel = PurePosixPath(path.replace("\\", "/"))
        if rel.is_absolute() or ".." in rel.parts:
            raise ValueError(f"Path escapes the vault: {path!r}")
        return self.root.joinpath(*rel.parts)

    def relative(self, path: str | Path) -> str | None:
        """Vault path for a filesystem path, or None when it lies outside the vault."""
        try:
            return Path(path).expanduser().resolve().relative_to(self.root).as_posix()
        except ValueError:
            return None

    def folder_exists(self, path: str) -> bool:
        return self.resolve(path).is_dir()

    def create_folder(self, path: str) -> None:
        self.resolve(path).mkdir(parents=True, exist_ok=True)
        logger.info("Created folder %s", path)

    def create_file(self, path: str, content: str) -> str:
        """Create a new file. Raises FileExistsError if anything is already there."""
        target = self.resolve(path)
        with target.open("x", encoding="utf-8", newline="\n") as fh:
            fh.write(content)
        self._cache[path] = content
        logger.info("Created %s", path)
        return path

    def append(self, path: str, content: str) -> None:
        target = self.resolve(path)
        with target.open("a", encoding="utf-8", newline="\n") as fh:
            fh.write(content)
        self._cache.pop(path, None)

    def read(self, path: str) -> str:
        if path not in self._cache:
            self._cache[path] = self.resolve(path).read_text(encoding="utf-8")
        return self._cache[path]

    def exists(self, path: str) -> bool:
        return self.resolve(path).is_file()

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify_changed(self, path: str) -> None:
        """Invalidate the cached content of *path* and tell listeners it changed."""
        self._cache.pop(path, None)
        for listener in list(self._listeners):
            try:
                listener(path)
            except Exception:
                logger.exception("Change listener failed for %s", path)

    def list_markdown(self, folder: str = "") -> Iterator[str]:
        """Vault paths of the .md files directly inside *folder*, sorted by name."""
        base = self.resolve(folder) if folder else self.root
        if not base.is_dir():
            return
        for p in sorted(base.glob("*.md")):
            yield p.relative_to(self.root).as_posix()
