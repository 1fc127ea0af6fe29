"""The document being edited: text plus a current selection."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class DocumentSurface(Protocol):
    """What the synthesizer needs from the active document."""

    path: Path | None

    def get_selection(self) -> str: ...

    def replace_selection(self, text: str) -> None: ...

    def get_text(self) -> str: ...

    def sync(self) -> bool:
        """Write the in-editor text to storage. Returns True if anything was written."""
        ...


class TextDocument:
    """Plain-text document with a character-offset selection, optionally backed by a file."""

    def __init__(self, text: str = "", path: str | Path | None = None) -> None:
        self.text = text
        self.path = Path(path) if path is not None else None
        self.start = 0
        self.end = 0

    @classmethod
    def open(cls, path: str | Path) -> TextDocument:
        path = Path(path)
        return cls(path.read_text(encoding="utf-8"), path)

    def select(self, start: int, end: int) -> None:
        if start > end:
            start, end = end, start
        if start < 0 or end > len(self.text):
            raise ValueError(f"Selection {start}-{end} outside document of length {len(self.text)}")
        self.start, self.end = start, end

    def select_lines(self, first: int, last: int) -> None:
        """Select whole lines *first*..*last* (1-based, inclusive), without the final newline."""
        lines = self.text.splitlines(keepends=True)
        if first < 1 or last < first or last > len(lines):
            raise ValueError(f"Line range {first}-{last} outside document of {len(lines)} lines")
        start = sum(len(line) for line in lines[: first - 1])
        end = start + sum(len(line) for line in lines[first - 1 : last])
        selected = self.text[start:end]
        end -= len(selected) - len(selected.rstrip("\r\n"))
        self.select(start, end)

    def select_match(self, needle: str) -> None:
        """Select the first occurrence of *needle*."""
        index = self.text.find(needle) if needle else -1
        if index < 0:
            raise ValueError(f"Text not found in document: {needle!r}")
        self.select(index, index + len(needle))

    def get_selection(self) -> str:
        return self.text[self.start : self.end]

    def replace_selection(self, text: str) -> None:
        self.text = self.text[: self.start] + text + self.text[self.end :]
        self.end = self.start + len(text)

    def get_text(self) -> str:
        return self.text

    def sync(self) -> bool:
        if self.path is None:
            return False
        self.path.write_text(self.text, encoding="utf-8")
        logger.debug("Wrote %s", self.path)
        return True
