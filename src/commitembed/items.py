"""Item kinds and note synthesis.

A committed selection becomes a note file shaped like::

    ---
    tags: [lemma, category-theory]
    details: "Add private notes or context here."
    ---

    > [!lemma] Lemma 7 (Yoneda Lemma) ^thm-1718000000000
    > <selected text>

    ## Proof & Details

    (Write proof, related examples, or additional context here...)

and the selection is replaced with ``![[<path>#^<anchor>]]``.
Everything here is pure: no file or settings access.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

import yaml

UNTITLED = "Untitled"
ANCHOR_PREFIX = "thm-"
CATEGORY_TAG = "category-theory"
DETAILS_PLACEHOLDER = "Add private notes or context here."

_SEPARATORS = re.compile(r"[/\\]+")


class ItemKind(str, Enum):
    THEOREM = "Theorem"
    LEMMA = "Lemma"
    PROPOSITION = "Proposition"
    COROLLARY = "Corollary"
    DEFINITION = "Definition"

    @property
    def tag(self) -> str:
        """Callout type and front-matter tag, e.g. ``lemma``."""
        return self.value.lower()

    @property
    def appendix_heading(self) -> str:
        return "Details" if self is ItemKind.DEFINITION else "Proof & Details"

    @property
    def appendix_noun(self) -> str:
        return "details" if self is ItemKind.DEFINITION else "proof"

    @classmethod
    def parse(cls, raw: str) -> ItemKind:
        """Case-insensitive lookup by label; raises ValueError on unknown kinds."""
        for kind in cls:
            if kind.value.lower() == raw.strip().lower():
                return kind
        raise ValueError(f"Unknown item kind: {raw!r}")


@dataclass(frozen=True)
class NoteDraft:
    """Everything one commit writes. Built once per invocation, then discarded."""

    selection: str
    raw_title: str
    safe_title: str
    kind: ItemKind
    sequence_number: int
    anchor_id: str
    folder: str

    @property
    def file_name(self) -> str:
        return f"{self.kind.value} {self.sequence_number} - {self.safe_title}.md"

    @property
    def file_path(self) -> str:
        return f"{self.folder}/{self.file_name}" if self.folder else self.file_name

    @property
    def formatted_title(self) -> str:
        return format_title(self.kind, self.sequence_number, self.raw_title)

    @property
    def header(self) -> str:
        return build_header(self.kind, self.formatted_title, self.anchor_id, self.selection)

    @property
    def appendix(self) -> str:
        return build_appendix(self.kind)

    @property
    def embed_reference(self) -> str:
        return build_embed(self.file_path, self.anchor_id)


def sanitize_title(raw: str) -> str:
    """Replace runs of path separators with a hyphen and trim.

    Idempotent: the output contains no separators left to replace.
    """
    return _SEPARATORS.sub("-", raw).strip()


def safe_title_for(raw: str) -> str:
    """Sanitised title, or the ``Untitled`` sentinel when nothing is left."""
    return sanitize_title(raw) or UNTITLED


def format_title(kind: ItemKind, number: int, raw_title: str) -> str:
    title = raw_title.strip()
    if not sanitize_title(title) or title == UNTITLED:
        return f"{kind.value} {number}"
    return f"{kind.value} {number} ({title})"


def quote_lines(text: str) -> str:
    """Blockquote every line so a multi-line selection stays inside the callout."""
    return "\n".join(f"> {line}" for line in text.splitlines() or [""])


def build_header(kind: ItemKind, title_line: str, anchor_id: str, selection: str) -> str:
    return (
        "---\n"
        f"tags: [{kind.tag}, {CATEGORY_TAG}]\n"
        f'details: "{DETAILS_PLACEHOLDER}"\n'
        "---\n"
        "\n"
        f"> [!{kind.tag}] {title_line} ^{anchor_id}\n"
        f"{quote_lines(selection)}\n"
    )


def build_appendix(kind: ItemKind) -> str:
    return (
        "\n"
        f"## {kind.appendix_heading}\n"
        "\n"
        f"(Write {kind.appendix_noun}, related examples, or additional context here...)\n"
    )


def build_embed(file_path: str, anchor_id: str) -> str:
    return f"![[{file_path}#^{anchor_id}]]"


def make_anchor_id(clock: Callable[[], float] = time.time) -> str:
    # Two commits inside the same millisecond share an anchor.
    return f"{ANCHOR_PREFIX}{int(clock() * 1000)}"


def draft_note(
    selection: str,
    raw_title: str,
    kind: ItemKind,
    counter: int,
    folder: str,
    clock: Callable[[], float] = time.time,
) -> NoteDraft:
    """Build the draft for the next item after *counter*."""
    return NoteDraft(
        selection=selection,
        raw_title=raw_title.strip(),
        safe_title=safe_title_for(raw_title),
        kind=kind,
        sequence_number=counter + 1,
        anchor_id=make_anchor_id(clock),
        folder=folder.strip().strip("/"),
    )


def read_front_matter(content: str) -> dict[str, Any]:
    """Return the YAML front matter of a note, or {} when absent or unreadable."""
    if not content.startswith("---"):
        return {}
    parts = content.split("---", 2)
    if len(parts) < 3:
        return {}
    try:
        data = yaml.safe_load(parts[1])
    except yaml.YAMLError:
        return {}
    return data if isinstance(data, dict) else {}
