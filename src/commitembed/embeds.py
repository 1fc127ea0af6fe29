"""Embed references and their resolution against the vault.

``![[Theorems/Lemma 7 - Yoneda.md#^thm-1718000000000]]`` resolves to the
callout block whose first line ends with ``^thm-1718000000000``: that line
plus the quoted lines that follow it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from commitembed.vault import VaultStore

logger = logging.getLogger(__name__)

EMBED_RE = re.compile(r"!\[\[(?P<path>[^\]#|]+?)#\^(?P<anchor>[A-Za-z0-9-]+)\]\]")


@dataclass(frozen=True)
class Embed:
    path: str
    anchor: str

    def __str__(self) -> str:
        return f"![[{self.path}#^{self.anchor}]]"


def find_embeds(text: str) -> list[Embed]:
    return [Embed(m.group("path"), m.group("anchor")) for m in EMBED_RE.finditer(text)]


def slice_block(content: str, anchor: str) -> str | None:
    """Return the block labelled ``^anchor`` in *content*, or None if absent."""
    lines = content.splitlines()
    marker = f"^{anchor}"
    for i, line in enumerate(lines):
        if not line.rstrip().endswith(marker):
            continue
        block = [line]
        if line.lstrip().startswith(">"):
            for follow in lines[i + 1 :]:
                if not follow.lstrip().startswith(">"):
                    break
                block.append(follow)
        return "\n".join(block)
    return None


def resolve_embed(store: VaultStore, embed: Embed) -> str | None:
    """Block content for *embed*, or None when the file or anchor is missing."""
    path = embed.path if embed.path.endswith(".md") else f"{embed.path}.md"
    try:
        content = store.read(path)
    except (OSError, ValueError) as exc:
        logger.debug("Cannot resolve %s: %s", embed, exc)
        return None
    return slice_block(content, embed.anchor)
