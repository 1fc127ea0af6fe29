"""Tests for embed parsing and block resolution."""

from pathlib import Path

from commitembed.embeds import Embed, find_embeds, resolve_embed, slice_block
from commitembed.vault import VaultStore

NOTE = (
    "---\n"
    "tags: [lemma, category-theory]\n"
    "---\n"
    "\n"
    "> [!lemma] Lemma 7 (Yoneda) ^thm-42\n"
    "> Nat(Hom(A,-), F) = F(A)\n"
    "> natural in A\n"
    "\n"
    "## Proof & Details\n"
)


def test_find_embeds():
    text = "See ![[Theorems/Lemma 7 - Yoneda.md#^thm-42]] and ![[B.md#^thm-1]]."
    assert find_embeds(text) == [
        Embed("Theorems/Lemma 7 - Yoneda.md", "thm-42"),
        Embed("B.md", "thm-1"),
    ]


def test_embed_str_round_trips():
    embed = Embed("T/A.md", "thm-9")
    assert find_embeds(str(embed)) == [embed]


def test_plain_links_are_not_embeds():
    assert find_embeds("[[Note]] ![[Note]] ![[Note#Heading]]") == []


def test_slice_callout_block():
    assert slice_block(NOTE, "thm-42") == (
        "> [!lemma] Lemma 7 (Yoneda) ^thm-42\n"
        "> Nat(Hom(A,-), F) = F(A)\n"
        "> natural in A"
    )


def test_slice_missing_anchor():
    assert slice_block(NOTE, "thm-43") is None


def test_resolve_against_store(tmp_path: Path):
    store = VaultStore(tmp_path)
    store.create_folder("Theorems")
    store.create_file("Theorems/L.md", NOTE)
    assert resolve_embed(store, Embed("Theorems/L.md", "thm-42")).startswith("> [!lemma]")
    assert resolve_embed(store, Embed("Theorems/L", "thm-42")) is not None
    assert resolve_embed(store, Embed("Theorems/Missing.md", "thm-42")) is None
