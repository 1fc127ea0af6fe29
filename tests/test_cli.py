"""Tests for the commit-embed CLI."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

pytest.importorskip("rich")

from commitembed import cli
from commitembed.config import load_config


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path: Path, monkeypatch):
    monkeypatch.setattr("commitembed.logging_setup.LOG_FILE", tmp_path / "logs" / "commit-embed.log")
    yield
    root = logging.getLogger("commitembed")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


@pytest.fixture()
def vault(tmp_path: Path) -> Path:
    root = tmp_path / "vault"
    root.mkdir()
    (root / "notes.md").write_text("Intro\nEvery functor is nice.\nOutro\n", encoding="utf-8")
    return root


@pytest.fixture()
def cfg(tmp_path: Path) -> Path:
    return tmp_path / "config.json"


def _run(cfg: Path, *args: str):
    return CliRunner().invoke(cli.main, ["--config", str(cfg), *args])


def test_parse_lines():
    assert cli._parse_lines("4") == (4, 4)
    assert cli._parse_lines("3-5") == (3, 5)


def test_create_by_lines(vault: Path, cfg: Path):
    result = _run(cfg, "create", str(vault / "notes.md"), "--lines", "2", "-k", "lemma", "-n", "Yoneda")
    assert result.exit_code == 0, result.output
    note = vault / "Theorems" / "Lemma 1 - Yoneda.md"
    assert note.exists()
    assert "> Every functor is nice." in note.read_text(encoding="utf-8")
    doc = (vault / "notes.md").read_text(encoding="utf-8")
    assert doc.startswith("Intro\n![[Theorems/Lemma 1 - Yoneda.md#^thm-")
    assert doc.endswith("]]\nOutro\n")
    assert load_config(cfg)["counter"] == 1


def test_create_by_match_with_explicit_vault(vault: Path, cfg: Path):
    result = _run(
        cfg, "create", str(vault / "notes.md"), "--match", "functor", "--vault", str(vault), "-k", "Definition",
    )
    assert result.exit_code == 0, result.output
    note = vault / "Theorems" / "Definition 1 - Untitled.md"
    assert "## Details" in note.read_text(encoding="utf-8")
    assert "Every ![[Theorems/Definition 1 - Untitled.md#^thm-" in (vault / "notes.md").read_text(encoding="utf-8")


def test_create_requires_one_selector(vault: Path, cfg: Path):
    result = _run(cfg, "create", str(vault / "notes.md"))
    assert result.exit_code != 0
    assert not (vault / "Theorems").exists()


def test_create_missing_match(vault: Path, cfg: Path):
    result = _run(cfg, "create", str(vault / "notes.md"), "--match", "absent")
    assert result.exit_code != 0
    assert load_config(cfg)["counter"] == 0


def test_create_existing_file_fails(vault: Path, cfg: Path):
    (vault / "Theorems").mkdir()
    (vault / "Theorems" / "Theorem 1 - Untitled.md").write_text("taken", encoding="utf-8")
    before = (vault / "notes.md").read_text(encoding="utf-8")
    result = _run(cfg, "create", str(vault / "notes.md"), "--lines", "2")
    assert result.exit_code == 1
    assert "might already exist" in result.output
    assert (vault / "notes.md").read_text(encoding="utf-8") == before
    assert load_config(cfg)["counter"] == 1


def test_list_reads_tags(vault: Path, cfg: Path):
    _run(cfg, "create", str(vault / "notes.md"), "--lines", "2", "-k", "Corollary")
    result = _run(cfg, "list", "--vault", str(vault))
    assert result.exit_code == 0, result.output
    assert "Corollary 1 - Untitled" in result.output
    assert "corollary, category-theory" in result.output


def test_list_empty(vault: Path, cfg: Path):
    result = _run(cfg, "list", "--vault", str(vault))
    assert "No items" in result.output


def test_list_folder_outside_vault(vault: Path, cfg: Path):
    _run(cfg, "config", "--folder", "../outside")
    result = _run(cfg, "list", "--vault", str(vault))
    assert result.exit_code == 0, result.output
    assert "outside the vault" in result.output


def test_list_marks_undecodable_note(vault: Path, cfg: Path):
    (vault / "Theorems").mkdir()
    (vault / "Theorems" / "Latin-1 Lemma.md").write_bytes(b"---\ntags: [caf\xe9]\n---\n")
    result = _run(cfg, "list", "--vault", str(vault))
    assert result.exit_code == 0, result.output
    assert "Latin-1 Lemma" in result.output
    assert "(unreadable)" in result.output


def test_config_set_counter_and_folder(cfg: Path):
    result = _run(cfg, "config", "--counter", "12", "--folder", "Math")
    assert result.exit_code == 0, result.output
    raw = json.loads(cfg.read_text(encoding="utf-8"))
    assert raw["counter"]["value"] == 12
    assert raw["target_folder"]["value"] == "Math"


def test_config_ignores_non_numeric_counter(cfg: Path):
    _run(cfg, "config", "--counter", "5")
    result = _run(cfg, "config", "--counter", "five")
    assert "Ignored" in result.output
    assert load_config(cfg)["counter"] == 5
