"""Tests for config module."""

import json

import pytest

from commitembed.config import (
    DEFAULTS,
    init_config_if_missing,
    load_config,
    save_config,
    set_counter,
    set_target_folder,
)


@pytest.fixture()
def cfg_path(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setenv("COMMIT_EMBED_CONFIG", str(path))
    return path


class TestLoadConfig:
    def test_has_all_default_keys(self, cfg_path):
        cfg = load_config()
        for key in DEFAULTS:
            assert key in cfg

    def test_defaults(self, cfg_path):
        assert load_config() == {"counter": 0, "target_folder": "Theorems"}

    def test_partial_record_merges_over_defaults(self, cfg_path):
        cfg_path.write_text(json.dumps({"counter": 4}), encoding="utf-8")
        assert load_config() == {"counter": 4, "target_folder": "Theorems"}

    def test_blank_folder_coerces_to_default(self, cfg_path):
        cfg_path.write_text(json.dumps({"target_folder": {"value": "   "}}), encoding="utf-8")
        assert load_config()["target_folder"] == "Theorems"

    def test_unreadable_file_falls_back(self, cfg_path):
        cfg_path.write_text("{not json", encoding="utf-8")
        assert load_config()["counter"] == 0


class TestSaveConfig:
    def test_round_trip_keeps_descriptions(self, cfg_path):
        save_config({"counter": 9, "target_folder": "Math/Items"})
        raw = json.loads(cfg_path.read_text(encoding="utf-8"))
        assert raw["counter"]["value"] == 9
        assert "description" in raw["target_folder"]
        assert load_config() == {"counter": 9, "target_folder": "Math/Items"}

    def test_init_only_once(self, cfg_path):
        assert init_config_if_missing() is True
        assert init_config_if_missing() is False


class TestEdits:
    def test_numeric_counter(self):
        values = {"counter": 3}
        assert set_counter(values, " 12 ") is True
        assert values["counter"] == 12

    @pytest.mark.parametrize("raw", ["abc", "", "1.5", "-2"])
    def test_invalid_counter_ignored(self, raw):
        values = {"counter": 3}
        assert set_counter(values, raw) is False
        assert values["counter"] == 3

    def test_blank_folder(self):
        values = {"target_folder": "X"}
        assert set_target_folder(values, "  ") == "Theorems"
        assert values["target_folder"] == "Theorems"
