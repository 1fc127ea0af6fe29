"""Load, save, and validate the JSON config at ~/.config/commit-embed/config.json."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "commit-embed"
CONFIG_PATH = CONFIG_DIR / "config.json"
CONFIG_ENV = "COMMIT_EMBED_CONFIG"

DEFAULT_TARGET_FOLDER = "Theorems"

DEFAULTS: dict[str, dict[str, Any]] = {
    "counter": {
        "value": 0,
        "description": "Number of the last created item. The next item gets counter + 1. Reset by editing.",
    },
    "target_folder": {
        "value": DEFAULT_TARGET_FOLDER,
        "description": "Vault-relative folder for created notes. Blank falls back to 'Theorems'.",
    },
}


def config_path() -> Path:
    """Config file in use: $COMMIT_EMBED_CONFIG if set, else the default location."""
    override = os.environ.get(CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return CONFIG_PATH


def _normalise(values: dict[str, Any]) -> dict[str, Any]:
    folder = values.get("target_folder")
    if not isinstance(folder, str) or not folder.strip():
        values["target_folder"] = DEFAULT_TARGET_FOLDER
    else:
        values["target_folder"] = folder.strip()
    counter = values.get("counter")
    if isinstance(counter, bool) or not isinstance(counter, int) or counter < 0:
        logger.warning("Ignoring invalid counter value %r", counter)
        values["counter"] = DEFAULTS["counter"]["value"]
    return values


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Return a flat dict of {key: value} from the config file, merged with defaults."""
    path = path or config_path()
    values: dict[str, Any] = {k: v["value"] for k, v in DEFAULTS.items()}

    if path.exists():
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            for key, entry in raw.items():
                if key.startswith("_"):
                    continue
                if isinstance(entry, dict) and "value" in entry:
                    values[key] = entry["value"]
                else:
                    values[key] = entry
        except (json.JSONDecodeError, OSError, AttributeError) as exc:
            logger.warning("Could not read config at %s: %s", path, exc)

    return _normalise(values)


def save_config(values: dict[str, Any], path: Path | None = None) -> None:
    """Write current values back to the config file, preserving descriptions."""
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    values = _normalise(dict(values))
    data: dict[str, Any] = {
        "_description": "commit-embed configuration. Edit values below; descriptions are for reference."
    }
    for key, meta in DEFAULTS.items():
        data[key] = {
            "value": values.get(key, meta["value"]),
            "description": meta["description"],
        }
    path.write_text(
        json.dumps(data, indent=4, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    logger.debug("Config saved to %s", path)


def set_counter(values: dict[str, Any], raw: str) -> bool:
    """Apply free-text counter input. Non-numeric or negative input leaves the value alone."""
    try:
        number = int(raw.strip(), 10)
    except ValueError:
        return False
    if number < 0:
        return False
    values["counter"] = number
    return True


def set_target_folder(values: dict[str, Any], raw: str) -> str:
    folder = raw.strip() or DEFAULT_TARGET_FOLDER
    values["target_folder"] = folder
    return folder


def init_config_if_missing(path: Path | None = None) -> bool:
    """Create default config file if it doesn't exist. Return True if created."""
    path = path or config_path()
    if path.exists():
        return False
    defaults = {k: v["value"] for k, v in DEFAULTS.items()}
    save_config(defaults, path)
    return True
