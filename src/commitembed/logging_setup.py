"""Logging configuration for commit-embed.

Logs to both:
- commit-embed.log next to the config file (persistent, for debugging, 5 MB cap, 2 backups)
- stderr (only warnings and above), except while the editor TUI owns the terminal
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from commitembed.config import CONFIG_PATH

LOG_DIR = Path.home() / ".config" / "commit-embed"
LOG_FILE = LOG_DIR / "commit-embed.log"

_LOG_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_LOG_BACKUP_COUNT = 2


def log_file_for(config_file: Path | None) -> Path:
    """Log file that belongs with *config_file*: the default log, or a sibling of a custom config."""
    if config_file is None or config_file == CONFIG_PATH:
        return LOG_FILE
    return config_file.parent / LOG_FILE.name


def setup_logging(debug: bool = False, log_file: Path | None = None, console: bool = True) -> None:
    """Configure logging for the application.

    Safe to call again (e.g. with ``console=False`` before starting the TUI):
    handlers from an earlier call are replaced.
    """
    log_file = log_file or LOG_FILE
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger("commitembed")
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    fh = RotatingFileHandler(
        str(log_file),
        maxBytes=_LOG_MAX_BYTES,
        backupCount=_LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root.addHandler(fh)

    if not console:
        # Stray stderr writes would tear the TUI's screen.
        return

    sh = logging.StreamHandler()
    sh.setLevel(logging.DEBUG if debug else logging.WARNING)
    sh.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root.addHandler(sh)
