"""Loading of API keys and TRIAGE_* settings from .env files.

Two files are consulted, repository first:

- ``<repo root>/.env``
- ``$XDG_CONFIG_HOME/triage-swarm/.env`` (``~/.config`` when unset)

Variables already present in the process environment are never
overwritten, and a key set by the repository file is not replaced by the
global one.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

REPO_MARKERS = ("pyproject.toml", ".git")

_env_loaded = False


def find_repo_root(start: Optional[Path] = None) -> Optional[Path]:
    """Walk upward from ``start`` (default: cwd) to the first directory with a repo marker."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        if any((directory / marker).exists() for marker in REPO_MARKERS):
            return directory
    return None


def get_global_config_path() -> Path:
    """Directory holding the user-wide triage-swarm settings."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / "triage-swarm"


def env_files(start: Optional[Path] = None) -> list[Path]:
    """Existing .env files in load order."""
    candidates = []
    repo_root = find_repo_root(start)
    if repo_root:
        candidates.append(repo_root / ".env")
    candidates.append(get_global_config_path() / ".env")
    return [path for path in candidates if path.is_file()]


def load_env(force: bool = False, start: Optional[Path] = None) -> bool:
    """Load the .env files once per process.

    Args:
        force: Load again even if already loaded
        start: Directory to search upward from for the repository root

    Returns:
        True if any .env file was read
    """
    global _env_loaded

    if _env_loaded and not force:
        return False

    files = env_files(start)
    for path in files:
        load_dotenv(path, override=False)
        logger.debug(f"Loaded environment from {path}")

    _env_loaded = True
    return bool(files)


def reload_env(start: Optional[Path] = None) -> bool:
    """Force a reload of the .env files."""
    return load_env(force=True, start=start)


def is_env_loaded() -> bool:
    return _env_loaded
