"""Version information for triage-swarm."""

from importlib import metadata
from pathlib import Path

DISTRIBUTION = "triage-swarm"


def _read_version() -> str:
    """Prefer the VERSION file of a source checkout, then installed metadata."""
    version_file = Path(__file__).resolve().parent.parent / "VERSION"
    if version_file.is_file():
        return version_file.read_text().strip()
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "0.0.0"


__version__ = _read_version()
__version_info__ = tuple(int(part) for part in __version__.split(".") if part.isdigit())
