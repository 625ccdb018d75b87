"""Version lookup for calcpad."""

import tomllib
from importlib import metadata
from pathlib import Path

DIST_NAME = "calcpad"
UNKNOWN_VERSION = "0.0.0"

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """Installed distribution version, falling back to a source checkout."""
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return _source_version(_PYPROJECT)


def _source_version(pyproject: Path) -> str:
    try:
        with pyproject.open("rb") as f:
            project = tomllib.load(f).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return UNKNOWN_VERSION
    return str(project.get("version", UNKNOWN_VERSION))
