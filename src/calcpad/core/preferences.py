"""
Persisted user preferences.

A single ``theme`` key is kept in a JSON state file (``.calcpad/state.json``
by default). When nothing is saved, the configured system theme applies.
"""

from __future__ import annotations

import json
import logging
from enum import StrEnum
from pathlib import Path
from typing import Any

from .errors import StateError

logger = logging.getLogger(__name__)

THEME_KEY = "theme"
DEFAULT_STATE_FILE = Path(".calcpad") / "state.json"


class Theme(StrEnum):
    """Display themes."""

    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> Theme:
        return Theme.LIGHT if self == Theme.DARK else Theme.DARK


class ThemeStore:
    """Reads and writes the saved theme in a JSON state file."""

    def __init__(self, path: Path = DEFAULT_STATE_FILE) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StateError(f"Failed to load state file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StateError(f"State file {self.path} must contain a JSON object")
        return data

    def load(self) -> Theme | None:
        """
        Load the saved theme.

        Returns:
            The saved Theme, or None if nothing has been saved

        Raises:
            StateError: If the state file is corrupted
        """
        value = self._read().get(THEME_KEY)
        if value is None:
            return None
        try:
            return Theme(value)
        except ValueError as e:
            raise StateError(f"Invalid saved theme {value!r} in {self.path}") from e

    def save(self, theme: Theme) -> None:
        """
        Save the theme, keeping any other keys in the state file.

        Raises:
            StateError: If the state file cannot be written
        """
        data = self._read()
        data[THEME_KEY] = Theme(theme).value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            raise StateError(f"Failed to save state file {self.path}: {e}") from e
        logger.debug("Saved theme %s to %s", theme, self.path)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


def resolve_theme(store: ThemeStore, system_default: Theme = Theme.LIGHT) -> Theme:
    """The saved theme if any, otherwise the system default."""
    saved = store.load()
    return saved if saved is not None else Theme(system_default)


def toggle_theme(store: ThemeStore, system_default: Theme = Theme.LIGHT) -> Theme:
    """Flip the current theme, persist it, and return the new value."""
    new_theme = resolve_theme(store, system_default).toggled()
    store.save(new_theme)
    return new_theme
