"""Tests for the persisted theme preference."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from calcpad.core.errors import StateError
from calcpad.core.preferences import Theme, ThemeStore, resolve_theme, toggle_theme


def test_missing_file_loads_none(state_file: Path) -> None:
    assert ThemeStore(state_file).load() is None


def test_save_and_load(state_file: Path) -> None:
    store = ThemeStore(state_file)
    store.save(Theme.DARK)
    assert state_file.exists()
    assert store.load() == Theme.DARK
    assert json.loads(state_file.read_text()) == {"theme": "dark"}


def test_save_keeps_other_keys(state_file: Path) -> None:
    state_file.parent.mkdir(parents=True)
    state_file.write_text(json.dumps({"other": 1}))
    ThemeStore(state_file).save(Theme.LIGHT)
    assert json.loads(state_file.read_text()) == {"other": 1, "theme": "light"}


def test_resolve_prefers_saved(state_file: Path) -> None:
    store = ThemeStore(state_file)
    assert resolve_theme(store, Theme.DARK) == Theme.DARK
    store.save(Theme.LIGHT)
    assert resolve_theme(store, Theme.DARK) == Theme.LIGHT


def test_toggle_persists(state_file: Path) -> None:
    store = ThemeStore(state_file)
    assert toggle_theme(store) == Theme.DARK
    assert store.load() == Theme.DARK
    assert toggle_theme(store) == Theme.LIGHT
    assert store.load() == Theme.LIGHT


def test_toggle_from_system_dark(state_file: Path) -> None:
    assert toggle_theme(ThemeStore(state_file), Theme.DARK) == Theme.LIGHT


def test_clear(state_file: Path) -> None:
    store = ThemeStore(state_file)
    store.save(Theme.DARK)
    store.clear()
    assert store.load() is None
    store.clear()


def test_corrupt_file(state_file: Path) -> None:
    state_file.parent.mkdir(parents=True)
    state_file.write_text("{not json")
    with pytest.raises(StateError, match="Failed to load"):
        ThemeStore(state_file).load()


def test_non_object_file(state_file: Path) -> None:
    state_file.parent.mkdir(parents=True)
    state_file.write_text("[1, 2]")
    with pytest.raises(StateError, match="JSON object"):
        ThemeStore(state_file).load()


def test_invalid_saved_theme(state_file: Path) -> None:
    state_file.parent.mkdir(parents=True)
    state_file.write_text(json.dumps({"theme": "sepia"}))
    with pytest.raises(StateError, match="Invalid saved theme"):
        ThemeStore(state_file).load()
