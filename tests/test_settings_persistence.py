"""Tests for the language and theme preference stores.

Updates:
  v0.2.1 - 2026-10-17 - Cover the abstract store base.
  v0.2.0 - 2026-10-05 - Cover the JSON file store.
  v0.1.0 - 2026-09-22 - Cover validation in the in-memory store.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from pytest import LogCaptureFixture

from config import InMemorySettingsStore, JsonSettingsStore
from config.persistence import LANGUAGE_KEY, THEME_KEY, _PreferenceStore


def test_in_memory_defaults_and_updates() -> None:
    store = InMemorySettingsStore()
    assert store.get_language() == "EN"
    assert store.get_theme() == "light"

    store.set_language("de")
    store.set_theme("DARK")

    assert store.get_language() == "DE"
    assert store.get_theme() == "dark"


def test_unsupported_values_are_rejected() -> None:
    store = InMemorySettingsStore()
    with pytest.raises(ValueError):
        store.set_language("FR")
    with pytest.raises(ValueError):
        store.set_theme("sepia")
    assert store.get_language() == "EN"


def test_invalid_stored_values_fall_back_with_warning(caplog: LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="journal_prompts.preferences")
    store = InMemorySettingsStore({LANGUAGE_KEY: "XX", THEME_KEY: "neon"})

    assert store.get_language() == "EN"
    assert store.get_theme() == "light"
    assert len(caplog.records) == 2


def test_custom_defaults() -> None:
    store = InMemorySettingsStore(default_language="DE", default_theme="dark")
    assert store.get_language() == "DE"
    assert store.get_theme() == "dark"


def test_json_store_persists_between_instances(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "preferences.json"
    JsonSettingsStore(path).set_language("DE")
    JsonSettingsStore(path).set_theme("dark")

    reopened = JsonSettingsStore(path)
    assert reopened.get_language() == "DE"
    assert reopened.get_theme() == "dark"
    assert json.loads(path.read_text(encoding="utf-8")) == {
        LANGUAGE_KEY: "DE",
        THEME_KEY: "dark",
    }


def test_json_store_tolerates_corrupt_file(tmp_path: Path, caplog: LogCaptureFixture) -> None:
    path = tmp_path / "preferences.json"
    path.write_text("[not an object", encoding="utf-8")
    caplog.set_level(logging.WARNING, logger="journal_prompts.preferences")

    store = JsonSettingsStore(path)

    assert store.get_language() == "EN"
    assert any("Failed to read preferences" in message for message in caplog.messages)
    store.set_language("DE")
    assert store.get_language() == "DE"


def test_json_store_write_failure_is_logged(tmp_path: Path, caplog: LogCaptureFixture) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    caplog.set_level(logging.WARNING, logger="journal_prompts.preferences")

    store = JsonSettingsStore(blocker / "preferences.json")
    store.set_theme("dark")

    assert store.get_theme() == "light"
    assert any("Failed to save preferences" in message for message in caplog.messages)


def test_preference_store_base_requires_storage_hooks() -> None:
    with pytest.raises(TypeError):
        _PreferenceStore()  # type: ignore[abstract]
