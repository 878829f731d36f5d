"""Persisted user preferences (language and theme).

Preferences are simple validated key/value pairs. Invalid or unreadable stored
values fall back to defaults with a warning; storage failures never abort the
caller.

Updates:
  v0.2.1 - 2026-10-17 - Declare the shared store base as abstract.
  v0.2.0 - 2026-10-05 - Add JSON file store alongside the in-memory store.
  v0.1.0 - 2026-09-22 - Introduce SettingsStore protocol for injected preferences.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any, Protocol, cast

from config.settings import (
    AVAILABLE_LANGUAGES,
    AVAILABLE_THEMES,
    DEFAULT_LANGUAGE,
    DEFAULT_THEME_MODE,
)

LANGUAGE_KEY = "journal-prompts-language"
THEME_KEY = "journal-prompts-theme"

logger = logging.getLogger("journal_prompts.preferences")


def _normalise_language(value: object | None) -> str | None:
    if not isinstance(value, str):
        return None
    code = value.strip().upper()
    return code if code in AVAILABLE_LANGUAGES else None


def _normalise_theme(value: object | None) -> str | None:
    if not isinstance(value, str):
        return None
    theme = value.strip().lower()
    return theme if theme in AVAILABLE_THEMES else None


class SettingsStore(Protocol):
    """Key/value store for the language and theme preferences."""

    def get_language(self) -> str:
        """Return the stored language or the default."""
        ...

    def set_language(self, language: str) -> None:
        """Persist *language*; raise ValueError when unsupported."""
        ...

    def get_theme(self) -> str:
        """Return the stored theme or the default."""
        ...

    def set_theme(self, theme: str) -> None:
        """Persist *theme*; raise ValueError when unsupported."""
        ...


class _PreferenceStore(ABC):
    """Validation shared by the concrete stores."""

    def __init__(
        self,
        *,
        default_language: str = DEFAULT_LANGUAGE,
        default_theme: str = DEFAULT_THEME_MODE,
    ) -> None:
        self._default_language = _normalise_language(default_language) or DEFAULT_LANGUAGE
        self._default_theme = _normalise_theme(default_theme) or DEFAULT_THEME_MODE

    @abstractmethod
    def _read(self) -> Mapping[str, Any]:
        """Return the raw stored preferences."""

    @abstractmethod
    def _write(self, key: str, value: str) -> None:
        """Store *value* under *key*."""

    def get_language(self) -> str:
        stored = self._read().get(LANGUAGE_KEY)
        language = _normalise_language(stored)
        if language is None:
            if stored is not None:
                logger.warning("Ignoring unsupported stored language %r", stored)
            return self._default_language
        return language

    def set_language(self, language: str) -> None:
        code = _normalise_language(language)
        if code is None:
            raise ValueError(f"Unsupported language: {language}")
        self._write(LANGUAGE_KEY, code)

    def get_theme(self) -> str:
        stored = self._read().get(THEME_KEY)
        theme = _normalise_theme(stored)
        if theme is None:
            if stored is not None:
                logger.warning("Ignoring unsupported stored theme %r", stored)
            return self._default_theme
        return theme

    def set_theme(self, theme: str) -> None:
        choice = _normalise_theme(theme)
        if choice is None:
            raise ValueError(f"Unsupported theme: {theme}")
        self._write(THEME_KEY, choice)


class InMemorySettingsStore(_PreferenceStore):
    """Preferences kept for the lifetime of the process."""

    def __init__(
        self,
        values: Mapping[str, str] | None = None,
        **defaults: str,
    ) -> None:
        super().__init__(**defaults)
        self._values: MutableMapping[str, str] = dict(values or {})

    def _read(self) -> Mapping[str, Any]:
        return self._values

    def _write(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonSettingsStore(_PreferenceStore):
    """Preferences persisted to a small JSON document."""

    def __init__(self, path: Path, **defaults: str) -> None:
        super().__init__(**defaults)
        self._path = path.expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Mapping[str, Any]:
        if not self._path.exists():
            return {}
        try:
            parsed = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Failed to read preferences from %s: %s", self._path, exc)
            return {}
        if not isinstance(parsed, Mapping):
            logger.warning("Preferences file %s must contain a JSON object", self._path)
            return {}
        return {str(key): value for key, value in cast("Mapping[object, Any]", parsed).items()}

    def _write(self, key: str, value: str) -> None:
        data = dict(self._read())
        data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(data, indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
        except OSError as exc:
            logger.warning("Failed to save preferences to %s: %s", self._path, exc)


__all__ = [
    "InMemorySettingsStore",
    "JsonSettingsStore",
    "LANGUAGE_KEY",
    "SettingsStore",
    "THEME_KEY",
]
