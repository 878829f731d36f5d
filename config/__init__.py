"""Configuration helpers for Journal Prompts.

Updates: v0.2.0 - 2026-10-05 - Expose preference stores.
Updates: v0.1.0 - 2026-09-14 - Expose settings loader and configuration error types.
"""

from .persistence import InMemorySettingsStore, JsonSettingsStore, SettingsStore
from .settings import (
    AVAILABLE_LANGUAGES,
    AVAILABLE_THEMES,
    DEFAULT_CATALOG_SOURCE,
    DEFAULT_FALLBACK_LANGUAGE,
    DEFAULT_LANGUAGE,
    DEFAULT_THEME_MODE,
    JournalPromptsSettings,
    SettingsError,
    load_settings,
)

__all__ = [
    "AVAILABLE_LANGUAGES",
    "AVAILABLE_THEMES",
    "DEFAULT_CATALOG_SOURCE",
    "DEFAULT_FALLBACK_LANGUAGE",
    "DEFAULT_LANGUAGE",
    "DEFAULT_THEME_MODE",
    "InMemorySettingsStore",
    "JournalPromptsSettings",
    "JsonSettingsStore",
    "SettingsError",
    "SettingsStore",
    "load_settings",
]
