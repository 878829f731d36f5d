"""Printable summaries for Journal Prompts configuration.

Updates:
  v0.1.1 - 2026-10-08 - Include stored preferences in the summary.
  v0.1.0 - 2026-09-25 - Render resolved sources and fetch settings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .utils import describe_location, describe_path

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config import JournalPromptsSettings, SettingsStore


def print_settings_summary(
    settings: JournalPromptsSettings,
    settings_store: SettingsStore | None = None,
) -> None:
    """Emit a readable summary of the content sources and preferences."""
    lines = [
        "Journal Prompts configuration summary",
        "-------------------------------------",
        f"Default language: {settings.language}",
        f"Fallback language: {settings.fallback_language}",
        f"Default theme: {settings.theme_mode}",
        f"Preferences file: {describe_path(settings.settings_store_path, allow_missing=True)}",
        "",
        "Prompt sources (priority order)",
        "-------------------------------",
    ]
    for schema, location in settings.source_locations().items():
        lines.append(f"{schema.capitalize()}: {describe_location(location)}")
    lines.extend(
        [
            f"Base URL: {settings.source_base_url or 'not set'}",
            f"Request timeout (seconds): {settings.request_timeout_seconds}",
            f"Fetch attempts: {settings.fetch_max_attempts}",
        ]
    )
    if settings_store is not None:
        lines.extend(
            [
                "",
                "Stored preferences",
                "------------------",
                f"Language: {settings_store.get_language()}",
                f"Theme: {settings_store.get_theme()}",
            ]
        )
    print("\n".join(lines))
