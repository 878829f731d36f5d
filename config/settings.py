"""Settings management utilities for Journal Prompts configuration.

Updates:
  v0.3.0 - 2026-10-05 - Add preference store path and default theme.
  v0.2.1 - 2026-09-25 - Validate fetch retry and timeout values.
  v0.2.0 - 2026-09-24 - Configure per-schema source locations and an optional base URL.
  v0.1.0 - 2026-09-14 - Initial settings model with JSON config and .env support.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal, cast

from dotenv import dotenv_values
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

_DOTENV_FALLBACK_PATH = ".env"

AVAILABLE_LANGUAGES: tuple[str, ...] = ("EN", "DE")
AVAILABLE_THEMES: tuple[str, ...] = ("light", "dark")
DEFAULT_LANGUAGE = "EN"
DEFAULT_FALLBACK_LANGUAGE = "en"
DEFAULT_THEME_MODE = "light"
DEFAULT_CATALOG_SOURCE = "package:journal-prompts.yaml"
DEFAULT_SETTINGS_STORE_PATH = Path("data") / "preferences.json"

# Field name -> environment keys (prefixed with JOURNAL_PROMPTS_ unless upper-case alias).
_ENV_ALIASES: dict[str, list[str]] = {
    "language": ["LANGUAGE", "language"],
    "fallback_language": ["FALLBACK_LANGUAGE", "fallback_language"],
    "source_base_url": ["SOURCE_BASE_URL", "source_base_url", "BASE_URL"],
    "clean_source": ["CLEAN_SOURCE", "clean_source"],
    "nested_source": ["NESTED_SOURCE", "nested_source", "UNIFIED_SOURCE"],
    "legacy_source": ["LEGACY_SOURCE", "legacy_source"],
    "request_timeout_seconds": ["REQUEST_TIMEOUT_SECONDS", "request_timeout_seconds"],
    "fetch_max_attempts": ["FETCH_MAX_ATTEMPTS", "fetch_max_attempts"],
    "settings_store_path": ["SETTINGS_STORE_PATH", "settings_store_path"],
    "theme_mode": ["THEME_MODE", "theme_mode"],
}

_JSON_CONFIG_KEYS: tuple[str, ...] = tuple(_ENV_ALIASES)


def _read_dotenv_values() -> dict[str, str]:
    """Load ``.env`` entries into a mapping without mutating ``os.environ``."""
    env_file_override = os.getenv("JOURNAL_PROMPTS_ENV_FILE")
    if env_file_override is not None:
        candidate = env_file_override.strip()
        if not candidate:
            return {}
        path = Path(candidate).expanduser()
    else:
        path = Path(_DOTENV_FALLBACK_PATH).expanduser()
    if not path.is_file():
        return {}
    raw_values = dotenv_values(str(path))
    return {str(key): str(value) for key, value in raw_values.items() if value is not None}


class SettingsError(Exception):
    """Raised when Journal Prompts configuration cannot be loaded or validated."""


class JournalPromptsSettings(BaseSettings):
    """Application configuration sourced from arguments, a JSON file, or the environment."""

    language: str = Field(
        default=DEFAULT_LANGUAGE,
        description="Initial content language when no stored preference exists.",
    )
    fallback_language: str = Field(
        default=DEFAULT_FALLBACK_LANGUAGE,
        description="Language used when a prompt has no translation in the requested language.",
    )
    source_base_url: str | None = Field(
        default=None,
        description="Base URL that relative source locations are resolved against.",
    )
    clean_source: str | None = Field(
        default=DEFAULT_CATALOG_SOURCE,
        description="Location of the category-keyed multilingual catalogue.",
    )
    nested_source: str | None = Field(
        default=DEFAULT_CATALOG_SOURCE,
        description="Location of the catalogue with separate category and prompt lists.",
    )
    legacy_source: str | None = Field(
        default=None,
        description=(
            "Location of the per-language multi-document catalogue; may contain "
            "'{language}' or '{LANGUAGE}' placeholders (e.g. prompts_{LANGUAGE}.yaml)."
        ),
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout applied to HTTP source requests.",
    )
    fetch_max_attempts: int = Field(
        default=3,
        description="Total attempts for HTTP source requests, including the first.",
    )
    settings_store_path: Path = Field(
        default=DEFAULT_SETTINGS_STORE_PATH,
        description="JSON file storing the language and theme preferences.",
    )
    theme_mode: Literal["light", "dark"] = Field(
        default=DEFAULT_THEME_MODE,
        description="Theme used when no stored preference exists.",
    )

    model_config = cast(
        "SettingsConfigDict",
        {
            "env_prefix": "JOURNAL_PROMPTS_",
            "case_sensitive": False,
            "populate_by_name": True,
        },
    )

    @field_validator("language", mode="before")
    def _normalise_language(cls, value: Any) -> str:
        """Upper-case the language code and ensure it is supported."""
        if value is None:
            return DEFAULT_LANGUAGE
        code = str(value).strip().upper()
        if not code:
            return DEFAULT_LANGUAGE
        if code not in AVAILABLE_LANGUAGES:
            raise ValueError(
                f"language must be one of: {', '.join(AVAILABLE_LANGUAGES)}"
            )
        return code

    @field_validator("fallback_language", mode="before")
    def _normalise_fallback_language(cls, value: Any) -> str:
        if value is None:
            return DEFAULT_FALLBACK_LANGUAGE
        code = str(value).strip().lower()
        return code or DEFAULT_FALLBACK_LANGUAGE

    @field_validator(
        "source_base_url",
        "clean_source",
        "nested_source",
        "legacy_source",
        mode="before",
    )
    def _strip_locations(cls, value: Any) -> str | None:
        """Normalise location values by stripping whitespace and empty strings."""
        if value is None:
            return None
        stripped = str(value).strip()
        return stripped or None

    @field_validator("request_timeout_seconds")
    def _validate_timeout(cls, value: float) -> float:
        """Ensure the HTTP timeout is positive."""
        if value <= 0:
            raise ValueError("request_timeout_seconds must be greater than zero")
        return value

    @field_validator("fetch_max_attempts")
    def _validate_attempts(cls, value: int) -> int:
        if value < 1:
            raise ValueError("fetch_max_attempts must be at least 1")
        return value

    @field_validator("settings_store_path", mode="before")
    def _normalise_store_path(cls, value: Any) -> Path:
        """Expand user-relative paths and coerce values to Path instances."""
        if value in (None, ""):
            return DEFAULT_SETTINGS_STORE_PATH
        return Path(str(value)).expanduser()

    @field_validator("theme_mode", mode="before")
    def _normalise_theme_mode(cls, value: str | None) -> str:
        if value is None:
            return DEFAULT_THEME_MODE
        text = str(value).strip().lower()
        if text not in AVAILABLE_THEMES:
            return DEFAULT_THEME_MODE
        return text

    def source_locations(self) -> dict[str, str | None]:
        """Return configured source locations keyed by schema name."""
        return {
            "clean": self.clean_source,
            "nested": self.nested_source,
            "legacy": self.legacy_source,
        }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        """Define configuration source precedence.

        Order (highest → lowest):
            1. Explicit keyword arguments (e.g. load_settings(language="DE")).
            2. JSON configuration file.
            3. Environment variables / .env entries / aliases.
            4. File secrets.
        """

        def env_with_aliases(_: BaseSettings | None = None) -> dict[str, Any]:
            data: dict[str, Any] = {}
            config_dict = cast("dict[str, Any]", cls.model_config)
            prefix = str(config_dict.get("env_prefix", ""))
            dotenv_entries = _read_dotenv_values()

            def _lookup(candidate: str) -> str | None:
                value = os.getenv(candidate)
                if value is None:
                    value = dotenv_entries.get(candidate)
                if value is None:
                    return None
                stripped_value = str(value).strip()
                return stripped_value or None

            for field, keys in _ENV_ALIASES.items():
                for key in keys:
                    candidates = [f"{prefix}{key}", f"{prefix}{key.upper()}"]
                    value = next(
                        (found for found in map(_lookup, candidates) if found is not None),
                        None,
                    )
                    if value is not None:
                        data[field] = value
                        break
            return data

        return (
            init_settings,
            cls._json_config_settings_source(settings_cls),
            cast("PydanticBaseSettingsSource", env_with_aliases),
            file_secret_settings,
        )

    @classmethod
    def _json_config_settings_source(
        cls,
        _: type[BaseSettings],
    ) -> PydanticBaseSettingsSource:
        """Return settings extracted from an optional JSON config file."""

        def _loader(_: BaseSettings | None = None) -> dict[str, Any]:
            explicit_path = os.getenv("JOURNAL_PROMPTS_CONFIG_JSON")
            if explicit_path:
                path = Path(explicit_path).expanduser()
                if not path.exists():
                    raise SettingsError(f"Configuration file not found: {path}")
            else:
                path = Path("config") / "config.json"
                if not path.exists():
                    return {}
            try:
                raw_contents = path.read_text(encoding="utf-8")
            except OSError as exc:  # pragma: no cover - filesystem failure is env-specific
                raise SettingsError(f"Unable to read configuration file: {path}") from exc
            try:
                data = json.loads(raw_contents)
            except json.JSONDecodeError as exc:
                raise SettingsError(f"Invalid JSON in configuration file: {path}") from exc
            if not isinstance(data, dict):
                raise SettingsError(f"Configuration file {path} must contain a JSON object")
            mapping_data = cast("Mapping[object, Any]", data)
            data_dict = {str(key): value for key, value in mapping_data.items()}
            unknown = sorted(set(data_dict) - set(_JSON_CONFIG_KEYS))
            if unknown:
                logger.warning(
                    "Ignoring unknown key(s) %s in configuration file %s",
                    ", ".join(unknown),
                    path,
                )
            return {key: data_dict[key] for key in _JSON_CONFIG_KEYS if key in data_dict}

        return cast("PydanticBaseSettingsSource", _loader)


def load_settings(**overrides: Any) -> JournalPromptsSettings:
    """Return validated settings, raising SettingsError on failure."""
    try:
        return JournalPromptsSettings(**overrides)
    except SettingsError:
        raise
    except ValidationError as exc:
        raise SettingsError("Invalid Journal Prompts configuration") from exc


logger = logging.getLogger("journal_prompts.settings")
