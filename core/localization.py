"""Per-language value resolution shared by every schema normaliser.

Updates:
  v0.1.1 - 2026-09-27 - Treat language codes case-insensitively.
  v0.1.0 - 2026-09-20 - Extract requested/English fallback helper.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

FALLBACK_LANGUAGE = "en"


def normalise_language(code: str | None) -> str:
    """Return a lower-cased language code, rejecting blank values."""
    text = (code or "").strip().lower()
    if not text:
        raise ValueError("language code must be a non-empty string")
    return text


@dataclass(frozen=True, slots=True)
class Resolution(Generic[T]):
    """Value chosen for a requested language and whether it is a fallback."""

    value: T
    language: str
    used_fallback: bool


def resolve_translation(
    translations: Mapping[str, T],
    language: str,
    *,
    fallback: str = FALLBACK_LANGUAGE,
) -> Resolution[T] | None:
    """Return the requested-language value, else the fallback-language value.

    *translations* must already be keyed by lower-cased language codes. Returns
    ``None`` when neither language is present.
    """
    requested = normalise_language(language)
    value = translations.get(requested)
    if value is not None:
        return Resolution(value=value, language=requested, used_fallback=False)
    fallback_code = normalise_language(fallback)
    value = translations.get(fallback_code)
    if value is not None:
        return Resolution(value=value, language=fallback_code, used_fallback=True)
    return None


def resolve_display_name(
    names: Mapping[str, str],
    identifier: str,
    language: str,
    *,
    fallback: str = FALLBACK_LANGUAGE,
) -> str:
    """Return a category name in *language*, the fallback language, or *identifier*."""
    resolution = resolve_translation(names, language, fallback=fallback)
    if resolution is None:
        return identifier
    return resolution.value


__all__ = [
    "FALLBACK_LANGUAGE",
    "Resolution",
    "normalise_language",
    "resolve_display_name",
    "resolve_translation",
]
