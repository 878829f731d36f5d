"""User-interface message catalogues with dotted-key lookup.

Updates:
  v0.2.0 - 2026-10-06 - Fall back to English before returning the raw key.
  v0.1.0 - 2026-09-23 - Introduce MappingTranslator and bundled EN/DE messages.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from .localization import FALLBACK_LANGUAGE, normalise_language

logger = logging.getLogger("journal_prompts.translations")

DEFAULT_MESSAGES: dict[str, dict[str, Any]] = {
    "en": {
        "page": {"title": "Journal Prompts"},
        "categorySelection": {
            "label": "Journal Prompts",
            "placeholder": "Choose a category",
        },
        "buttons": {
            "showPurpose": "Show purpose",
            "hidePurpose": "Hide purpose",
            "newPrompt": "New prompt",
            "newPromptFromAnyCategory": "New prompt from any category",
            "copyLink": "Copy link",
            "pinCategory": "Pin category",
            "unpinCategory": "Unpin category",
            "switchToEnglish": "Switch to English",
            "switchToGerman": "Switch to German",
        },
        "messages": {
            "loadError": "The prompts could not be loaded. Please try again later.",
            "errorTitle": "Something went wrong",
            "categoryPinned": "Category pinned",
            "categoryUnpinned": "Category unpinned",
            "linkSaved": "Link copied",
        },
    },
    "de": {
        "page": {"title": "Journaling-Impulse"},
        "categorySelection": {
            "label": "Journaling-Impulse",
            "placeholder": "Kategorie wählen",
        },
        "buttons": {
            "showPurpose": "Zweck anzeigen",
            "hidePurpose": "Zweck ausblenden",
            "newPrompt": "Neuer Impuls",
            "newPromptFromAnyCategory": "Neuer Impuls aus beliebiger Kategorie",
            "copyLink": "Link kopieren",
            "pinCategory": "Kategorie anheften",
            "unpinCategory": "Kategorie lösen",
            "switchToEnglish": "Auf Englisch wechseln",
            "switchToGerman": "Auf Deutsch wechseln",
        },
        "messages": {
            "loadError": (
                "Die Impulse konnten nicht geladen werden. Bitte später erneut versuchen."
            ),
            "errorTitle": "Etwas ist schiefgelaufen",
            "categoryPinned": "Kategorie angeheftet",
            "categoryUnpinned": "Kategorie gelöst",
            "linkSaved": "Link kopiert",
        },
    },
}


class Translator(Protocol):
    """Resolve interface message keys for the active language."""

    def resolve(self, key: str) -> str:
        """Return the message for *key*, or *key* itself when unknown."""
        ...

    def set_language(self, language: str) -> None:
        """Switch the active language."""
        ...


def _lookup(messages: Mapping[str, Any] | None, key: str) -> str | None:
    value: Any = messages
    for part in key.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return None
        value = value[part]
    return value if isinstance(value, str) else None


class MappingTranslator:
    """Translator over nested per-language message mappings."""

    def __init__(
        self,
        catalogs: Mapping[str, Mapping[str, Any]] | None = None,
        *,
        language: str = FALLBACK_LANGUAGE,
        fallback: str = FALLBACK_LANGUAGE,
    ) -> None:
        source = DEFAULT_MESSAGES if catalogs is None else catalogs
        self._catalogs = {normalise_language(code): messages for code, messages in source.items()}
        self._fallback = normalise_language(fallback)
        self._language = self._fallback
        self.set_language(language)

    @property
    def language(self) -> str:
        return self._language

    def set_language(self, language: str) -> None:
        code = normalise_language(language)
        if code not in self._catalogs:
            logger.warning(
                "No interface messages for language %s; using %s", code, self._fallback
            )
            code = self._fallback
        self._language = code

    def resolve(self, key: str) -> str:
        message = _lookup(self._catalogs.get(self._language), key)
        if message is not None:
            return message
        if self._language != self._fallback:
            message = _lookup(self._catalogs.get(self._fallback), key)
            if message is not None:
                logger.debug(
                    "Message %s missing for %s; using %s", key, self._language, self._fallback
                )
                return message
        logger.warning("Translation key not found: %s for language: %s", key, self._language)
        return key


__all__ = ["DEFAULT_MESSAGES", "MappingTranslator", "Translator"]
