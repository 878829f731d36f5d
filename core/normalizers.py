"""Schema normalisers converting parsed prompt sources into a CategoryGroup.

Three historical source layouts are supported. Each normaliser validates only
the top-level shape it needs and raises :class:`SchemaMismatchError` when that
shape is absent, which the loader chain treats as "try the next schema".
Individual malformed entries are skipped with a warning instead.

Every normaliser applies the same language policy: requested language, then
English (with a warning naming the prompt), otherwise the prompt is skipped.
Prompt ids are always ``<raw category identifier><sequence number>``.

Updates:
  v0.4.0 - 2026-10-03 - Collect legacy category names per identifier across languages.
  v0.3.0 - 2026-09-27 - Accept composite ids in nested prompts when the prefix matches.
  v0.2.0 - 2026-09-21 - Add legacy multi-document normaliser.
  v0.1.0 - 2026-09-14 - Add clean and nested normalisers.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar, Protocol

from models.catalog_model import CategoryGroup, CategoryGroupBuilder
from models.category_model import CategoryDefinition, normalise_name_map
from models.prompt_model import (
    Prompt,
    PromptTranslation,
    compose_prompt_id,
    parse_sequence,
    split_prompt_id,
)

from .exceptions import SchemaMismatchError
from .localization import (
    FALLBACK_LANGUAGE,
    normalise_language,
    resolve_display_name,
    resolve_translation,
)

logger = logging.getLogger("journal_prompts.normalizers")


class SchemaNormalizer(Protocol):
    """Strategy converting one parsed source layout into a CategoryGroup."""

    name: str
    multi_document: bool

    def try_normalize(self, raw: Any, language: str) -> CategoryGroup:
        """Return the catalogue or raise SchemaMismatchError."""
        ...


def _translation_map(value: Any) -> dict[str, PromptTranslation]:
    translations: dict[str, PromptTranslation] = {}
    if not isinstance(value, Mapping):
        return translations
    for raw_code, payload in value.items():
        translation = PromptTranslation.from_mapping(payload)
        if translation is None:
            continue
        translations[str(raw_code).strip().lower()] = translation
    return translations


def _sequence_for(raw_id: Any, category_id: str) -> int | None:
    sequence = parse_sequence(raw_id)
    if sequence is not None:
        return sequence
    composite = split_prompt_id(raw_id)
    if composite is not None and composite[0] == category_id:
        return composite[1]
    return None


class _LanguagePolicyMixin:
    """Shared requested/fallback resolution and duplicate handling."""

    fallback_language: str

    def _choose_translation(
        self,
        translations: Mapping[str, PromptTranslation],
        *,
        prompt_id: str,
        language: str,
    ) -> PromptTranslation | None:
        resolution = resolve_translation(
            translations,
            language,
            fallback=self.fallback_language,
        )
        if resolution is None:
            logger.warning(
                "No %s or %s translation for prompt %s; skipping",
                language,
                self.fallback_language,
                prompt_id,
            )
            return None
        if resolution.used_fallback:
            logger.warning(
                "Missing %s translation for prompt %s; using %s fallback",
                language,
                prompt_id,
                resolution.language,
            )
        return resolution.value

    def _add(self, builder: CategoryGroupBuilder, prompt: Prompt) -> None:
        if not builder.add(prompt):
            logger.warning("Duplicate prompt id %s; keeping the first occurrence", prompt.id)


class CleanSchemaNormalizer(_LanguagePolicyMixin):
    """Categories keyed by identifier, each embedding its multilingual prompts."""

    name: ClassVar[str] = "clean"
    multi_document: ClassVar[bool] = False

    def __init__(self, *, fallback_language: str = FALLBACK_LANGUAGE) -> None:
        self.fallback_language = normalise_language(fallback_language)

    def try_normalize(self, raw: Any, language: str) -> CategoryGroup:
        """Normalise ``categories: {<id>: {names, prompts: [...]}}`` content."""
        if not isinstance(raw, Mapping) or not isinstance(raw.get("categories"), Mapping):
            raise SchemaMismatchError("clean schema requires a 'categories' mapping")
        language = normalise_language(language)
        builder = CategoryGroupBuilder()
        for raw_identifier, payload in raw["categories"].items():
            if not isinstance(payload, Mapping):
                logger.warning("Category %s is not a mapping; skipping", raw_identifier)
                continue
            try:
                definition = CategoryDefinition.from_mapping(
                    payload,
                    identifier=raw_identifier,
                    names_key="names",
                )
            except ValueError as exc:
                logger.warning("Skipping invalid category definition: %s", exc)
                continue
            display_name = resolve_display_name(
                definition.names,
                definition.identifier,
                language,
                fallback=self.fallback_language,
            )
            entries = payload.get("prompts")
            if not isinstance(entries, Sequence) or isinstance(entries, str):
                logger.warning("Category %s has no prompt list; skipping", definition.identifier)
                continue
            for entry in entries:
                self._add_entry(builder, entry, definition, display_name, language)
        return builder.build()

    def _add_entry(
        self,
        builder: CategoryGroupBuilder,
        entry: Any,
        definition: CategoryDefinition,
        display_name: str,
        language: str,
    ) -> None:
        if not isinstance(entry, Mapping):
            logger.warning("Prompt entry in category %s is not a mapping", definition.identifier)
            return
        sequence = _sequence_for(entry.get("id"), definition.identifier)
        if sequence is None:
            logger.warning(
                "Prompt in category %s has no usable sequence number; skipping",
                definition.identifier,
            )
            return
        prompt_id = compose_prompt_id(definition.identifier, sequence)
        translations = _translation_map(
            {key: value for key, value in entry.items() if key != "id"}
        )
        translation = self._choose_translation(translations, prompt_id=prompt_id, language=language)
        if translation is None:
            return
        self._add(
            builder,
            Prompt.build(
                category_id=definition.identifier,
                sequence=sequence,
                category=display_name,
                translation=translation,
            ),
        )


class NestedSchemaNormalizer(_LanguagePolicyMixin):
    """Flat category table plus flat prompt list referencing category ids."""

    name: ClassVar[str] = "nested"
    multi_document: ClassVar[bool] = False

    def __init__(self, *, fallback_language: str = FALLBACK_LANGUAGE) -> None:
        self.fallback_language = normalise_language(fallback_language)

    def try_normalize(self, raw: Any, language: str) -> CategoryGroup:
        """Normalise ``categories: [...]`` plus ``prompts: [...]`` content."""
        if (
            not isinstance(raw, Mapping)
            or not isinstance(raw.get("categories"), list)
            or not isinstance(raw.get("prompts"), list)
        ):
            raise SchemaMismatchError("nested schema requires 'categories' and 'prompts' lists")
        language = normalise_language(language)

        display_names: dict[str, str] = {}
        for payload in raw["categories"]:
            if not isinstance(payload, Mapping):
                logger.warning("Category entry is not a mapping; skipping")
                continue
            try:
                definition = CategoryDefinition.from_mapping(payload)
            except ValueError as exc:
                logger.warning("Skipping invalid category definition: %s", exc)
                continue
            if definition.identifier in display_names:
                logger.warning("Duplicate category id %s; keeping the first", definition.identifier)
                continue
            display_names[definition.identifier] = resolve_display_name(
                definition.names,
                definition.identifier,
                language,
                fallback=self.fallback_language,
            )

        builder = CategoryGroupBuilder()
        for entry in raw["prompts"]:
            if not isinstance(entry, Mapping):
                logger.warning("Prompt entry is not a mapping; skipping")
                continue
            category_id = str(entry.get("category_id") or "").strip()
            display_name = display_names.get(category_id)
            if display_name is None:
                logger.warning(
                    "Category not found for id %s, skipping prompt %s",
                    category_id or "<missing>",
                    entry.get("id"),
                )
                continue
            sequence = _sequence_for(entry.get("id"), category_id)
            if sequence is None:
                logger.warning(
                    "Prompt in category %s has no usable sequence number; skipping",
                    category_id,
                )
                continue
            prompt_id = compose_prompt_id(category_id, sequence)
            translation = self._choose_translation(
                _translation_map(entry.get("translations")),
                prompt_id=prompt_id,
                language=language,
            )
            if translation is None:
                continue
            self._add(
                builder,
                Prompt.build(
                    category_id=category_id,
                    sequence=sequence,
                    category=display_name,
                    translation=translation,
                ),
            )
        return builder.build()


class LegacySchemaNormalizer(_LanguagePolicyMixin):
    """Stream of self-contained single-language, single-prompt documents.

    Documents without a ``language`` field are assumed to be written in the
    language the stream was requested for.
    """

    name: ClassVar[str] = "legacy"
    multi_document: ClassVar[bool] = True

    def __init__(self, *, fallback_language: str = FALLBACK_LANGUAGE) -> None:
        self.fallback_language = normalise_language(fallback_language)

    def try_normalize(self, raw: Any, language: str) -> CategoryGroup:
        """Normalise a list of ``{id, category, prompt, purpose}`` documents."""
        if isinstance(raw, Mapping):
            raw = [raw]
        if not isinstance(raw, list):
            raise SchemaMismatchError("legacy schema requires a stream of prompt documents")
        documents = [
            document
            for document in raw
            if isinstance(document, Mapping) and "id" in document and "prompt" in document
        ]
        if not documents:
            raise SchemaMismatchError("legacy schema documents require 'id' and 'prompt' fields")
        if len(documents) != len(raw):
            logger.warning(
                "Skipping %d document(s) without 'id' and 'prompt' fields",
                len(raw) - len(documents),
            )
        language = normalise_language(language)

        category_names: dict[str, dict[str, str]] = {}
        candidates: dict[str, tuple[str, int, dict[str, PromptTranslation]]] = {}
        for document in documents:
            identity = self._identity(document)
            if identity is None:
                logger.warning("Legacy prompt %s has no usable id; skipping", document.get("id"))
                continue
            category_id, sequence = identity
            doc_language = str(document.get("language") or language).strip().lower()
            names = category_names.setdefault(category_id, {})
            for code, name in normalise_name_map({doc_language: document.get("category")}).items():
                names.setdefault(code, name)
            prompt_id = compose_prompt_id(category_id, sequence)
            translation = PromptTranslation.from_mapping(document)
            if translation is None:
                logger.warning("Legacy prompt %s has empty prompt text; ignoring", prompt_id)
                continue
            _, _, translations = candidates.setdefault(prompt_id, (category_id, sequence, {}))
            if doc_language in translations:
                logger.warning(
                    "Duplicate %s document for prompt %s; keeping the first",
                    doc_language,
                    prompt_id,
                )
                continue
            translations[doc_language] = translation

        builder = CategoryGroupBuilder()
        for prompt_id, (category_id, sequence, translations) in candidates.items():
            translation = self._choose_translation(
                translations,
                prompt_id=prompt_id,
                language=language,
            )
            if translation is None:
                continue
            display_name = resolve_display_name(
                category_names.get(category_id, {}),
                category_id,
                language,
                fallback=self.fallback_language,
            )
            self._add(
                builder,
                Prompt.build(
                    category_id=category_id,
                    sequence=sequence,
                    category=display_name,
                    translation=translation,
                ),
            )
        return builder.build()

    @staticmethod
    def _identity(document: Mapping[str, Any]) -> tuple[str, int] | None:
        raw_category = document.get("category_id")
        if raw_category is not None and str(raw_category).strip():
            category_id = str(raw_category).strip()
            sequence = _sequence_for(document.get("id"), category_id)
            return None if sequence is None else (category_id, sequence)
        return split_prompt_id(document.get("id"))


def default_normalizers(
    *,
    fallback_language: str = FALLBACK_LANGUAGE,
) -> list[SchemaNormalizer]:
    """Return the normalisers in loader priority order."""
    return [
        CleanSchemaNormalizer(fallback_language=fallback_language),
        NestedSchemaNormalizer(fallback_language=fallback_language),
        LegacySchemaNormalizer(fallback_language=fallback_language),
    ]


__all__ = [
    "CleanSchemaNormalizer",
    "LegacySchemaNormalizer",
    "NestedSchemaNormalizer",
    "SchemaNormalizer",
    "default_normalizers",
]
