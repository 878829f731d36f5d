"""Tests for the clean, nested, and legacy schema normalisers.

Updates:
  v0.2.0 - 2026-10-03 - Cover legacy streams mixing languages and composite ids.
  v0.1.0 - 2026-09-17 - Cover id equality across schemas and the language policy.
"""

from __future__ import annotations

import logging

import pytest
from pytest import LogCaptureFixture

from conftest import (
    CLEAN_SOURCE,
    EXPECTED_IDS,
    LEGACY_SOURCE_DE,
    LEGACY_SOURCE_EN,
    NESTED_SOURCE,
)
from core.document_parser import parse_document, parse_document_stream
from core.exceptions import SchemaMismatchError
from core.normalizers import (
    CleanSchemaNormalizer,
    LegacySchemaNormalizer,
    NestedSchemaNormalizer,
    default_normalizers,
)
from models.catalog_model import CategoryGroup


def _fallback_warnings(caplog: LogCaptureFixture) -> list[str]:
    return [
        record.getMessage()
        for record in caplog.records
        if record.levelno == logging.WARNING and "fallback" in record.getMessage()
    ]


def _all_schemas(language: str) -> dict[str, CategoryGroup]:
    legacy_source = LEGACY_SOURCE_DE if language == "de" else LEGACY_SOURCE_EN
    return {
        "clean": CleanSchemaNormalizer().try_normalize(parse_document(CLEAN_SOURCE), language),
        "nested": NestedSchemaNormalizer().try_normalize(parse_document(NESTED_SOURCE), language),
        "legacy": LegacySchemaNormalizer().try_normalize(
            parse_document_stream(legacy_source),
            language,
        ),
    }


@pytest.mark.parametrize("language", ["en", "de", "DE"])
def test_same_content_yields_identical_ids_across_schemas(language: str) -> None:
    """Prompt ids never depend on the source layout or language."""
    catalogs = _all_schemas(language)
    for schema, catalog in catalogs.items():
        assert catalog.ids() == EXPECTED_IDS, schema


def test_same_content_yields_identical_prompts_across_schemas() -> None:
    catalogs = list(_all_schemas("de").values())
    reference = catalogs[0]
    for catalog in catalogs[1:]:
        assert catalog.categories() == reference.categories()
        for prompt in reference.all_prompts():
            assert catalog.find_by_id(prompt.id) == prompt


def test_requested_language_is_used() -> None:
    catalog = CleanSchemaNormalizer().try_normalize(parse_document(CLEAN_SOURCE), "de")
    assert catalog.categories() == ["Biografie", "Emotions"]
    prompt = catalog.find_by_id("B1")
    assert prompt is not None
    assert prompt.text == "Beschreibe einen Ort aus deiner Kindheit."
    assert prompt.category == "Biografie"
    assert prompt.category_id == "B"
    assert prompt.sequence == 1


@pytest.mark.parametrize("schema", ["clean", "nested", "legacy"])
def test_english_fallback_warns_once_per_prompt(schema: str, caplog: LogCaptureFixture) -> None:
    """E1 has no German text: it is shown in English with exactly one warning."""
    normalizers = {
        "clean": (CleanSchemaNormalizer(), parse_document(CLEAN_SOURCE)),
        "nested": (NestedSchemaNormalizer(), parse_document(NESTED_SOURCE)),
        "legacy": (LegacySchemaNormalizer(), parse_document_stream(LEGACY_SOURCE_DE)),
    }
    normalizer, raw = normalizers[schema]
    caplog.set_level(logging.WARNING, logger="journal_prompts.normalizers")

    catalog = normalizer.try_normalize(raw, "de")

    fallback = catalog.find_by_id("E1")
    assert fallback is not None
    assert fallback.text == "Which feeling did you avoid today?"
    assert fallback.category == "Emotions"
    warnings = _fallback_warnings(caplog)
    assert len(warnings) == 1
    assert "E1" in warnings[0]



def test_prompt_without_requested_or_english_text_is_skipped(caplog: LogCaptureFixture) -> None:
    raw = {
        "categories": {
            "F": {
                "names": {"fr": "Futur"},
                "prompts": [
                    {"id": 1, "fr": {"prompt": "Imagine demain."}},
                    {"id": 2, "en": {"prompt": "Imagine tomorrow."}},
                ],
            }
        }
    }
    caplog.set_level(logging.WARNING, logger="journal_prompts.normalizers")
    catalog = CleanSchemaNormalizer().try_normalize(raw, "de")

    assert catalog.ids() == frozenset({"F2"})
    # No English or German name: the raw identifier is displayed.
    assert catalog.categories() == ["F"]
    assert any("F1" in message and "skipping" in message for message in caplog.messages)


def test_category_names_fall_back_to_identifier() -> None:
    raw = {
        "categories": [{"id": "G"}],
        "prompts": [{"id": 1, "category_id": "G", "translations": {"en": {"prompt": "Thanks"}}}],
    }
    catalog = NestedSchemaNormalizer().try_normalize(raw, "en")
    assert catalog.categories() == ["G"]


def test_nested_prompt_with_unknown_category_is_skipped(caplog: LogCaptureFixture) -> None:
    raw = parse_document(NESTED_SOURCE)
    raw["prompts"].append(
        {"id": 1, "category_id": "Z", "translations": {"en": {"prompt": "Orphan"}}}
    )
    caplog.set_level(logging.WARNING, logger="journal_prompts.normalizers")

    catalog = NestedSchemaNormalizer().try_normalize(raw, "en")

    assert catalog.ids() == EXPECTED_IDS
    assert any("Category not found for id Z" in message for message in caplog.messages)


def test_duplicate_ids_keep_first_occurrence(caplog: LogCaptureFixture) -> None:
    raw = parse_document(NESTED_SOURCE)
    raw["prompts"].append(
        {"id": "B1", "category_id": "B", "translations": {"en": {"prompt": "Imposter"}}}
    )
    caplog.set_level(logging.WARNING, logger="journal_prompts.normalizers")

    catalog = NestedSchemaNormalizer().try_normalize(raw, "en")

    assert catalog.find_by_id("B1").text == "Describe a place from your childhood."
    assert any("Duplicate prompt id B1" in message for message in caplog.messages)


def test_entries_without_sequence_are_skipped(caplog: LogCaptureFixture) -> None:
    raw = parse_document(CLEAN_SOURCE)
    raw["categories"]["B"]["prompts"].append({"en": {"prompt": "No id"}})
    caplog.set_level(logging.WARNING, logger="journal_prompts.normalizers")

    catalog = CleanSchemaNormalizer().try_normalize(raw, "en")

    assert catalog.ids() == EXPECTED_IDS
    assert any("no usable sequence number" in message for message in caplog.messages)


@pytest.mark.parametrize(
    ("normalizer", "raw"),
    [
        (CleanSchemaNormalizer(), {"categories": []}),
        (CleanSchemaNormalizer(), [{"id": "B1", "prompt": "x"}]),
        (NestedSchemaNormalizer(), {"categories": {"B": {}}}),
        (NestedSchemaNormalizer(), {"categories": [], "prompts": {}}),
        (LegacySchemaNormalizer(), {"categories": {"B": {}}}),
        (LegacySchemaNormalizer(), "just text"),
        (LegacySchemaNormalizer(), None),
    ],
)
def test_wrong_top_level_shape_raises_mismatch(normalizer: object, raw: object) -> None:
    with pytest.raises(SchemaMismatchError):
        normalizer.try_normalize(raw, "en")  # type: ignore[attr-defined]


def test_legacy_composite_ids_are_recomposed() -> None:
    documents = [
        {"id": "B01", "category": "Biography", "prompt": "Zero padded"},
        {"id": 2, "category_id": "B", "category": "Biography", "prompt": "Split id"},
    ]
    catalog = LegacySchemaNormalizer().try_normalize(documents, "en")
    assert catalog.ids() == frozenset({"B1", "B2"})


def test_legacy_single_document_is_accepted() -> None:
    catalog = LegacySchemaNormalizer().try_normalize(
        {"id": "B1", "category": "Biography", "prompt": "Only one"},
        "en",
    )
    assert catalog.ids() == frozenset({"B1"})


def test_legacy_skips_documents_without_required_fields(caplog: LogCaptureFixture) -> None:
    documents = parse_document_stream(LEGACY_SOURCE_EN) + [{"title": "not a prompt"}]
    caplog.set_level(logging.WARNING, logger="journal_prompts.normalizers")

    catalog = LegacySchemaNormalizer().try_normalize(documents, "en")

    assert catalog.ids() == EXPECTED_IDS
    assert any("Skipping 1 document" in message for message in caplog.messages)


def test_default_normalizers_priority_order() -> None:
    assert [normalizer.name for normalizer in default_normalizers()] == [
        "clean",
        "nested",
        "legacy",
    ]
