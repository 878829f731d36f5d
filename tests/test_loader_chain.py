"""Tests for the loader chain fold over schema normalisers.

Updates:
  v0.3.0 - 2026-10-17 - Cover undecodable local sources.
  v0.2.0 - 2026-10-01 - Cover per-call fetch de-duplication.
  v0.1.0 - 2026-09-17 - Cover schema fallback, warnings, and LoadError.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx
import pytest
from pytest import LogCaptureFixture

from conftest import (
    CLEAN_SOURCE,
    EXPECTED_IDS,
    LEGACY_SOURCE_DE,
    LEGACY_SOURCE_EN,
    NESTED_SOURCE,
    MappingFetcher,
)
from core.exceptions import LoadError
from core.loader import LoaderChain
from core.normalizers import default_normalizers
from core.retry import RetryPolicy
from core.sources import HttpSourceFetcher, LocalSourceFetcher


def _chain(documents: dict[str, str], locations: dict[str, str | None]) -> LoaderChain:
    return LoaderChain(default_normalizers(), locations, MappingFetcher(documents))


def _load_warnings(caplog: LogCaptureFixture) -> list[str]:
    return [
        record.getMessage()
        for record in caplog.records
        if record.name == "journal_prompts.loader" and record.levelno == logging.WARNING
    ]


@pytest.mark.asyncio()
async def test_clean_source_wins_first() -> None:
    chain = _chain(
        {"clean.yaml": CLEAN_SOURCE, "nested.yaml": NESTED_SOURCE},
        {"clean": "clean.yaml", "nested": "nested.yaml", "legacy": None},
    )

    result = await chain.load("en")

    assert result.schema == "clean"
    assert result.location == "clean.yaml"
    assert result.language == "en"
    assert result.catalog.ids() == EXPECTED_IDS


@pytest.mark.asyncio()
async def test_nested_source_in_shared_location(caplog: LogCaptureFixture) -> None:
    fetcher = MappingFetcher({"prompts.yaml": NESTED_SOURCE})
    chain = LoaderChain(
        default_normalizers(),
        {"clean": "prompts.yaml", "nested": "prompts.yaml"},
        fetcher,
    )
    caplog.set_level(logging.WARNING, logger="journal_prompts.loader")

    result = await chain.load("DE")

    assert result.schema == "nested"
    assert result.language == "de"
    assert result.catalog.ids() == EXPECTED_IDS
    assert fetcher.requests == ["prompts.yaml"]
    assert len(_load_warnings(caplog)) == 1


@pytest.mark.asyncio()
async def test_legacy_only_source_warns_once_per_earlier_schema(
    caplog: LogCaptureFixture,
) -> None:
    """A legacy stream is rejected by clean and nested before legacy accepts it."""
    chain = _chain(
        {"prompts_de.yaml": LEGACY_SOURCE_DE},
        {
            "clean": "prompts_{language}.yaml",
            "nested": "prompts_{language}.yaml",
            "legacy": "prompts_{language}.yaml",
        },
    )
    caplog.set_level(logging.WARNING, logger="journal_prompts.loader")

    result = await chain.load("de")

    assert result.schema == "legacy"
    assert result.catalog.ids() == EXPECTED_IDS
    warnings = _load_warnings(caplog)
    assert len(warnings) == 2
    assert "clean" in warnings[0]
    assert "nested" in warnings[1]


@pytest.mark.asyncio()
async def test_missing_sources_fall_through_to_legacy() -> None:
    chain = _chain(
        {"prompts_EN.yaml": LEGACY_SOURCE_EN},
        {"clean": "missing.yaml", "nested": "missing.yaml", "legacy": "prompts_{LANGUAGE}.yaml"},
    )

    result = await chain.load("en")

    assert result.schema == "legacy"
    assert result.location == "prompts_EN.yaml"


@pytest.mark.asyncio()
async def test_exhaustion_raises_load_error_with_attempts() -> None:
    chain = _chain(
        {"broken.yaml": "categories: [unterminated", "empty.yaml": ""},
        {"clean": "broken.yaml", "nested": "missing.yaml", "legacy": "empty.yaml"},
    )

    with pytest.raises(LoadError) as excinfo:
        await chain.load("en")

    schemas = [schema for schema, _ in excinfo.value.attempts]
    assert schemas == ["clean", "nested", "legacy"]


@pytest.mark.asyncio()
async def test_empty_catalogue_counts_as_failed_attempt() -> None:
    only_french = "categories:\n  F:\n    prompts:\n      - id: 1\n        fr: {prompt: Demain}\n"
    chain = _chain(
        {"fr.yaml": only_french, "legacy.yaml": LEGACY_SOURCE_EN},
        {"clean": "fr.yaml", "legacy": "legacy.yaml"},
    )

    result = await chain.load("en")

    assert result.schema == "legacy"


@pytest.mark.asyncio()
async def test_language_round_trip_preserves_ids() -> None:
    chain = _chain({"clean.yaml": CLEAN_SOURCE}, {"clean": "clean.yaml"})

    first = await chain.load("en")
    second = await chain.load("de")
    third = await chain.load("en")

    assert first.catalog.ids() == second.catalog.ids() == third.catalog.ids()
    assert first.catalog.find_by_id("B1") == third.catalog.find_by_id("B1")
    assert second.catalog.find_by_id("B1").category == "Biografie"


@pytest.mark.asyncio()
async def test_nothing_is_cached_between_calls() -> None:
    fetcher = MappingFetcher({"clean.yaml": CLEAN_SOURCE})
    chain = LoaderChain(default_normalizers(), {"clean": "clean.yaml"}, fetcher)

    await chain.load("en")
    await chain.load("en")

    assert fetcher.requests == ["clean.yaml", "clean.yaml"]


def test_loader_chain_requires_normalizers() -> None:
    with pytest.raises(ValueError):
        LoaderChain([], {}, MappingFetcher({}))


@pytest.mark.asyncio()
async def test_remote_sources_over_http() -> None:
    """Relative locations are resolved against the base URL and fetched over HTTP."""
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        if request.url.path == "/content/prompts.yaml":
            return httpx.Response(200, text=NESTED_SOURCE)
        return httpx.Response(404)

    fetcher = HttpSourceFetcher(
        retry_policy=RetryPolicy(max_attempts=1),
        client_factory=lambda: httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    chain = LoaderChain(
        default_normalizers(),
        {"clean": "prompts.yaml", "nested": "prompts.yaml"},
        fetcher,
        base_url="https://example.com/content",
    )

    result = await chain.load("en")

    assert result.schema == "nested"
    assert result.location == "https://example.com/content/prompts.yaml"
    assert requested == ["https://example.com/content/prompts.yaml"]


@pytest.mark.asyncio()
async def test_undecodable_local_source_falls_through_to_legacy(tmp_path: Path) -> None:
    (tmp_path / "prompts.yaml").write_bytes(b"categories:\n  B: \xff\xfe\n")
    (tmp_path / "prompts_en.yaml").write_text(LEGACY_SOURCE_EN, encoding="utf-8")
    chain = LoaderChain(
        default_normalizers(),
        {"clean": "prompts.yaml", "nested": "prompts.yaml", "legacy": "prompts_{language}.yaml"},
        LocalSourceFetcher(base_dir=tmp_path),
    )

    result = await chain.load("en")

    assert result.schema == "legacy"
    assert result.catalog.ids() == EXPECTED_IDS


@pytest.mark.asyncio()
async def test_undecodable_only_source_raises_load_error(tmp_path: Path) -> None:
    (tmp_path / "prompts.yaml").write_bytes(b"\xff\xfe\x00garbage")
    chain = LoaderChain(
        default_normalizers(),
        {"clean": "prompts.yaml"},
        LocalSourceFetcher(base_dir=tmp_path),
    )

    with pytest.raises(LoadError) as excinfo:
        await chain.load("en")

    assert [schema for schema, _ in excinfo.value.attempts] == ["clean"]
