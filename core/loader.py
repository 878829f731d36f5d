"""Loader chain trying each prompt schema in priority order.

Updates:
  v0.3.0 - 2026-10-01 - Fetch each distinct location once per load call.
  v0.2.0 - 2026-09-24 - Treat empty catalogues as a failed schema attempt.
  v0.1.0 - 2026-09-17 - Fold clean, nested, and legacy normalisers into one loader.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from models.catalog_model import CategoryGroup

from .document_parser import parse_document, parse_document_stream
from .exceptions import LoadError, ParseError, SchemaMismatchError, SourceFetchError
from .localization import normalise_language
from .normalizers import SchemaNormalizer
from .sources import SourceFetcher, expand_location

logger = logging.getLogger("journal_prompts.loader")


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Catalogue produced by the first schema that succeeded."""

    catalog: CategoryGroup
    language: str
    schema: str
    location: str


class LoaderChain:
    """Try normalisers in order against their configured source locations.

    *locations* maps a normaliser name to a location template; normalisers with
    no location are skipped. Nothing is cached between :meth:`load` calls.
    """

    def __init__(
        self,
        normalizers: Sequence[SchemaNormalizer],
        locations: Mapping[str, str | None],
        fetcher: SourceFetcher,
        *,
        base_url: str | None = None,
    ) -> None:
        if not normalizers:
            raise ValueError("LoaderChain requires at least one normaliser")
        self._normalizers = tuple(normalizers)
        self._locations = dict(locations)
        self._fetcher = fetcher
        self._base_url = base_url

    @property
    def schemas(self) -> tuple[str, ...]:
        """Return normaliser names in priority order."""
        return tuple(normalizer.name for normalizer in self._normalizers)

    async def load(self, language: str) -> LoadResult:
        """Return the first non-empty catalogue for *language*.

        Raises:
          LoadError: When every schema failed or produced no prompts.
        """
        code = normalise_language(language)
        fetched: dict[str, str | SourceFetchError] = {}
        attempts: list[tuple[str, str]] = []

        for normalizer in self._normalizers:
            template = self._locations.get(normalizer.name)
            if not template:
                logger.debug("No source configured for %s schema; skipping", normalizer.name)
                continue
            location = expand_location(template, language=code, base_url=self._base_url)
            try:
                text = await self._fetch_once(location, fetched)
                if normalizer.multi_document:
                    raw = parse_document_stream(text, location=location)
                else:
                    raw = parse_document(text, location=location)
                catalog = normalizer.try_normalize(raw, code)
            except (SourceFetchError, ParseError, SchemaMismatchError) as exc:
                logger.warning(
                    "Prompt source %s did not load as %s schema: %s",
                    location,
                    normalizer.name,
                    exc,
                )
                attempts.append((normalizer.name, str(exc)))
                continue
            if not catalog:
                logger.warning(
                    "Prompt source %s produced no %s prompts as %s schema",
                    location,
                    code,
                    normalizer.name,
                )
                attempts.append((normalizer.name, "no prompts"))
                continue
            logger.info(
                "Loaded %d prompts in %d categories from %s (%s schema, language %s)",
                len(catalog.ids()),
                len(catalog),
                location,
                normalizer.name,
                code,
            )
            return LoadResult(
                catalog=catalog,
                language=code,
                schema=normalizer.name,
                location=location,
            )

        raise LoadError(f"Unable to load prompts for language '{code}'", attempts=attempts)

    async def _fetch_once(
        self,
        location: str,
        fetched: dict[str, str | SourceFetchError],
    ) -> str:
        cached = fetched.get(location)
        if cached is None:
            try:
                cached = await self._fetcher.fetch(location)
            except SourceFetchError as exc:
                cached = exc
            fetched[location] = cached
        if isinstance(cached, SourceFetchError):
            raise cached
        return cached


__all__ = ["LoadResult", "LoaderChain"]
