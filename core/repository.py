"""In-memory prompt repository backed by the loader chain.

The repository holds one immutable :class:`CatalogSnapshot`. Reloads replace it
with a single assignment, so readers observe either the old or the new
catalogue and never a partial one. When several reloads overlap, only the most
recently requested one may commit.

Updates:
  v0.3.0 - 2026-10-02 - Discard superseded reloads (last requested language wins).
  v0.2.0 - 2026-09-26 - Sample without the excluded prompt for bounded selection.
  v0.1.0 - 2026-09-18 - Introduce PromptRepository over normalised catalogues.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from models.catalog_model import CategoryGroup

from .exceptions import (
    CatalogNotLoadedError,
    LoadError,
    RepositoryError,
    SupersededLoadError,
    UnknownCategoryError,
)

if TYPE_CHECKING:
    from models.prompt_model import Prompt

    from .loader import LoadResult

logger = logging.getLogger("journal_prompts.repository")


class CatalogLoader(Protocol):
    """Anything able to build a catalogue for a language."""

    async def load(self, language: str) -> LoadResult:
        """Return a freshly normalised catalogue."""
        ...


@dataclass(frozen=True, slots=True)
class CatalogSnapshot:
    """Catalogue together with the language and schema it was built from."""

    catalog: CategoryGroup
    language: str
    schema: str


class PromptRepository:
    """Lookup and random selection over the current prompt catalogue."""

    def __init__(
        self,
        loader: CatalogLoader | None = None,
        *,
        rng: random.Random | None = None,
        snapshot: CatalogSnapshot | None = None,
    ) -> None:
        self._loader = loader
        self._rng = rng or random.Random()
        self._snapshot = snapshot
        self._requested = 0

    @classmethod
    def from_catalog(
        cls,
        catalog: CategoryGroup,
        *,
        language: str = "en",
        schema: str = "memory",
        rng: random.Random | None = None,
    ) -> PromptRepository:
        """Return a repository pre-populated with *catalog* and no loader."""
        snapshot = CatalogSnapshot(catalog=catalog, language=language, schema=schema)
        return cls(rng=rng, snapshot=snapshot)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    @property
    def snapshot(self) -> CatalogSnapshot:
        """Return the committed snapshot or raise when nothing is loaded yet."""
        if self._snapshot is None:
            raise CatalogNotLoadedError("No prompt catalogue has been loaded")
        return self._snapshot

    @property
    def catalog(self) -> CategoryGroup:
        return self.snapshot.catalog

    @property
    def language(self) -> str:
        return self.snapshot.language

    @property
    def schema(self) -> str:
        return self.snapshot.schema

    async def reload(self, language: str) -> CatalogSnapshot:
        """Rebuild the catalogue for *language* and commit it atomically.

        Raises:
          LoadError: When no schema produced prompts; the previous snapshot stays.
          SupersededLoadError: When a newer reload was requested meanwhile.
        """
        if self._loader is None:
            raise RepositoryError("PromptRepository has no loader configured")
        self._requested += 1
        token = self._requested
        try:
            result = await self._loader.load(language)
        except LoadError as exc:
            if token != self._requested:
                raise SupersededLoadError(
                    f"Load for '{language}' was superseded before it failed"
                ) from exc
            raise
        if token != self._requested:
            logger.info("Discarding superseded %s catalogue", result.language)
            raise SupersededLoadError(f"Load for '{language}' was superseded")
        snapshot = CatalogSnapshot(
            catalog=result.catalog,
            language=result.language,
            schema=result.schema,
        )
        self._snapshot = snapshot
        return snapshot

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_categories(self) -> list[str]:
        """Return category display names in source order."""
        return self.catalog.categories()

    def prompts_in(self, category: str) -> list[Prompt]:
        """Return the prompts of *category*."""
        try:
            return list(self.catalog[category])
        except KeyError:
            raise UnknownCategoryError(f"Category '{category}' does not exist") from None

    def find_by_id(self, prompt_id: str | None) -> Prompt | None:
        """Return the prompt with *prompt_id* or ``None``."""
        return self.catalog.find_by_id(prompt_id)

    def category_for(self, value: str | None) -> str | None:
        """Return the display name matching a name or raw category identifier."""
        return self.catalog.category_for(value)

    def random_from(self, prompts: Sequence[Prompt], exclude: Prompt | None = None) -> Prompt:
        """Pick a prompt uniformly, never repeating *exclude*'s text when avoidable.

        With a single candidate that candidate is always returned. If every
        candidate shares *exclude*'s text, the full list is sampled instead.
        """
        members = list(prompts)
        if not members:
            raise ValueError("random_from requires at least one prompt")
        if exclude is None or len(members) == 1:
            return self._rng.choice(members)
        candidates = [prompt for prompt in members if prompt.text != exclude.text]
        return self._rng.choice(candidates or members)

    def random_any(self, exclude: Prompt | None = None) -> Prompt:
        """Pick a prompt from the whole catalogue with the same exclusion rule."""
        return self.random_from(self.catalog.all_prompts(), exclude)


__all__ = ["CatalogLoader", "CatalogSnapshot", "PromptRepository"]
