"""Interactive prompt browsing state on top of the repository.

A session tracks the displayed prompt, the active category, and whether that
category is pinned. Every operation returns a :class:`SessionView` describing
what a front end should show.

Updates:
  v0.2.1 - 2026-10-17 - Keep the previous language when a switch fails to load.
  v0.2.0 - 2026-10-07 - Restore the displayed prompt by id after a language switch.
  v0.1.0 - 2026-09-29 - Introduce PromptSession with deep-link start-up.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from config.persistence import SettingsStore
from models.prompt_model import Prompt

from .exceptions import LoadError, RepositoryError, UnknownCategoryError
from .link_resolver import (
    CategoryLink,
    PromptLink,
    QueryParams,
    build_share_query,
    parse_query,
    resolve_link,
)
from .repository import PromptRepository
from .translations import Translator

logger = logging.getLogger("journal_prompts.session")


@dataclass(frozen=True, slots=True)
class SessionView:
    """Snapshot of what the session currently displays."""

    prompt: Prompt | None
    category: str | None
    pinned: bool
    language: str
    status: str | None = None
    clear_query: bool = False
    unavailable: bool = False


class PromptSession:
    """Drive prompt selection, pinning, sharing, and language switches."""

    def __init__(
        self,
        repository: PromptRepository,
        settings_store: SettingsStore,
        translator: Translator,
    ) -> None:
        self._repository = repository
        self._store = settings_store
        self._translator = translator
        self._language = settings_store.get_language()
        self._current: Prompt | None = None
        self._category: str | None = None
        self._pinned = False
        self._from_deep_link = False
        self._unavailable = False

    @property
    def repository(self) -> PromptRepository:
        return self._repository

    @property
    def current(self) -> Prompt | None:
        return self._current

    @property
    def pinned(self) -> bool:
        return self._pinned

    @property
    def opened_from_link(self) -> bool:
        """True while the displayed prompt still reflects the start-up link."""
        return self._from_deep_link

    @property
    def view(self) -> SessionView:
        return self._view()

    def _view(self, status_key: str | None = None, *, clear_query: bool = False) -> SessionView:
        status = self._translator.resolve(status_key) if status_key else None
        return SessionView(
            prompt=self._current,
            category=self._category,
            pinned=self._pinned,
            language=self._language,
            status=status,
            clear_query=clear_query,
            unavailable=self._unavailable,
        )

    def _display(self, prompt: Prompt) -> None:
        self._current = prompt
        self._category = prompt.category

    async def _reload(self) -> bool:
        try:
            await self._repository.reload(self._language)
        except LoadError as exc:
            logger.error("Failed to load prompts for %s: %s", self._language, exc)
            self._unavailable = True
            return False
        self._unavailable = False
        return True

    def _unavailable_view(self) -> SessionView:
        return SessionView(
            prompt=None,
            category=None,
            pinned=False,
            language=self._language,
            status=self._translator.resolve("messages.loadError"),
            unavailable=True,
        )

    async def start(self, query: str | QueryParams | None = None) -> SessionView:
        """Load the catalogue in the stored language and honour *query*."""
        self._language = self._store.get_language()
        self._translator.set_language(self._language)
        if not await self._reload():
            self._current = None
            self._category = None
            return self._unavailable_view()

        params: QueryParams
        if query is None or isinstance(query, str):
            params = parse_query(query)
        else:
            params = query
        resolution = resolve_link(params, self._repository.catalog)
        if isinstance(resolution, PromptLink):
            self._display(resolution.prompt)
            self._pinned = resolution.pinned
            self._from_deep_link = True
            return self._view()
        if isinstance(resolution, CategoryLink):
            prompt = self._repository.random_from(self._repository.prompts_in(resolution.category))
            self._display(prompt)
            self._pinned = resolution.pinned
            self._from_deep_link = True
            return self._view("messages.categoryPinned")

        self._display(self._repository.random_any())
        self._pinned = False
        self._from_deep_link = False
        return self._view(clear_query=resolution.failed)

    def select_category(self, name: str) -> SessionView:
        """Show a random prompt from *name* and pin that category."""
        category = self._repository.category_for(name)
        if category is None:
            raise UnknownCategoryError(f"Category '{name}' does not exist")
        self._display(self._repository.random_from(self._repository.prompts_in(category)))
        self._pinned = True
        return self._view("messages.categoryPinned")

    def next_prompt(self) -> SessionView:
        """Show another prompt and drop any start-up link state."""
        self._from_deep_link = False
        if self._pinned and self._category is not None:
            prompts = self._repository.prompts_in(self._category)
            self._display(self._repository.random_from(prompts, exclude=self._current))
        else:
            self._display(self._repository.random_any())
        return self._view(clear_query=True)

    def toggle_pin(self) -> SessionView:
        self._pinned = not self._pinned
        key = "messages.categoryPinned" if self._pinned else "messages.categoryUnpinned"
        return self._view(key)

    async def switch_language(self, code: str) -> SessionView:
        """Persist *code*, reload, and keep the displayed prompt when it still exists."""
        previous_language = self._language
        self._store.set_language(code)
        self._language = self._store.get_language()
        self._translator.set_language(self._language)
        previous_id = self._current.id if self._current is not None else None
        if not await self._reload():
            failed = self._unavailable_view()
            # The repository still holds the previous catalogue; keep serving it.
            self._store.set_language(previous_language)
            self._language = previous_language
            self._translator.set_language(previous_language)
            self._unavailable = not self._repository.is_loaded
            return failed

        prompt = self._repository.find_by_id(previous_id)
        if prompt is None:
            if previous_id is not None:
                logger.info("Prompt %s is not available in %s", previous_id, self._language)
            prompt = self._repository.random_any()
        self._display(prompt)
        return self._view()

    def share_query(self) -> str:
        """Return the query string that restores the displayed prompt."""
        if self._current is None:
            raise RepositoryError("No prompt is currently displayed")
        return build_share_query(self._current)


__all__ = ["PromptSession", "SessionView"]
