"""Factories for constructing the prompt repository and session from settings.

Updates:
  v0.2.0 - 2026-10-07 - Build sessions with the JSON preference store and translator.
  v0.1.0 - 2026-09-24 - Wire the loader chain from configured source locations.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import httpx

from config.persistence import JsonSettingsStore, SettingsStore

from .loader import LoaderChain
from .normalizers import default_normalizers
from .repository import PromptRepository
from .retry import RetryPolicy
from .session import PromptSession
from .sources import HttpSourceFetcher, LocalSourceFetcher, RoutingSourceFetcher
from .translations import MappingTranslator, Translator

if TYPE_CHECKING:  # pragma: no cover - typing only
    from config import JournalPromptsSettings

factory_logger = logging.getLogger("journal_prompts.factory")


def build_source_fetcher(
    settings: JournalPromptsSettings,
    *,
    client_factory: Callable[[], httpx.AsyncClient] | None = None,
    base_dir: Path | None = None,
) -> RoutingSourceFetcher:
    """Return a fetcher honouring the configured timeout and retry budget."""
    http = HttpSourceFetcher(
        timeout=settings.request_timeout_seconds,
        retry_policy=RetryPolicy(max_attempts=settings.fetch_max_attempts),
        client_factory=client_factory,
    )
    return RoutingSourceFetcher(http=http, local=LocalSourceFetcher(base_dir=base_dir))


def build_loader_chain(
    settings: JournalPromptsSettings,
    *,
    client_factory: Callable[[], httpx.AsyncClient] | None = None,
    base_dir: Path | None = None,
) -> LoaderChain:
    """Return the clean → nested → legacy loader chain described by *settings*."""
    locations = settings.source_locations()
    configured = [name for name, location in locations.items() if location]
    if not configured:
        factory_logger.warning("No prompt source locations are configured")
    factory_logger.debug("Prompt sources: %s", ", ".join(configured) or "none")
    return LoaderChain(
        default_normalizers(fallback_language=settings.fallback_language),
        locations,
        build_source_fetcher(settings, client_factory=client_factory, base_dir=base_dir),
        base_url=settings.source_base_url,
    )


def build_repository(
    settings: JournalPromptsSettings,
    *,
    client_factory: Callable[[], httpx.AsyncClient] | None = None,
    base_dir: Path | None = None,
    rng: random.Random | None = None,
) -> PromptRepository:
    """Return an unloaded repository backed by the configured loader chain."""
    loader = build_loader_chain(settings, client_factory=client_factory, base_dir=base_dir)
    return PromptRepository(loader, rng=rng)


def build_settings_store(settings: JournalPromptsSettings) -> JsonSettingsStore:
    """Return the JSON preference store with defaults taken from *settings*."""
    return JsonSettingsStore(
        settings.settings_store_path,
        default_language=settings.language,
        default_theme=settings.theme_mode,
    )


def build_session(
    settings: JournalPromptsSettings,
    *,
    repository: PromptRepository | None = None,
    settings_store: SettingsStore | None = None,
    translator: Translator | None = None,
    client_factory: Callable[[], httpx.AsyncClient] | None = None,
) -> PromptSession:
    """Return a prompt session, creating any collaborator not supplied."""
    resolved_repository = repository or build_repository(settings, client_factory=client_factory)
    resolved_store = settings_store or build_settings_store(settings)
    resolved_translator = translator or MappingTranslator(
        language=resolved_store.get_language(),
        fallback=settings.fallback_language,
    )
    return PromptSession(resolved_repository, resolved_store, resolved_translator)


__all__ = [
    "build_loader_chain",
    "build_repository",
    "build_session",
    "build_settings_store",
    "build_source_fetcher",
]
