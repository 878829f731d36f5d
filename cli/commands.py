"""CLI command handlers for Journal Prompts.

Handlers return process exit codes: 0 on success, 4 when a requested category
or prompt id does not exist.

Updates:
  v0.2.0 - 2026-10-08 - Add preferences handler backed by the settings store.
  v0.1.0 - 2026-09-25 - Introduce prompt browsing and link handlers.
"""

from __future__ import annotations

import argparse
import logging
import textwrap
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from core import (
    CategoryLink,
    PromptLink,
    build_share_query,
    parse_query,
    resolve_link,
)

from .utils import print_and_log

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config import JournalPromptsSettings, SettingsStore
    from core import PromptRepository
    from models import Prompt

EXIT_NOT_FOUND = 4


@dataclass(slots=True)
class CommandContext:
    """Services available to command handlers."""

    settings: JournalPromptsSettings
    settings_store: SettingsStore
    repository: PromptRepository | None = None

    def require_repository(self) -> PromptRepository:
        if self.repository is None:
            raise ValueError("A loaded prompt repository is required for this command.")
        return self.repository


CommandHandler = Callable[[CommandContext, argparse.Namespace, logging.Logger], int]


@dataclass(frozen=True)
class CommandSpec:
    """Metadata for dispatching CLI command handlers."""

    handler: CommandHandler
    requires_repository: bool = True


def _print_prompt(prompt: Prompt, *, include_purpose: bool = False) -> None:
    print(f"[{prompt.id}] {prompt.category}")
    print(textwrap.fill(prompt.text, width=88))
    if include_purpose and prompt.purpose:
        print()
        print(
            textwrap.fill(
                prompt.purpose,
                width=88,
                initial_indent="  ",
                subsequent_indent="  ",
            )
        )


def run_categories(
    context: CommandContext,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    repository = context.require_repository()
    categories = repository.list_categories()
    if not categories:
        print("No categories available.")
        return 0
    print(f"\nCategories ({repository.language}, {repository.schema} schema):")
    for name in categories:
        prompts = repository.prompts_in(name)
        print(f"- {name} ({prompts[0].category_id}): {len(prompts)} prompt(s)")
    return 0


def run_random(
    context: CommandContext,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    repository = context.require_repository()
    requested = getattr(args, "category", None)
    if requested:
        category = repository.category_for(requested)
        if category is None:
            print_and_log(logger, logging.ERROR, f"Unknown category: {requested}")
            return EXIT_NOT_FOUND
        prompt = repository.random_from(repository.prompts_in(category))
    else:
        prompt = repository.random_any()
    _print_prompt(prompt, include_purpose=getattr(args, "purpose", False))
    return 0


def run_show(
    context: CommandContext,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    repository = context.require_repository()
    prompt = repository.find_by_id(args.prompt_id)
    if prompt is None:
        print_and_log(logger, logging.ERROR, f"Prompt not found: {args.prompt_id}")
        return EXIT_NOT_FOUND
    _print_prompt(prompt, include_purpose=True)
    return 0


def run_resolve(
    context: CommandContext,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    repository = context.require_repository()
    resolution = resolve_link(parse_query(args.query), repository.catalog)
    if isinstance(resolution, PromptLink):
        _print_prompt(resolution.prompt)
        return 0
    if isinstance(resolution, CategoryLink):
        prompt = repository.random_from(repository.prompts_in(resolution.category))
        print(f"Category {resolution.category} (pinned)")
        _print_prompt(prompt)
        return 0
    if resolution.failed:
        print_and_log(
            logger,
            logging.WARNING,
            "Link did not match any prompt or category; showing a random prompt instead.",
        )
        _print_prompt(repository.random_any())
        return EXIT_NOT_FOUND
    print("Link has no prompt parameters; showing a random prompt.")
    _print_prompt(repository.random_any())
    return 0


def run_share(
    context: CommandContext,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    repository = context.require_repository()
    prompt = repository.find_by_id(args.prompt_id)
    if prompt is None:
        print_and_log(logger, logging.ERROR, f"Prompt not found: {args.prompt_id}")
        return EXIT_NOT_FOUND
    query = build_share_query(prompt)
    base_url = getattr(args, "base_url", None)
    if base_url:
        print(f"{base_url.split('?', 1)[0]}?{query}")
    else:
        print(f"?{query}")
    return 0


def run_preferences(
    context: CommandContext,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    store = context.settings_store
    language = getattr(args, "set_language", None)
    theme = getattr(args, "set_theme", None)
    if language:
        store.set_language(language)
        logger.info("Stored language preference %s", language)
    if theme:
        store.set_theme(theme)
        logger.info("Stored theme preference %s", theme)
    print(f"Language: {store.get_language()}")
    print(f"Theme: {store.get_theme()}")
    return 0


COMMAND_SPECS: dict[str | None, CommandSpec] = {
    "categories": CommandSpec(run_categories),
    "random": CommandSpec(run_random),
    "show": CommandSpec(run_show),
    "resolve": CommandSpec(run_resolve),
    "share": CommandSpec(run_share),
    "preferences": CommandSpec(run_preferences, requires_repository=False),
}


__all__ = ["COMMAND_SPECS", "CommandContext", "CommandSpec", "EXIT_NOT_FOUND"]
