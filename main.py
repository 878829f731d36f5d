"""Application entry point for Journal Prompts.

Updates:
  v0.2.0 - 2026-10-08 - Run language preference commands without loading prompts.
  v0.1.1 - 2026-09-30 - Map content load failures to exit code 3.
  v0.1.0 - 2026-09-25 - Wire settings, logging, the repository, and CLI commands.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from cli.commands import COMMAND_SPECS, CommandContext
from cli.parser import parse_args
from cli.runtime import setup_logging
from cli.settings_summary import print_settings_summary
from config import SettingsError, load_settings
from core import LoadError, PromptRepository, build_repository, build_settings_store

EXIT_SETTINGS_FAILURE = 2
EXIT_CONTENT_UNAVAILABLE = 3


async def _load_repository(repository: PromptRepository, language: str) -> None:
    await repository.reload(language)


def main(argv: Sequence[str] | None = None) -> int:
    """Entrypoint that wires settings, the prompt repository, and CLI commands."""
    args = parse_args(argv)
    setup_logging(args.logging_config)

    logger = logging.getLogger("journal_prompts.main")
    try:
        settings = load_settings()
    except SettingsError as exc:
        logger.error("Failed to load settings: %s", exc)
        return EXIT_SETTINGS_FAILURE

    settings_store = build_settings_store(settings)
    if args.print_settings:
        print_settings_summary(settings, settings_store)
        return 0

    command = getattr(args, "command", None) or "random"
    spec = COMMAND_SPECS[command]
    context = CommandContext(settings=settings, settings_store=settings_store)

    if spec.requires_repository:
        language = args.language or settings_store.get_language()
        repository = build_repository(settings)
        try:
            asyncio.run(_load_repository(repository, language))
        except LoadError as exc:
            logger.error("Prompts are unavailable: %s", exc)
            for schema, reason in exc.attempts:
                logger.info("  %s: %s", schema, reason)
            return EXIT_CONTENT_UNAVAILABLE
        context.repository = repository

    return spec.handler(context, args, logger)


if __name__ == "__main__":
    raise SystemExit(main())
