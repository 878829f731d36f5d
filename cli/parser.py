"""Argument parser for the Journal Prompts CLI.

Updates:
  v0.2.0 - 2026-10-08 - Add preferences command for the stored language and theme.
  v0.1.0 - 2026-09-25 - Introduce categories, random, show, resolve, and share commands.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

from config import AVAILABLE_LANGUAGES, AVAILABLE_THEMES


def _language_code(value: str) -> str:
    code = value.strip().upper()
    if code not in AVAILABLE_LANGUAGES:
        raise argparse.ArgumentTypeError(
            f"unsupported language '{value}' (choose from {', '.join(AVAILABLE_LANGUAGES)})"
        )
    return code


def build_parser() -> argparse.ArgumentParser:
    """Return the configured argument parser."""
    parser = argparse.ArgumentParser(description="Journal Prompts")
    parser.add_argument(
        "--language",
        type=_language_code,
        default=None,
        help="Content language for this run (defaults to the stored preference).",
    )
    parser.add_argument(
        "--logging-config",
        type=Path,
        default=None,
        help="Path to logging configuration file (INI format)",
    )
    parser.add_argument(
        "--print-settings",
        action="store_true",
        help="Print resolved settings and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("categories", help="List categories with their prompt counts.")

    random_parser = subparsers.add_parser("random", help="Print a random prompt.")
    random_parser.add_argument(
        "--category",
        type=str,
        default=None,
        help="Restrict the choice to a category (display name or identifier).",
    )
    random_parser.add_argument(
        "--purpose",
        action="store_true",
        help="Also print the purpose of the prompt.",
    )

    show_parser = subparsers.add_parser("show", help="Print the prompt with a given id.")
    show_parser.add_argument("--id", dest="prompt_id", required=True, help="Prompt id, e.g. B1.")

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Resolve a share link or query string to a prompt or category.",
    )
    resolve_parser.add_argument("query", type=str, help="URL or query string, e.g. '?id=B1'.")

    share_parser = subparsers.add_parser("share", help="Print the share query for a prompt.")
    share_parser.add_argument("--id", dest="prompt_id", required=True, help="Prompt id, e.g. B1.")
    share_parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help="Prefix the query with this URL.",
    )

    preferences_parser = subparsers.add_parser(
        "preferences",
        help="Show or update the stored language and theme.",
    )
    preferences_parser.add_argument(
        "--set-language",
        type=_language_code,
        default=None,
        help="Persist the preferred content language.",
    )
    preferences_parser.add_argument(
        "--set-theme",
        choices=AVAILABLE_THEMES,
        default=None,
        help="Persist the preferred theme.",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed CLI arguments."""
    return build_parser().parse_args(argv)


__all__ = ["build_parser", "parse_args"]
