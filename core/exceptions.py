"""Common exception classes for the core package.

All exceptions ultimately inherit from :class:`JournalPromptsError`, allowing
callers to catch a single base class for any content failure while still
distinguishing individual error categories when needed.

Deep-link misses are deliberately absent from this module: an unknown prompt id
is a routine outcome and is reported as ``None`` by lookups.

Updates:
  v0.3.0 - 2026-10-02 - Add superseded-load and not-loaded repository errors.
  v0.2.0 - 2026-09-21 - Carry failed attempts on LoadError for diagnostics.
  v0.1.0 - 2026-09-14 - Created module with the content loading hierarchy.
"""

from __future__ import annotations

from collections.abc import Sequence


class JournalPromptsError(Exception):
    """Base exception for journal prompt content failures."""


# ---------------------------------------------------------------------------
# Loading errors
# ---------------------------------------------------------------------------


class ParseError(JournalPromptsError):
    """Raised when source text is not syntactically valid."""

    def __init__(self, message: str, *, location: str | None = None) -> None:
        """Store the offending *location* alongside the message."""
        if location:
            message = f"{message} ({location})"
        super().__init__(message)
        self.location = location


class SchemaMismatchError(JournalPromptsError):
    """Raised when parsed content lacks the top-level shape a normalizer expects."""


class SourceFetchError(JournalPromptsError):
    """Raised when a source document cannot be retrieved."""


class LoadError(JournalPromptsError):
    """Raised when every schema has been tried and none produced prompts."""

    def __init__(
        self,
        message: str,
        *,
        attempts: Sequence[tuple[str, str]] = (),
    ) -> None:
        """Record the ``(schema, reason)`` pairs that led to the failure."""
        super().__init__(message)
        self.attempts: tuple[tuple[str, str], ...] = tuple(attempts)


# ---------------------------------------------------------------------------
# Repository errors
# ---------------------------------------------------------------------------


class RepositoryError(JournalPromptsError):
    """Base class for prompt repository failures."""


class CatalogNotLoadedError(RepositoryError):
    """Raised when queries run before any catalogue has been committed."""


class SupersededLoadError(RepositoryError):
    """Raised when a newer reload replaced this one before it completed."""


class UnknownCategoryError(RepositoryError, KeyError):
    """Raised when a requested category is not part of the current catalogue."""

    def __str__(self) -> str:
        """Render the message without the quoting KeyError applies."""
        return str(self.args[0]) if self.args else ""


__all__ = [
    "CatalogNotLoadedError",
    "JournalPromptsError",
    "LoadError",
    "ParseError",
    "RepositoryError",
    "SchemaMismatchError",
    "SourceFetchError",
    "SupersededLoadError",
    "UnknownCategoryError",
]
