"""Core service layer for Journal Prompts.

Updates:
  v0.3.0 - 2026-10-07 - Export PromptSession, translators, and factory helpers.
  v0.2.0 - 2026-10-02 - Export the repository and link resolver API.
  v0.1.0 - 2026-09-17 - Surface the loader chain and schema normalisers.
"""

from .exceptions import (
    CatalogNotLoadedError,
    JournalPromptsError,
    LoadError,
    ParseError,
    RepositoryError,
    SchemaMismatchError,
    SourceFetchError,
    SupersededLoadError,
    UnknownCategoryError,
)
from .factory import build_loader_chain, build_repository, build_session, build_settings_store
from .link_resolver import (
    CategoryLink,
    LinkResolution,
    NoMatch,
    PromptLink,
    build_share_query,
    parse_query,
    resolve_link,
)
from .loader import LoaderChain, LoadResult
from .normalizers import (
    CleanSchemaNormalizer,
    LegacySchemaNormalizer,
    NestedSchemaNormalizer,
    SchemaNormalizer,
    default_normalizers,
)
from .repository import CatalogSnapshot, PromptRepository
from .session import PromptSession, SessionView
from .translations import MappingTranslator, Translator

__all__ = [
    "CatalogNotLoadedError",
    "CatalogSnapshot",
    "CategoryLink",
    "CleanSchemaNormalizer",
    "JournalPromptsError",
    "LegacySchemaNormalizer",
    "LinkResolution",
    "LoadError",
    "LoadResult",
    "LoaderChain",
    "MappingTranslator",
    "NestedSchemaNormalizer",
    "NoMatch",
    "ParseError",
    "PromptLink",
    "PromptRepository",
    "PromptSession",
    "RepositoryError",
    "SchemaMismatchError",
    "SchemaNormalizer",
    "SessionView",
    "SourceFetchError",
    "SupersededLoadError",
    "Translator",
    "UnknownCategoryError",
    "build_loader_chain",
    "build_repository",
    "build_session",
    "build_settings_store",
    "build_share_query",
    "default_normalizers",
    "parse_query",
    "resolve_link",
]
