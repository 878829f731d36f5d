"""Deep-link resolution against a normalised prompt catalogue.

Resolution order, first match wins:

1. ``id`` naming an existing prompt.
2. ``category`` plus ``prompt`` text prefix (older share links).
3. ``category`` alone; the caller picks a prompt inside it.
4. :class:`NoMatch`; the caller shows an unpinned random prompt.

Updates:
  v0.2.1 - 2026-10-17 - Read the query after the first "?" of scheme-less links.
  v0.2.0 - 2026-09-30 - Report supplied parameters on NoMatch so callers can clear them.
  v0.1.0 - 2026-09-19 - Introduce pure link resolution and share query helpers.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from urllib.parse import parse_qs, unquote, urlencode

from models.catalog_model import CategoryGroup
from models.prompt_model import Prompt

logger = logging.getLogger("journal_prompts.links")

LINK_PARAMETERS: tuple[str, ...] = ("id", "category", "prompt")

QueryParams = Mapping[str, str | Sequence[str] | None]


@dataclass(frozen=True, slots=True)
class PromptLink:
    """A specific prompt restored from the link."""

    prompt: Prompt
    category: str
    pinned: bool = True


@dataclass(frozen=True, slots=True)
class CategoryLink:
    """A category restored from the link; the prompt is left to the caller."""

    category: str
    pinned: bool = True


@dataclass(frozen=True, slots=True)
class NoMatch:
    """Nothing in the link matched the catalogue."""

    supplied: tuple[str, ...] = ()

    @property
    def failed(self) -> bool:
        """True when an ``id`` or ``category`` was supplied but not honoured."""
        return "id" in self.supplied or "category" in self.supplied


LinkResolution = PromptLink | CategoryLink | NoMatch


def _param(params: QueryParams, name: str) -> str | None:
    value = params.get(name)
    if value is not None and not isinstance(value, str):
        value = next(iter(value), None)
    return value or None


def resolve_link(params: QueryParams, catalog: CategoryGroup) -> LinkResolution:
    """Decide what *params* ask to display from *catalog*."""
    prompt_id = _param(params, "id")
    category_param = _param(params, "category")
    prefix_param = _param(params, "prompt")

    if prompt_id:
        prompt = catalog.find_by_id(prompt_id)
        if prompt is not None:
            logger.debug("Deep link resolved prompt %s by id", prompt.id)
            return PromptLink(prompt=prompt, category=prompt.category)
        logger.warning("Deep link prompt id not found: %s", prompt_id)

    category = catalog.category_for(category_param)
    if category is not None and prefix_param:
        prefix = unquote(prefix_param)
        for candidate in catalog[category]:
            if candidate.text.startswith(prefix):
                logger.debug("Deep link resolved prompt %s by prefix", candidate.id)
                return PromptLink(prompt=candidate, category=category)
        logger.warning("Deep link prompt prefix not found in %s: %s", category, prefix)

    if category is not None:
        logger.debug("Deep link selected category %s", category)
        return CategoryLink(category=category)

    supplied = tuple(name for name in LINK_PARAMETERS if _param(params, name))
    result = NoMatch(supplied=supplied)
    if result.failed:
        logger.warning("Deep link failed completely; falling back to a random prompt")
    return result


def parse_query(query: str | None) -> dict[str, str]:
    """Return the first value of each parameter in a query string or URL."""
    text = (query or "").strip()
    if "?" in text:
        text = text.split("?", 1)[1]
    elif "://" in text or text.startswith("/"):
        text = ""
    text = text.split("#", 1)[0]
    parsed = parse_qs(text, keep_blank_values=False)
    return {key: values[0] for key, values in parsed.items() if values}


def build_share_query(prompt: Prompt) -> str:
    """Return the query string that restores *prompt* when shared."""
    return urlencode({"id": prompt.id})


__all__ = [
    "LINK_PARAMETERS",
    "CategoryLink",
    "LinkResolution",
    "NoMatch",
    "PromptLink",
    "QueryParams",
    "build_share_query",
    "parse_query",
    "resolve_link",
]
