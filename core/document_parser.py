"""Syntax-only parsing of prompt source documents.

Updates:
  v0.1.1 - 2026-09-21 - Drop empty documents from multi-document streams.
  v0.1.0 - 2026-09-14 - Parse YAML (and therefore JSON) source text.
"""

from __future__ import annotations

from typing import Any

import yaml

from .exceptions import ParseError


def parse_document(text: str, *, location: str | None = None) -> Any:
    """Return the generic tree for a single-document *text*."""
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParseError(f"Invalid document syntax: {exc}", location=location) from exc


def parse_document_stream(text: str, *, location: str | None = None) -> list[Any]:
    """Return every non-empty document of a ``---`` separated stream."""
    try:
        documents = list(yaml.safe_load_all(text))
    except yaml.YAMLError as exc:
        raise ParseError(f"Invalid document stream syntax: {exc}", location=location) from exc
    return [document for document in documents if document is not None]


__all__ = ["parse_document", "parse_document_stream"]
