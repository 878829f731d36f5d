"""Built-in prompt catalogue resources for Journal Prompts.

Updates: v0.2.0 - 2026-09-24 - Look up packaged resources by file name.
Updates: v0.1.0 - 2026-09-14 - Provide packaged default prompt catalogue.
"""

from __future__ import annotations

from importlib.resources import files
from typing import Any

DEFAULT_CATALOG_NAME = "journal-prompts.yaml"


def builtin_catalog_resource(name: str = DEFAULT_CATALOG_NAME) -> Any:
    """Return a Traversable pointing to the packaged catalogue file *name*."""
    return files(__name__).joinpath(name)


__all__ = ["DEFAULT_CATALOG_NAME", "builtin_catalog_resource"]
