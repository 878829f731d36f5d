"""Category metadata models and helpers.

Updates: v0.2.0 - 2026-09-20 - Lower-case language keys on category name maps.
Updates: v0.1.0 - 2026-09-14 - Introduce CategoryDefinition dataclass and helpers.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def _clean_optional_text(value: Any) -> str | None:
    """Strip whitespace from optional scalar inputs."""
    if value is None or isinstance(value, (Mapping, list, tuple)):
        return None
    text = str(value).strip()
    return text or None


def normalise_name_map(value: Any) -> dict[str, str]:
    """Return a ``language -> display name`` mapping with lower-cased codes."""
    names: dict[str, str] = {}
    if not isinstance(value, Mapping):
        return names
    for raw_code, raw_name in value.items():
        code = str(raw_code).strip().lower()
        name = _clean_optional_text(raw_name)
        if code and name:
            names[code] = name
    return names


@dataclass(frozen=True, slots=True)
class CategoryDefinition:
    """Raw category identifier together with its per-language display names."""

    identifier: str
    names: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Reject empty identifiers."""
        if not self.identifier:
            raise ValueError("category identifier cannot be empty")

    @classmethod
    def from_mapping(
        cls,
        payload: Mapping[str, Any],
        *,
        identifier: Any = None,
        names_key: str = "translations",
    ) -> CategoryDefinition:
        """Create a definition from loosely structured source content.

        The identifier is taken from *identifier* when given (mapping-keyed
        sources) and from the ``id`` field otherwise.
        """
        raw_identifier = identifier if identifier is not None else payload.get("id")
        resolved = _clean_optional_text(raw_identifier)
        if resolved is None:
            raise ValueError("categories require an id")
        return cls(identifier=resolved, names=normalise_name_map(payload.get(names_key)))


__all__ = ["CategoryDefinition", "normalise_name_map"]
