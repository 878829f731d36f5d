"""Normalised prompt catalogue container.

Updates: v0.2.0 - 2026-09-29 - Resolve category parameters by display name or raw identifier.
Updates: v0.1.0 - 2026-09-14 - Introduce CategoryGroup and its builder.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence

from .prompt_model import Prompt


class CategoryGroup(Mapping[str, tuple[Prompt, ...]]):
    """Read-only ordered mapping of category display name to prompts.

    Invariants enforced on construction: every prompt's ``category`` equals its
    key, no group is empty, and prompt ids are unique across the catalogue.
    """

    __slots__ = ("_groups", "_by_id", "_by_identifier")

    def __init__(self, groups: Mapping[str, Sequence[Prompt]] | None = None) -> None:
        frozen: dict[str, tuple[Prompt, ...]] = {}
        by_id: dict[str, Prompt] = {}
        by_identifier: dict[str, str] = {}
        for name, prompts in (groups or {}).items():
            members = tuple(prompts)
            if not members:
                raise ValueError(f"Category '{name}' has no prompts")
            for prompt in members:
                if prompt.category != name:
                    raise ValueError(
                        f"Prompt {prompt.id} belongs to '{prompt.category}', not '{name}'"
                    )
                if prompt.id in by_id:
                    raise ValueError(f"Duplicate prompt id {prompt.id}")
                by_id[prompt.id] = prompt
                by_identifier.setdefault(prompt.category_id, name)
            frozen[name] = members
        self._groups = frozen
        self._by_id = by_id
        self._by_identifier = by_identifier

    def __getitem__(self, name: str) -> tuple[Prompt, ...]:
        return self._groups[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __repr__(self) -> str:
        return f"CategoryGroup(categories={list(self._groups)!r}, prompts={len(self._by_id)})"

    def categories(self) -> list[str]:
        """Return category display names in source order."""
        return list(self._groups)

    def all_prompts(self) -> list[Prompt]:
        """Return every prompt, grouped in category order."""
        return [prompt for prompts in self._groups.values() for prompt in prompts]

    def ids(self) -> frozenset[str]:
        """Return the set of prompt ids in the catalogue."""
        return frozenset(self._by_id)

    def find_by_id(self, prompt_id: str | None) -> Prompt | None:
        """Return the prompt with *prompt_id*, if present."""
        if not prompt_id:
            return None
        return self._by_id.get(prompt_id)

    def category_for(self, value: str | None) -> str | None:
        """Return the display name matching *value* as a name or raw identifier.

        Display names take precedence over raw identifiers when both match.
        """
        if not value:
            return None
        if value in self._groups:
            return value
        return self._by_identifier.get(value)


class CategoryGroupBuilder:
    """Accumulate prompts in source order and freeze them into a CategoryGroup."""

    def __init__(self) -> None:
        self._groups: dict[str, list[Prompt]] = {}
        self._seen: set[str] = set()

    def __len__(self) -> int:
        return len(self._seen)

    def add(self, prompt: Prompt) -> bool:
        """Append *prompt*; return False when its id was already added."""
        if prompt.id in self._seen:
            return False
        self._seen.add(prompt.id)
        self._groups.setdefault(prompt.category, []).append(prompt)
        return True

    def build(self) -> CategoryGroup:
        """Return the immutable catalogue."""
        return CategoryGroup(self._groups)


__all__ = ["CategoryGroup", "CategoryGroupBuilder"]
