"""Prompt data model definitions.

Updates: v0.3.0 - 2026-09-28 - Split composite legacy ids into identifier and sequence.
Updates: v0.2.0 - 2026-09-20 - Add PromptTranslation records for multilingual sources.
Updates: v0.1.0 - 2026-09-14 - Initial canonical Prompt schema.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

_COMPOSITE_ID_PATTERN = re.compile(r"^(?P<category>.*?)(?P<sequence>\d+)$")


def _clean_text(value: Any) -> str:
    """Return trimmed text for scalar values and an empty string otherwise."""
    if value is None or isinstance(value, (Mapping, list, tuple)):
        return ""
    return str(value).strip()


def parse_sequence(value: Any) -> int | None:
    """Return a non-negative integer sequence number parsed from *value*."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    text = _clean_text(value)
    if not text.isdigit():
        return None
    return int(text)


def compose_prompt_id(category_id: str, sequence: int) -> str:
    """Return the canonical prompt id: raw category identifier plus sequence."""
    return f"{category_id}{sequence}"


def split_prompt_id(value: Any) -> tuple[str, int] | None:
    """Split a composite id such as ``"B1"`` into ``("B", 1)``."""
    text = _clean_text(value)
    match = _COMPOSITE_ID_PATTERN.fullmatch(text)
    if match is None or not match.group("category"):
        return None
    return match.group("category"), int(match.group("sequence"))


@dataclass(frozen=True, slots=True)
class PromptTranslation:
    """Prompt text and purpose in a single language."""

    prompt: str
    purpose: str = ""

    @classmethod
    def from_mapping(cls, payload: Any) -> PromptTranslation | None:
        """Return a translation, or ``None`` when *payload* carries no prompt text."""
        if not isinstance(payload, Mapping):
            return None
        prompt = _clean_text(payload.get("prompt"))
        if not prompt:
            return None
        return cls(prompt=prompt, purpose=_clean_text(payload.get("purpose")))


@dataclass(frozen=True, slots=True)
class Prompt:
    """Canonical journaling prompt produced by schema normalisation."""

    id: str
    category: str
    text: str
    purpose: str
    category_id: str
    sequence: int

    @classmethod
    def build(
        cls,
        *,
        category_id: str,
        sequence: int,
        category: str,
        translation: PromptTranslation,
    ) -> Prompt:
        """Create a prompt whose id follows the canonical composition rule."""
        return cls(
            id=compose_prompt_id(category_id, sequence),
            category=category,
            text=translation.prompt,
            purpose=translation.purpose,
            category_id=category_id,
            sequence=sequence,
        )

    def to_record(self) -> dict[str, Any]:
        """Serialise the prompt into a plain dictionary."""
        return {
            "id": self.id,
            "category": self.category,
            "text": self.text,
            "purpose": self.purpose,
            "category_id": self.category_id,
            "sequence": self.sequence,
        }


__all__ = [
    "Prompt",
    "PromptTranslation",
    "compose_prompt_id",
    "parse_sequence",
    "split_prompt_id",
]
