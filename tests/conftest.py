"""Pytest configuration and shared prompt source fixtures.

Every sample source describes the same logical content: Biography prompts B1
and B2 in English and German, plus an Emotions prompt E1 that only exists in
English.

Updates:
  v0.2.0 - 2026-10-03 - Add legacy German stream with an explicit English document.
  v0.1.0 - 2026-09-17 - Shared clean, nested, and legacy sample sources.
"""

from __future__ import annotations

import os
import random
from collections.abc import Iterator, Mapping
from pathlib import Path

import pytest

from core.exceptions import SourceFetchError
from models.catalog_model import CategoryGroup, CategoryGroupBuilder
from models.prompt_model import Prompt, PromptTranslation

CLEAN_SOURCE = """\
categories:
  B:
    names:
      en: Biography
      de: Biografie
    prompts:
      - id: 1
        en:
          prompt: Describe a place from your childhood.
          purpose: Places hold memories.
        de:
          prompt: Beschreibe einen Ort aus deiner Kindheit.
          purpose: Orte bewahren Erinnerungen.
      - id: 2
        en:
          prompt: Describe a person who changed your life.
          purpose: People shape values.
        de:
          prompt: Beschreibe einen Menschen, der dein Leben verändert hat.
          purpose: Menschen prägen Werte.
  E:
    names:
      en: Emotions
    prompts:
      - id: 1
        en:
          prompt: Which feeling did you avoid today?
          purpose: Avoided feelings carry information.
"""

NESTED_SOURCE = """\
categories:
  - id: B
    translations:
      en: Biography
      de: Biografie
  - id: E
    translations:
      en: Emotions
prompts:
  - id: 1
    category_id: B
    translations:
      en:
        prompt: Describe a place from your childhood.
        purpose: Places hold memories.
      de:
        prompt: Beschreibe einen Ort aus deiner Kindheit.
        purpose: Orte bewahren Erinnerungen.
  - id: 2
    category_id: B
    translations:
      en:
        prompt: Describe a person who changed your life.
        purpose: People shape values.
      de:
        prompt: Beschreibe einen Menschen, der dein Leben verändert hat.
        purpose: Menschen prägen Werte.
  - id: 1
    category_id: E
    translations:
      en:
        prompt: Which feeling did you avoid today?
        purpose: Avoided feelings carry information.
"""

LEGACY_SOURCE_EN = """\
id: B1
category: Biography
prompt: Describe a place from your childhood.
purpose: Places hold memories.
---
id: B2
category: Biography
prompt: Describe a person who changed your life.
purpose: People shape values.
---
id: E1
category: Emotions
prompt: Which feeling did you avoid today?
purpose: Avoided feelings carry information.
"""

LEGACY_SOURCE_DE = """\
id: B1
category: Biografie
prompt: Beschreibe einen Ort aus deiner Kindheit.
purpose: Orte bewahren Erinnerungen.
---
id: 2
category_id: B
category: Biografie
prompt: Beschreibe einen Menschen, der dein Leben verändert hat.
purpose: Menschen prägen Werte.
---
id: E1
language: en
category: Emotions
prompt: Which feeling did you avoid today?
purpose: Avoided feelings carry information.
"""

EXPECTED_IDS = frozenset({"B1", "B2", "E1"})


class MappingFetcher:
    """In-memory SourceFetcher recording every requested location."""

    def __init__(self, documents: Mapping[str, str]) -> None:
        self.documents = dict(documents)
        self.requests: list[str] = []

    async def fetch(self, location: str) -> str:
        self.requests.append(location)
        try:
            return self.documents[location]
        except KeyError:
            raise SourceFetchError(f"No such source: {location}") from None


def make_prompt(
    category_id: str,
    sequence: int,
    text: str,
    *,
    category: str | None = None,
    purpose: str = "",
) -> Prompt:
    """Return a prompt built with the canonical id rule."""
    return Prompt.build(
        category_id=category_id,
        sequence=sequence,
        category=category or category_id,
        translation=PromptTranslation(prompt=text, purpose=purpose),
    )


@pytest.fixture()
def sample_catalog() -> CategoryGroup:
    """Two categories with distinct prompt texts."""
    builder = CategoryGroupBuilder()
    for prompt in (
        make_prompt("B", 1, "Describe a place from your childhood.", category="Biography"),
        make_prompt("B", 2, "Describe a person who changed your life.", category="Biography"),
        make_prompt("B", 3, "Write about a decision.", category="Biography"),
        make_prompt("E", 1, "Which feeling did you avoid today?", category="Emotions"),
    ):
        builder.add(prompt)
    return builder.build()


@pytest.fixture()
def seeded_rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def isolated_settings_env(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> Iterator[None]:
    """Run with an empty working directory and no JOURNAL_PROMPTS_* variables."""
    for key in list(os.environ):
        if key.startswith("JOURNAL_PROMPTS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("JOURNAL_PROMPTS_ENV_FILE", "")
    monkeypatch.chdir(tmp_path)
    yield
