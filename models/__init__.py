"""Data models for Journal Prompts.

Updates: v0.2.0 - 2026-09-20 - Export CategoryDefinition and PromptTranslation.
Updates: v0.1.0 - 2026-09-14 - Export Prompt and CategoryGroup.
"""

from .catalog_model import CategoryGroup, CategoryGroupBuilder
from .category_model import CategoryDefinition
from .prompt_model import Prompt, PromptTranslation

__all__ = [
    "CategoryDefinition",
    "CategoryGroup",
    "CategoryGroupBuilder",
    "Prompt",
    "PromptTranslation",
]
