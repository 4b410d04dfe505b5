"""Public model exports for the project.

Keep the :mod:`bhasha_mitra` namespace clean: other modules should import
``from bhasha_mitra.models import SpellingSuggestion, SuggestionCategory``.
"""

from __future__ import annotations

from .enums import (
    Branch,
    BranchStatus,
    DocType,
    HighlightColor,
    LanguageStyle,
    SuggestionCategory,
)
from .stats import Stats
from .suggestions import (
    ContentAnalysis,
    EuphonyImprovement,
    MixingCorrection,
    PunctuationIssue,
    SpellingSuggestion,
    StyleMixing,
    StyleSuggestion,
    Suggestion,
    ToneSuggestion,
    validate_items,
)

__all__ = [
    "Branch",
    "BranchStatus",
    "ContentAnalysis",
    "DocType",
    "EuphonyImprovement",
    "HighlightColor",
    "LanguageStyle",
    "MixingCorrection",
    "PunctuationIssue",
    "SpellingSuggestion",
    "Stats",
    "StyleMixing",
    "StyleSuggestion",
    "Suggestion",
    "SuggestionCategory",
    "ToneSuggestion",
    "validate_items",
]
