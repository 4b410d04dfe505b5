"""Host document access for the proofreading core."""

from __future__ import annotations

from .adapter import DocumentAdapter, HighlightItem, TextRange, has_internal_whitespace
from .memory import InMemoryDocument

__all__ = [
    "DocumentAdapter",
    "HighlightItem",
    "InMemoryDocument",
    "TextRange",
    "has_internal_whitespace",
]
