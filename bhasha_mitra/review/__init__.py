"""Suggestion state, check orchestration and hover highlighting."""

from __future__ import annotations

from .debouncer import HOVER_DELAY, HighlightDebouncer
from .orchestrator import (
    CheckInProgressError,
    CheckOrchestrator,
    CheckRefusedError,
    CheckResult,
    EmptyDocumentError,
    MissingCredentialError,
    StaggerSchedule,
)
from .store import StoreSnapshot, SuggestionStore, highlight_item

__all__ = [
    "CheckInProgressError",
    "CheckOrchestrator",
    "CheckRefusedError",
    "CheckResult",
    "EmptyDocumentError",
    "HOVER_DELAY",
    "HighlightDebouncer",
    "MissingCredentialError",
    "StaggerSchedule",
    "StoreSnapshot",
    "SuggestionStore",
    "highlight_item",
]
