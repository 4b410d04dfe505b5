"""Suggestion state for one document.

The store owns the seven suggestion collections, the stats and the content
analysis. Collections are only ever replaced wholesale by :meth:`ingest` or
pruned by :meth:`apply` / :meth:`dismiss`; there is no other mutation path.

Pruning is cross-category: once a piece of text has been replaced or
dismissed, every suggestion whose canonical key equals that text's key is
removed from every collection, including the corrections nested inside the
style-mixing record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Iterable

from ..document.adapter import DocumentAdapter, HighlightItem
from ..models import (
    ContentAnalysis,
    EuphonyImprovement,
    HighlightColor,
    PunctuationIssue,
    SpellingSuggestion,
    Stats,
    StyleMixing,
    StyleSuggestion,
    Suggestion,
    SuggestionCategory,
    ToneSuggestion,
    validate_items,
)
from ..utils.normalize import normalize_text

LOGGER = logging.getLogger(__name__)

_LIST_MODELS: dict[SuggestionCategory, type[Suggestion]] = {
    SuggestionCategory.SPELLING: SpellingSuggestion,
    SuggestionCategory.TONE: ToneSuggestion,
    SuggestionCategory.STYLE: StyleSuggestion,
    SuggestionCategory.PUNCTUATION: PunctuationIssue,
    SuggestionCategory.EUPHONY: EuphonyImprovement,
}


@dataclass(frozen=True)
class StoreSnapshot:
    """Immutable view of the whole store at one moment."""

    spelling: tuple[SpellingSuggestion, ...] = ()
    tone: tuple[ToneSuggestion, ...] = ()
    style: tuple[StyleSuggestion, ...] = ()
    mixing: StyleMixing | None = None
    punctuation: tuple[PunctuationIssue, ...] = ()
    euphony: tuple[EuphonyImprovement, ...] = ()
    content: ContentAnalysis | None = None
    stats: Stats = field(default_factory=Stats.empty)

    def live_keys(self) -> dict[SuggestionCategory, set[str]]:
        """Canonical keys still present, per category."""
        keys = {
            SuggestionCategory.SPELLING: {s.canonical_key for s in self.spelling},
            SuggestionCategory.TONE: {s.canonical_key for s in self.tone},
            SuggestionCategory.STYLE: {s.canonical_key for s in self.style},
            SuggestionCategory.PUNCTUATION: {s.canonical_key for s in self.punctuation},
            SuggestionCategory.EUPHONY: {s.canonical_key for s in self.euphony},
            SuggestionCategory.MIXING: set(),
        }
        if self.mixing is not None and self.mixing.corrections:
            keys[SuggestionCategory.MIXING] = {c.canonical_key for c in self.mixing.corrections}
        return keys

    def to_dict(self) -> dict[str, Any]:
        return {
            "spelling": [s.model_dump(mode="json", by_alias=True) for s in self.spelling],
            "tone": [s.model_dump(mode="json", by_alias=True) for s in self.tone],
            "style": [s.model_dump(mode="json", by_alias=True) for s in self.style],
            "mixing": self.mixing.model_dump(mode="json", by_alias=True) if self.mixing else None,
            "punctuation": [s.model_dump(mode="json", by_alias=True) for s in self.punctuation],
            "euphony": [s.model_dump(mode="json", by_alias=True) for s in self.euphony],
            "content": self.content.model_dump(mode="json", by_alias=True) if self.content else None,
            "stats": self.stats.to_dict(),
        }


def highlight_item(category: SuggestionCategory, suggestion: Suggestion) -> HighlightItem:
    """Return the ``(text, colour)`` pair used to highlight ``suggestion``."""
    if category is SuggestionCategory.CONTENT:
        raise ValueError("Content analysis has no document text to highlight")
    return suggestion.matching_text, HighlightColor.for_category(category).value


class SuggestionStore:
    """Holds the live suggestions and keeps them consistent with the document."""

    def __init__(self, adapter: DocumentAdapter) -> None:
        self._adapter = adapter
        self._state = StoreSnapshot()

    @property
    def snapshot(self) -> StoreSnapshot:
        return self._state

    @property
    def stats(self) -> Stats:
        return self._state.stats

    def reset(self) -> None:
        """Discard every collection, the content analysis and the stats."""
        self._state = StoreSnapshot()

    def ingest(self, category: SuggestionCategory, items: Any) -> int:
        """Replace the collection for ``category`` with validated ``items``.

        ``items`` is untrusted provider data: a list of dicts (or models) for
        list categories, a single dict (or model, or ``None``) for MIXING and
        CONTENT. Invalid entries are dropped. Returns the number kept.
        """
        category = SuggestionCategory(category)
        if category is SuggestionCategory.MIXING:
            mixing = self._validate_record(StyleMixing, items)
            self._replace(mixing=mixing)
            return len(mixing.corrections or ()) if mixing else 0
        if category is SuggestionCategory.CONTENT:
            content = self._validate_record(ContentAnalysis, items)
            self._replace(content=content)
            return 1 if content else 0

        valid, rejected = validate_items(_LIST_MODELS[category], items)
        if rejected:
            LOGGER.warning("Dropped %d invalid %s suggestion(s)", rejected, category.value)
        self._replace(**{category.value: tuple(valid)})
        return len(valid)

    def recompute_stats(self, document_text: str) -> Stats:
        stats = Stats.compute(document_text, len(self._state.spelling))
        self._replace(stats=stats)
        return stats

    async def apply(self, target_text: str, replacement: str) -> bool:
        """Replace the first document match of ``target_text`` and prune its key.

        Returns False, leaving the store untouched, when the document has no
        match.
        """
        replaced = await self._adapter.replace_first(target_text, replacement)
        if not replaced:
            LOGGER.info("No document match for %r; nothing applied", target_text)
            return False
        pruned = self._prune(normalize_text(target_text))
        LOGGER.info("Applied %r -> %r; pruned %d suggestion(s)", target_text, replacement, pruned)
        return True

    def dismiss(self, target_text: str) -> int:
        """Prune every suggestion matching ``target_text`` without touching the document."""
        pruned = self._prune(normalize_text(target_text))
        LOGGER.info("Dismissed %r; pruned %d suggestion(s)", target_text, pruned)
        return pruned

    def hover_items(self) -> list[tuple[SuggestionCategory, Suggestion, HighlightItem]]:
        """Every suggestion that can be hovered, with its highlight pair."""
        state = self._state
        entries: list[tuple[SuggestionCategory, Iterable[Suggestion]]] = [
            (SuggestionCategory.SPELLING, state.spelling),
            (SuggestionCategory.TONE, state.tone),
            (SuggestionCategory.STYLE, state.style),
            (SuggestionCategory.MIXING, (state.mixing.corrections or ()) if state.mixing else ()),
            (SuggestionCategory.PUNCTUATION, state.punctuation),
            (SuggestionCategory.EUPHONY, state.euphony),
        ]
        return [
            (category, suggestion, highlight_item(category, suggestion))
            for category, suggestions in entries
            for suggestion in suggestions
        ]

    def _prune(self, key: str) -> int:
        if not key:
            return 0
        state = self._state

        def keep(items: tuple[Any, ...]) -> tuple[Any, ...]:
            return tuple(item for item in items if item.canonical_key != key)

        updates: dict[str, Any] = {
            "spelling": keep(state.spelling),
            "tone": keep(state.tone),
            "style": keep(state.style),
            "punctuation": keep(state.punctuation),
            "euphony": keep(state.euphony),
        }
        pruned = sum(len(getattr(state, name)) - len(kept) for name, kept in updates.items())

        mixing = state.mixing.without(key) if state.mixing is not None else None
        if mixing is not state.mixing:
            before = len(state.mixing.corrections or ()) if state.mixing else 0
            pruned += before - (len(mixing.corrections or ()) if mixing else 0)
            updates["mixing"] = mixing

        if pruned:
            self._replace(**updates)
        return pruned

    def _replace(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)

    @staticmethod
    def _validate_record(model: type, raw: Any) -> Any:
        if raw is None or isinstance(raw, model):
            return raw
        if not isinstance(raw, dict):
            LOGGER.warning("Dropped %s record of type %s", model.__name__, type(raw).__name__)
            return None
        try:
            return model.model_validate(raw)
        except ValueError as exc:
            LOGGER.warning("Dropped invalid %s record: %s", model.__name__, exc)
            return None
