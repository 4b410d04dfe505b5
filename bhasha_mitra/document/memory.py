"""In-memory implementation of :class:`DocumentAdapter` over a Python string.

Used by the command-line interface (a text file loaded into memory) and as the
reference behaviour for host adapters. Highlights are kept per character so
overlapping highlights resolve exactly as a word processor's font highlight
would: the last write wins.
"""

from __future__ import annotations

import asyncio
import logging
import re
import unicodedata
from pathlib import Path
from typing import Sequence

from .adapter import HighlightItem, TextRange, has_internal_whitespace

LOGGER = logging.getLogger(__name__)


def normalise_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _is_word_char(ch: str) -> bool:
    # Letters, combining marks (Bangla vowel signs, hasanta) and digits
    return ch == "_" or unicodedata.category(ch)[0] in ("L", "M", "N")


class InMemoryDocument:
    """A mutable document with a selection and per-character highlights."""

    def __init__(self, text: str = "", *, selection: TextRange | None = None) -> None:
        self._text = text
        self._marks: list[str | None] = [None] * len(text)
        self._selection: TextRange | None = None
        self._lock = asyncio.Lock()
        if selection is not None:
            self.select(selection.start, selection.end)

    @classmethod
    def from_path(cls, path: str | Path) -> "InMemoryDocument":
        return cls(Path(path).read_text(encoding="utf-8"))

    def save(self, path: str | Path) -> None:
        Path(path).write_text(self._text, encoding="utf-8")

    @property
    def text(self) -> str:
        return self._text

    @property
    def selection(self) -> TextRange | None:
        return self._selection

    def select(self, start: int, end: int) -> None:
        """Select ``[start, end)``; an empty range clears the selection."""
        if not 0 <= start <= end <= len(self._text):
            raise ValueError(f"Selection [{start}, {end}) outside document of length {len(self._text)}")
        self._selection = TextRange(start, end) if end > start else None

    def highlight_at(self, offset: int) -> str | None:
        return self._marks[offset]

    def highlighted_spans(self) -> list[tuple[TextRange, str]]:
        """Return maximal runs of identical highlight colour in document order."""
        spans: list[tuple[TextRange, str]] = []
        start = 0
        for index in range(1, len(self._marks) + 1):
            if index < len(self._marks) and self._marks[index] == self._marks[start]:
                continue
            color = self._marks[start] if self._marks else None
            if color is not None:
                spans.append((TextRange(start, index), color))
            start = index
        return spans

    # Adapter operations

    async def fetch_text(self) -> str:
        async with self._lock:
            if self._selection is not None:
                selected = self._text[self._selection.start : self._selection.end]
                if selected.strip():
                    return normalise_line_endings(selected)
            return normalise_line_endings(self._text)

    async def search(self, needle: str) -> list[TextRange]:
        async with self._lock:
            return self._search(needle)

    async def highlight(self, text_range: TextRange, color: str | None) -> None:
        async with self._lock:
            self._paint(text_range, color)

    async def replace_first(self, needle: str, new_text: str) -> bool:
        async with self._lock:
            matches = self._search(needle)
            if not matches:
                return False
            target = matches[0]
            self._text = self._text[: target.start] + new_text + self._text[target.end :]
            self._marks[target.start : target.end] = [None] * len(new_text)
            self._shift_selection(target, len(new_text) - len(target))
            LOGGER.debug("Replaced %r at %s with %r", needle, target, new_text)
            return True

    async def clear_all_highlights(self) -> None:
        async with self._lock:
            self._marks = [None] * len(self._text)

    async def batch_highlight(self, items: Sequence[HighlightItem]) -> None:
        async with self._lock:
            for text, color in items:
                for text_range in self._search(text):
                    self._paint(text_range, color)

    # Internal helpers; callers must hold the lock

    def _search(self, needle: str) -> list[TextRange]:
        needle = needle.strip()
        if not needle:
            return []
        whole_word = not has_internal_whitespace(needle)
        # Lookahead finds overlapping candidates so a rejected partial-word hit
        # cannot hide a valid whole-word hit that starts inside it
        pattern = re.compile(f"(?=({re.escape(needle)}))", re.IGNORECASE)
        ranges: list[TextRange] = []
        last_end = 0
        for match in pattern.finditer(self._text):
            start, end = match.span(1)
            if start < last_end:
                continue
            if whole_word and not self._is_whole_word(start, end):
                continue
            ranges.append(TextRange(start, end))
            last_end = end
        return ranges

    def _is_whole_word(self, start: int, end: int) -> bool:
        before = self._text[start - 1] if start > 0 else ""
        after = self._text[end] if end < len(self._text) else ""
        return not (before and _is_word_char(before)) and not (after and _is_word_char(after))

    def _paint(self, text_range: TextRange, color: str | None) -> None:
        if text_range.end > len(self._text):
            raise ValueError(f"{text_range} outside document of length {len(self._text)}")
        self._marks[text_range.start : text_range.end] = [color] * len(text_range)

    def _shift_selection(self, replaced: TextRange, delta: int) -> None:
        selection = self._selection
        if selection is None or replaced.start >= selection.end:
            return
        if replaced.end <= selection.start:
            self._selection = TextRange(selection.start + delta, selection.end + delta)
        else:
            self._selection = TextRange(
                min(selection.start, replaced.start),
                max(replaced.start, selection.end + delta),
            )
