"""Contract between the proofreading core and the document being edited.

The core never owns the document text and never keeps offsets: every
operation locates text by searching for it. Implementations must treat their
operations as a critical section, so that one search/replace is never
interleaved with another call depending on the same ranges.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol, Sequence, Tuple

# (text, colour) pair passed to batch_highlight
HighlightItem = Tuple[str, str]

_INTERNAL_WHITESPACE = re.compile(r"\s")


@dataclass(frozen=True, order=True)
class TextRange:
    """Half-open ``[start, end)`` span in an adapter's own coordinates."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid range [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start


def has_internal_whitespace(needle: str) -> bool:
    """Return True when the trimmed needle contains whitespace.

    Such needles are matched as substrings; all others as whole words.
    """
    return bool(_INTERNAL_WHITESPACE.search(needle.strip()))


class DocumentAdapter(Protocol):
    """Operations the core needs from a live document."""

    async def fetch_text(self) -> str:
        """Return the selection text if it is non-blank, otherwise the whole
        document, with ``\\r\\n`` and ``\\r`` normalised to ``\\n``."""
        ...

    async def search(self, needle: str) -> list[TextRange]:
        """Case-insensitive search returning matches in document order.

        Needles without internal whitespace only match whole words.
        """
        ...

    async def highlight(self, text_range: TextRange, color: str | None) -> None:
        """Set (or clear, with ``None``) the highlight of one range."""
        ...

    async def replace_first(self, needle: str, new_text: str) -> bool:
        """Replace the first match, clear its highlight, report whether one existed."""
        ...

    async def clear_all_highlights(self) -> None:
        ...

    async def batch_highlight(self, items: Sequence[HighlightItem]) -> None:
        """Highlight every match of every item, in input order.

        Where ranges of two items overlap the later item's colour wins.
        """
        ...
