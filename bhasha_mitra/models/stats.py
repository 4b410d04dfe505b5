"""Word count and accuracy summary for a checked document."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Stats:
    """Derived figures recomputed wholesale on every check.

    Attributes:
        total_words: Whitespace-delimited tokens in the checked text
        error_count: Number of spelling suggestions
        accuracy: Percentage of tokens without a spelling error (0-100)
    """

    total_words: int = 0
    error_count: int = 0
    accuracy: int = 100

    @classmethod
    def empty(cls) -> "Stats":
        return cls()

    @classmethod
    def compute(cls, text: str, error_count: int) -> "Stats":
        total_words = len(text.split())
        if total_words > 0:
            # round half up; the builtin round() rounds half to even
            accuracy = math.floor(100 * (total_words - error_count) / total_words + 0.5)
        else:
            accuracy = 100
        return cls(total_words=total_words, error_count=error_count, accuracy=accuracy)

    def to_dict(self) -> dict[str, int]:
        return {
            "totalWords": self.total_words,
            "errorCount": self.error_count,
            "accuracy": self.accuracy,
        }
