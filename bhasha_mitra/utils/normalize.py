"""Canonical text form used to decide whether two suggestions refer to the
same document text.

Suggestions from different categories (a spelling error and a tone rewrite,
say) often quote the same words with different spacing or casing. Every
comparison in the store goes through :func:`normalize_text` so that these
incidental differences never keep a stale suggestion alive.
"""

from __future__ import annotations

import re
import unicodedata

# Zero-width characters that Word and browsers insert around Bangla conjuncts
_INVISIBLE = re.compile("[\u200b\u200c\u200d\u2060\ufeff]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str | None) -> str:
    """Return the canonical key for ``text``.

    Applies NFC composition, drops zero-width characters, folds case,
    collapses runs of whitespace to a single space and trims both ends.
    ``None`` maps to the empty string. The function is idempotent.

    Example:
        >>> normalize_text("  Hello\\n  WORLD ")
        'hello world'
    """
    if not text:
        return ""
    value = unicodedata.normalize("NFC", str(text))
    value = _INVISIBLE.sub("", value)
    value = unicodedata.normalize("NFC", value.casefold())
    return _WHITESPACE.sub(" ", value).strip()
