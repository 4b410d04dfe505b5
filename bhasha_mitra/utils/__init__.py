"""Utility modules for Bhasha Mitra.

Only text helpers live here; everything that touches suggestion state is in
``bhasha_mitra.review``.
"""

from __future__ import annotations

from . import normalize
from .normalize import normalize_text

__all__ = [
    "normalize",
    "normalize_text",
]
