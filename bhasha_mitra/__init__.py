"""Bhasha Mitra proofreading core package."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "cli",
    "config",
    "document",
    "llm",
    "models",
    "prompt",
    "review",
    "utils",
]
