"""Suggestion providers and the helpers they share.

Import concrete providers from their modules, e.g.
``from bhasha_mitra.llm.gemini_llm import GeminiSuggestionProvider``.
"""
