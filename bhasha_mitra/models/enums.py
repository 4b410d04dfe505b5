"""Enumerations shared by the suggestion models, the store and the provider.

Values are plain strings so they can be used directly as JSON fields, CLI
choices and environment variable values.
"""

from __future__ import annotations

from enum import Enum


class SuggestionCategory(str, Enum):
    """The seven collections held by the suggestion store."""

    SPELLING = "spelling"
    TONE = "tone"
    STYLE = "style"
    MIXING = "mixing"
    PUNCTUATION = "punctuation"
    EUPHONY = "euphony"
    CONTENT = "content"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]


class Branch(str, Enum):
    """Provider request groups dispatched concurrently during a check.

    MAIN covers spelling, punctuation, euphony and style mixing in a single
    request.
    """

    MAIN = "main"
    TONE = "tone"
    STYLE = "style"
    CONTENT = "content"


class BranchStatus(str, Enum):
    """Outcome reported for a branch once it has settled."""

    SUCCESS = "success"
    EMPTY = "empty"
    FAILURE = "failure"


class HighlightColor(str, Enum):
    """Highlight colours applied to the host document, one per category."""

    SPELLING = "#fee2e2"
    TONE = "#fef3c7"
    STYLE = "#ccfbf1"
    MIXING = "#e9d5ff"
    PUNCTUATION = "#ffedd5"
    EUPHONY = "#fce7f3"

    @classmethod
    def for_category(cls, category: SuggestionCategory) -> "HighlightColor":
        return cls[category.name]


class LanguageStyle(str, Enum):
    """Bangla written registers a document can be converted to.

    SADHU is the formal literary register, CHOLITO the standard colloquial
    one. NONE disables the style branch.
    """

    NONE = "none"
    SADHU = "sadhu"
    CHOLITO = "cholito"

    @property
    def label(self) -> str:
        return {
            LanguageStyle.NONE: "None",
            LanguageStyle.SADHU: "Sadhu bhasha (সাধু ভাষা)",
            LanguageStyle.CHOLITO: "Cholito bhasha (চলিত ভাষা)",
        }[self]


class DocType(str, Enum):
    """Kinds of document the prompts are tailored to."""

    GENERIC = "generic"
    ACADEMIC = "academic"
    OFFICIAL = "official"
    MARKETING = "marketing"
    SOCIAL = "social"
    NEWS = "news"
    LITERARY = "literary"

    @classmethod
    def parse(cls, value: object) -> "DocType":
        """Return the matching member, falling back to GENERIC."""
        if isinstance(value, DocType):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.GENERIC

    @property
    def role_instruction(self) -> str:
        return _ROLE_INSTRUCTIONS[self]


_ROLE_INSTRUCTIONS: dict[DocType, str] = {
    DocType.GENERIC: "You are an expert Bangla proofreader for general writing.",
    DocType.ACADEMIC: (
        "You are an expert Bangla proofreader for academic papers, theses and "
        "research articles. Preserve technical terminology."
    ),
    DocType.OFFICIAL: (
        "You are an expert Bangla proofreader for official letters, notices "
        "and government correspondence."
    ),
    DocType.MARKETING: (
        "You are an expert Bangla copy editor for advertisements, product "
        "descriptions and marketing material."
    ),
    DocType.SOCIAL: (
        "You are an expert Bangla editor for social media posts. Keep the "
        "informal voice unless it is an error."
    ),
    DocType.NEWS: (
        "You are an expert Bangla sub-editor for news reports. Keep facts "
        "and quotations unchanged."
    ),
    DocType.LITERARY: (
        "You are an expert Bangla literary editor for stories, essays and "
        "poetry. Respect intentional stylistic choices."
    ),
}
