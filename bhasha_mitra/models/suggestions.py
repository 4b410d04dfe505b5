"""Pydantic models for the suggestions returned by the provider.

Provider output is untrusted: fields may be missing, ``null``, of the wrong
type, or carry extra keys. The models sanitise everything at the ingestion
boundary (trimmed strings, ``None`` -> empty, bare string -> one-item tuple,
``position`` -> int defaulting to 0) and reject only records whose matching
field is empty, since those can never be located in the document.

Field names are snake_case; the camelCase names used in the provider's JSON
are accepted as aliases and produced by ``model_dump(by_alias=True)``.
"""

from __future__ import annotations

from typing import Any, ClassVar, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..utils.normalize import normalize_text


def _clean_str(value: object) -> str:
    return str(value or "").strip()


def _clean_str_tuple(value: object) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(str(x).strip() for x in value if x is not None and str(x).strip())
    # allow a single entry as a bare string
    text = str(value).strip()
    return (text,) if text else ()


class ProviderModel(BaseModel):
    """Base configuration shared by every provider-facing model."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class Suggestion(ProviderModel):
    """A suggestion that refers to a piece of document text.

    Subclasses name their matching field via ``MATCHING_FIELD``. ``position``
    is a hint only and never takes part in equality of keys.
    """

    MATCHING_FIELD: ClassVar[str] = ""

    position: int = 0

    @field_validator("position", mode="before")
    def _coerce_position(cls, value: object) -> int:
        if isinstance(value, bool):
            return 0
        try:
            return max(0, int(value))  # type: ignore[arg-type]
        except (TypeError, ValueError, OverflowError):
            # json.loads("1e400") yields inf, which int() cannot convert
            return 0

    @model_validator(mode="after")
    def _require_matching_text(self) -> "Suggestion":
        if not self.matching_text:
            raise ValueError(f"{self.MATCHING_FIELD} must not be empty")
        return self

    @property
    def matching_text(self) -> str:
        return getattr(self, self.MATCHING_FIELD)

    @property
    def canonical_key(self) -> str:
        return normalize_text(self.matching_text)


class SpellingSuggestion(Suggestion):
    MATCHING_FIELD: ClassVar[str] = "wrong"

    wrong: str
    suggestions: Tuple[str, ...] = ()

    @field_validator("wrong", mode="before")
    def _strip_strings(cls, value: object) -> str:
        return _clean_str(value)

    @field_validator("suggestions", mode="before")
    def _normalise_suggestions(cls, value: object) -> Tuple[str, ...]:
        return _clean_str_tuple(value)


class ToneSuggestion(Suggestion):
    MATCHING_FIELD: ClassVar[str] = "current"

    current: str
    suggestion: str = ""
    reason: str = ""

    @field_validator("current", "suggestion", "reason", mode="before")
    def _strip_strings(cls, value: object) -> str:
        return _clean_str(value)


class StyleSuggestion(Suggestion):
    MATCHING_FIELD: ClassVar[str] = "current"

    current: str
    suggestion: str = ""
    type: str = ""

    @field_validator("current", "suggestion", "type", mode="before")
    def _strip_strings(cls, value: object) -> str:
        return _clean_str(value)


class MixingCorrection(StyleSuggestion):
    """One entry of :class:`StyleMixing.corrections`."""


class PunctuationIssue(Suggestion):
    MATCHING_FIELD: ClassVar[str] = "current_sentence"

    issue: str = ""
    current_sentence: str
    corrected_sentence: str = ""
    explanation: str = ""

    @field_validator(
        "issue",
        "current_sentence",
        "corrected_sentence",
        "explanation",
        mode="before",
    )
    def _strip_strings(cls, value: object) -> str:
        return _clean_str(value)


class EuphonyImprovement(Suggestion):
    MATCHING_FIELD: ClassVar[str] = "current"

    current: str
    suggestions: Tuple[str, ...] = ()
    reason: str = ""

    @field_validator("current", "reason", mode="before")
    def _strip_strings(cls, value: object) -> str:
        return _clean_str(value)

    @field_validator("suggestions", mode="before")
    def _normalise_suggestions(cls, value: object) -> Tuple[str, ...]:
        return _clean_str_tuple(value)


class StyleMixing(ProviderModel):
    """Aggregate record describing sadhu/cholito mixing in the document.

    Invalid correction entries are dropped individually; an empty list of
    corrections is stored as ``None``.
    """

    detected: bool = False
    recommended_style: str | None = None
    reason: str | None = None
    corrections: Tuple[MixingCorrection, ...] | None = None

    @field_validator("detected", mode="before")
    def _coerce_detected(cls, value: object) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes")
        return bool(value)

    @field_validator("recommended_style", "reason", mode="before")
    def _strip_optional(cls, value: object) -> str | None:
        if value is None:
            return None
        return str(value).strip() or None

    @field_validator("corrections", mode="before")
    def _validate_corrections(cls, value: object) -> Tuple[MixingCorrection, ...] | None:
        if not isinstance(value, (list, tuple)):
            return None
        kept = []
        for entry in value:
            if isinstance(entry, MixingCorrection):
                kept.append(entry)
                continue
            try:
                kept.append(MixingCorrection.model_validate(entry))
            except ValidationError:
                continue
        return tuple(kept) or None

    def without(self, canonical_key: str) -> "StyleMixing | None":
        """Return a copy with every correction matching ``canonical_key`` removed.

        Returns ``self`` when nothing matches and ``None`` when the removal
        leaves no corrections.
        """
        if not self.corrections:
            return self
        kept = tuple(c for c in self.corrections if c.canonical_key != canonical_key)
        if len(kept) == len(self.corrections):
            return self
        if not kept:
            return None
        return self.model_copy(update={"corrections": kept})


class ContentAnalysis(ProviderModel):
    """Informational summary of the document; never pruned."""

    content_type: str
    description: str | None = None
    missing_elements: Tuple[str, ...] = ()
    suggestions: Tuple[str, ...] = ()

    @field_validator("content_type", mode="before")
    def _strip_content_type(cls, value: object) -> str:
        result = _clean_str(value)
        if not result:
            raise ValueError("content_type must not be empty")
        return result

    @field_validator("description", mode="before")
    def _strip_description(cls, value: object) -> str | None:
        if value is None:
            return None
        return str(value).strip() or None

    @field_validator("missing_elements", "suggestions", mode="before")
    def _normalise_lists(cls, value: object) -> Tuple[str, ...]:
        return _clean_str_tuple(value)


def validate_items(model: type[Suggestion], raw: Any) -> tuple[list[Suggestion], int]:
    """Validate a raw provider list into ``model`` instances.

    Returns the valid items in input order and the number of rejected ones.
    A non-list ``raw`` value yields no items.
    """
    if not isinstance(raw, (list, tuple)):
        return [], 0 if raw is None else 1
    items: list[Suggestion] = []
    rejected = 0
    for entry in raw:
        if isinstance(entry, model):
            items.append(entry)
            continue
        try:
            items.append(model.model_validate(entry))
        except ValidationError:
            rejected += 1
    return items, rejected
