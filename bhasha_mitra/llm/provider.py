from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Protocol

from ..models.enums import Branch, BranchStatus, DocType, LanguageStyle

BranchReporter = Callable[[Branch, BranchStatus, Exception | None], None]

DEFAULT_MODEL = "gemini-2.5-flash"

# Sampling temperature per branch; content analysis is allowed more latitude
BRANCH_TEMPERATURES: dict[Branch, float] = {
    Branch.MAIN: 0.1,
    Branch.TONE: 0.2,
    Branch.STYLE: 0.2,
    Branch.CONTENT: 0.4,
}


class LLMProviderError(Exception):
    """Generic failure raised by a suggestion provider."""


class LLMQuotaError(LLMProviderError):
    """Raised when a provider reports quota or rate-limit exhaustion."""


class LLMProviderConfigurationError(LLMProviderError):
    """Raised when a provider cannot be configured or authenticated."""


class LLMParseError(LLMProviderError):
    """Raised when a provider response cannot be parsed as JSON.

    This exception includes the raw response text and input prompt
    to aid debugging when the model returns unexpected content.
    """

    def __init__(
        self,
        message: str,
        *,
        response_text: str | None = None,
        prompt: str | None = None,
    ) -> None:
        super().__init__(message)
        self.response_text = response_text
        self.prompt = prompt

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.response_text is not None:
            # Truncate very long responses for readability
            text = self.response_text
            if len(text) > 2000:
                text = text[:2000] + "... [truncated]"
            parts.append(f"\n--- LLM Response ---\n{text}")
        if self.prompt:
            prompt_text = self.prompt
            if len(prompt_text) > 2000:
                prompt_text = prompt_text[:2000] + "... [truncated]"
            parts.append(f"\n--- Input Prompt ---\n{prompt_text}")
        return "".join(parts)


@dataclass(frozen=True)
class ProviderRequest:
    """Everything a provider needs to answer one branch of a check."""

    document_text: str
    branch: Branch
    doc_type: DocType
    credential: str
    model_id: str = DEFAULT_MODEL
    tone: str | None = None
    style: LanguageStyle = LanguageStyle.NONE
    temperature: float | None = None

    @property
    def effective_temperature(self) -> float:
        if self.temperature is not None:
            return self.temperature
        return BRANCH_TEMPERATURES[self.branch]

    def __repr__(self) -> str:
        # Never leak the credential into logs
        return (
            f"ProviderRequest(branch={self.branch.value!r}, doc_type={self.doc_type.value!r}, "
            f"model_id={self.model_id!r}, tone={self.tone!r}, style={self.style.value!r}, "
            f"chars={len(self.document_text)})"
        )


class SuggestionProvider(Protocol):
    """Shared contract for suggestion providers.

    ``suggest`` returns the decoded JSON object of the response, or ``None``
    when the provider produced nothing usable. Failures are raised as
    :class:`LLMProviderError` subclasses.
    """

    name: str

    async def suggest(self, request: ProviderRequest) -> Mapping[str, Any] | None:
        ...
