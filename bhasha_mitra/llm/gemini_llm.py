from __future__ import annotations

import json
import logging
from typing import Any, Callable, Mapping

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from ..prompt.render_prompt import render_branch_prompt
from .json_utils import as_object, parse_json_response
from .provider import (
    LLMParseError,
    LLMProviderConfigurationError,
    LLMProviderError,
    LLMQuotaError,
    ProviderRequest,
)

LOGGER = logging.getLogger(__name__)

ClientFactory = Callable[[str], genai.Client]


def _default_client_factory(credential: str) -> genai.Client:
    return genai.Client(api_key=credential)


class GeminiSuggestionProvider:
    """Suggestion provider backed by the Gemini API.

    One ``genai.Client`` is created per credential and reused across checks.
    Requests go through the SDK's asyncio surface (``client.aio``) so the
    branches of a check can wait on the network concurrently.
    """

    name = "gemini"

    def __init__(
        self,
        *,
        client_factory: ClientFactory | None = None,
        prompt_renderer: Callable[[ProviderRequest], str] = render_branch_prompt,
    ) -> None:
        self._client_factory = client_factory or _default_client_factory
        self._clients: dict[str, genai.Client] = {}
        self._render_prompt = prompt_renderer

    def _client_for(self, credential: str) -> genai.Client:
        if not credential:
            raise LLMProviderConfigurationError("Gemini provider: missing API key")
        client = self._clients.get(credential)
        if client is None:
            try:
                client = self._client_factory(credential)
            except Exception as exc:
                raise LLMProviderConfigurationError(
                    f"Gemini provider: could not create client: {exc}"
                ) from exc
            self._clients[credential] = client
        return client

    async def suggest(self, request: ProviderRequest) -> Mapping[str, Any] | None:
        """Send one branch request and return the decoded JSON object.

        Raises:
            LLMProviderConfigurationError: If no client can be built for the credential
            LLMQuotaError: If Gemini reports rate limiting or quota exhaustion (HTTP 429)
            LLMParseError: If the response text holds no decodable JSON
            LLMProviderError: For every other SDK or transport failure
        """
        client = self._client_for(request.credential)
        prompt = self._render_prompt(request)
        config = types.GenerateContentConfig(
            temperature=request.effective_temperature,
            response_mime_type="application/json",
        )

        try:
            response = await client.aio.models.generate_content(
                model=request.model_id,
                contents=prompt,
                config=config,
            )
        except genai_errors.APIError as exc:
            if exc.code == 429:
                raise LLMQuotaError("Gemini provider: rate limited or quota exhausted") from exc
            raise LLMProviderError(f"Gemini provider: API error {exc.code}: {exc.message}") from exc
        except Exception as exc:
            raise LLMProviderError(f"Gemini provider: request failed: {exc}") from exc

        return self._parse_response_json(response, prompt=prompt)

    def _parse_response_json(self, response: Any, prompt: str | None = None) -> Mapping[str, Any] | None:
        """Extract and repair JSON content from a Gemini response.

        An empty response (no candidates, blocked prompt) yields ``None``.

        Raises:
            LLMParseError: If JSON parsing fails, with response text and prompt attached
        """
        text = getattr(response, "text", None)
        if text is None or (isinstance(text, str) and not text.strip()):
            LOGGER.debug("Gemini returned an empty response")
            return None
        if not isinstance(text, str):
            raise LLMParseError(
                "Response object does not expose a text attribute for JSON parsing.",
                response_text=str(response),
                prompt=prompt,
            )

        try:
            return as_object(parse_json_response(text))
        except (ValueError, json.JSONDecodeError) as exc:
            raise LLMParseError(str(exc), response_text=text, prompt=prompt) from exc
