"""JSON extraction and repair for model responses.

Models asked for JSON still wrap it in code fences, prepend commentary or
leave trailing commas. :func:`parse_json_response` locates the outermost
object or array, repairs it with ``json_repair`` and decodes it.
"""

from __future__ import annotations

import json
from typing import Any

from json_repair import repair_json

_CLOSERS = {"{": "}", "[": "]"}


def parse_json_response(text: str) -> Any:
    """Extract and repair JSON content from response text.

    A response that is exactly ``null`` (ignoring whitespace and fences)
    decodes to ``None``.

    Raises:
        ValueError: If ``text`` is not a string or holds no JSON delimiters
        json.JSONDecodeError: If the repaired fragment still cannot be parsed

    Example:
        >>> parse_json_response('```json\\n{"spellingErrors": [],}\\n```')
        {'spellingErrors': []}
    """
    if not isinstance(text, str):
        raise ValueError(f"Expected string input, got {type(text)}")

    stripped = text.strip().strip("`").strip()
    if stripped.lower().startswith("json"):
        stripped = stripped[4:].strip()
    if stripped == "null":
        return None

    starts = [(text.find(opener), opener) for opener in _CLOSERS]
    starts = [(index, opener) for index, opener in starts if index != -1]
    if not starts:
        raise ValueError("Response text does not contain JSON object or array delimiters.")

    # Earliest delimiter wins so a top-level array is not mistaken for its first object
    start, opener = min(starts)
    end = text.rfind(_CLOSERS[opener])
    if end <= start:
        raise ValueError("Response text does not contain matching JSON delimiters.")

    repaired = repair_json(text[start : end + 1])
    return json.loads(repaired)


def as_object(value: Any) -> dict[str, Any] | None:
    """Return ``value`` when it is a JSON object, otherwise ``None``.

    Providers sometimes answer with a bare list; the first object in it is
    taken as the response.
    """
    if isinstance(value, dict):
        return value
    if isinstance(value, list):
        return next((item for item in value if isinstance(item, dict)), None)
    return None
