from __future__ import annotations

import pytest

from bhasha_mitra.llm.json_utils import as_object, parse_json_response


def test_parse_json_object_in_text():
    text = "Here is the result: {\"spellingErrors\": [{\"wrong\": \"ভাল\"}]}. Thanks"
    result = parse_json_response(text)
    assert isinstance(result, dict)
    assert result["spellingErrors"][0]["wrong"] == "ভাল"


def test_parse_json_inside_code_fence_with_trailing_comma():
    text = "```json\n{\"toneConversions\": [],}\n```"
    assert parse_json_response(text) == {"toneConversions": []}


def test_parse_json_array_before_object():
    text = "[{\"contentType\": \"চিঠি\"}, {\"contentType\": \"গল্প\"}]"
    result = parse_json_response(text)
    assert isinstance(result, list)
    assert len(result) == 2


def test_literal_null_decodes_to_none():
    assert parse_json_response("null") is None
    assert parse_json_response("```json\nnull\n```") is None


def test_missing_delimiters_raise_value_error():
    with pytest.raises(ValueError):
        parse_json_response("no json at all")


def test_non_string_input_raises_value_error():
    with pytest.raises(ValueError):
        parse_json_response(None)  # type: ignore[arg-type]


def test_as_object():
    assert as_object({"a": 1}) == {"a": 1}
    assert as_object([1, {"b": 2}]) == {"b": 2}
    assert as_object([1, 2]) is None
    assert as_object("text") is None
