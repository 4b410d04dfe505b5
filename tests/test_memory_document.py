"""Tests for the in-memory document adapter's search/highlight/replace semantics."""

from __future__ import annotations

import asyncio

import pytest

from bhasha_mitra.document import InMemoryDocument, TextRange, has_internal_whitespace


def _search(doc: InMemoryDocument, needle: str) -> list[TextRange]:
    return asyncio.run(doc.search(needle))


def _texts(doc: InMemoryDocument, ranges: list[TextRange]) -> list[str]:
    return [doc.text[r.start : r.end] for r in ranges]


def test_has_internal_whitespace() -> None:
    assert has_internal_whitespace("ভাল আছি")
    assert not has_internal_whitespace("  ভাল  ")


def test_single_word_search_is_whole_word_and_case_insensitive() -> None:
    doc = InMemoryDocument("Cat scatter cat, CAT_x concat cat")
    ranges = _search(doc, "cat")
    assert _texts(doc, ranges) == ["Cat", "cat", "cat"]
    assert ranges == sorted(ranges)


def test_bangla_vowel_signs_count_as_word_characters() -> None:
    doc = InMemoryDocument("আমি কর করি কর।")
    ranges = _search(doc, "কর")
    # "করি" must not match: ি is a combining vowel sign
    assert [r.start for r in ranges] == [4, 11]


def test_phrase_search_matches_substrings() -> None:
    doc = InMemoryDocument("আমি ভাল আছি। তুমিও ভাল আছিস")
    ranges = _search(doc, "ভাল আছি")
    assert len(ranges) == 2
    assert _texts(doc, ranges) == ["ভাল আছি", "ভাল আছি"]


def test_blank_needle_matches_nothing() -> None:
    assert _search(InMemoryDocument("abc"), "   ") == []


def test_regex_metacharacters_are_literal() -> None:
    doc = InMemoryDocument("cost (approx.) is high")
    assert _texts(doc, _search(doc, "(approx.) is")) == ["(approx.) is"]


def test_whole_word_hit_inside_rejected_candidate_is_found() -> None:
    doc = InMemoryDocument("aa a")
    assert [r.start for r in _search(doc, "a")] == [3]


def test_fetch_text_prefers_non_blank_selection() -> None:
    doc = InMemoryDocument("line one\r\nline two\rline three")
    assert asyncio.run(doc.fetch_text()) == "line one\nline two\nline three"

    doc.select(0, 8)
    assert asyncio.run(doc.fetch_text()) == "line one"

    blank = InMemoryDocument("a   b")
    blank.select(1, 4)
    assert asyncio.run(blank.fetch_text()) == "a   b"


def test_select_rejects_out_of_range() -> None:
    with pytest.raises(ValueError):
        InMemoryDocument("abc").select(1, 10)


def test_replace_first_replaces_only_first_match_and_clears_its_highlight() -> None:
    doc = InMemoryDocument("ভাল ভাল ভাল")

    async def run() -> bool:
        await doc.batch_highlight([("ভাল", "#fee2e2")])
        return await doc.replace_first("ভাল", "ভালো")

    assert asyncio.run(run()) is True
    assert doc.text == "ভালো ভাল ভাল"
    assert doc.highlight_at(0) is None
    spans = doc.highlighted_spans()
    assert [doc.text[r.start : r.end] for r, _ in spans] == ["ভাল", "ভাল"]
    assert all(color == "#fee2e2" for _, color in spans)


def test_replace_first_reports_missing_match() -> None:
    doc = InMemoryDocument("abc")
    assert asyncio.run(doc.replace_first("xyz", "q")) is False
    assert doc.text == "abc"


def test_replace_shifts_selection() -> None:
    doc = InMemoryDocument("ab cd ef")
    doc.select(6, 8)
    asyncio.run(doc.replace_first("ab", "abcd"))
    assert doc.selection == TextRange(8, 10)
    assert asyncio.run(doc.fetch_text()) == "ef"


def test_batch_highlight_overlap_last_write_wins() -> None:
    doc = InMemoryDocument("আমি ভাল আছি")

    asyncio.run(doc.batch_highlight([("আমি ভাল", "c1"), ("ভাল আছি", "c2")]))

    overlap = doc.text.index("ভাল")
    assert doc.highlight_at(0) == "c1"
    assert doc.highlight_at(overlap) == "c2"
    assert doc.highlight_at(len(doc.text) - 1) == "c2"


def test_batch_highlight_identical_text_later_colour_wins() -> None:
    doc = InMemoryDocument("word")
    asyncio.run(doc.batch_highlight([("word", "red"), ("WORD", "blue")]))
    assert doc.highlighted_spans() == [(TextRange(0, 4), "blue")]


def test_highlight_and_clear_all() -> None:
    doc = InMemoryDocument("hello world")

    async def run() -> None:
        await doc.highlight(TextRange(0, 5), "yellow")
        assert doc.highlighted_spans() == [(TextRange(0, 5), "yellow")]
        await doc.clear_all_highlights()

    asyncio.run(run())
    assert doc.highlighted_spans() == []


def test_highlight_outside_document_raises() -> None:
    with pytest.raises(ValueError):
        asyncio.run(InMemoryDocument("abc").highlight(TextRange(1, 9), "red"))


def test_round_trip_through_file(tmp_path) -> None:
    path = tmp_path / "doc.txt"
    path.write_text("আমি ভাল আছি", encoding="utf-8")
    doc = InMemoryDocument.from_path(path)
    asyncio.run(doc.replace_first("ভাল", "ভালো"))
    doc.save(path)
    assert path.read_text(encoding="utf-8") == "আমি ভালো আছি"
