"""Tests for JSON recovery from raw model text."""

from __future__ import annotations

import pytest

from investai.errors import EmptyResponseError, MalformedResponseError
from investai.extraction import extract_json, strip_code_fences
from tests.conftest import fenced


class TestExtractJson:

    def test_fenced_json_inside_prose(self) -> None:
        text = 'Here you go:\n```json\n{"exists":true,"symbol":"X"}\n```\nEnjoy.'
        assert extract_json(text) == {"exists": True, "symbol": "X"}

    def test_plain_json(self) -> None:
        assert extract_json('{"a": 1, "b": [1, 2]}') == {"a": 1, "b": [1, 2]}

    def test_bare_fence_without_language_tag(self) -> None:
        assert extract_json('```\n{"a": 1}\n```') == {"a": 1}

    def test_uppercase_language_tag(self) -> None:
        assert extract_json('```JSON\n{"a": 1}\n```') == {"a": 1}

    def test_prose_without_fence(self) -> None:
        text = 'Sure! The analysis follows. {"symbol": "AAPL"} Let me know if you need more.'
        assert extract_json(text) == {"symbol": "AAPL"}

    def test_nested_objects_keep_outer_span(self, analysis_payload) -> None:
        assert extract_json(fenced(analysis_payload)) == analysis_payload

    def test_braces_inside_strings_do_not_confuse_slicing(self) -> None:
        text = 'Result: {"reason": "margem {alta}", "n": 2} fim'
        assert extract_json(text) == {"reason": "margem {alta}", "n": 2}

    def test_empty_string_raises_empty(self) -> None:
        with pytest.raises(EmptyResponseError):
            extract_json("")

    def test_none_raises_empty(self) -> None:
        with pytest.raises(EmptyResponseError):
            extract_json(None)

    def test_whitespace_only_raises_empty(self) -> None:
        with pytest.raises(EmptyResponseError):
            extract_json("   \n\t ")

    def test_no_braces_raises_malformed_with_raw_text(self) -> None:
        with pytest.raises(MalformedResponseError) as exc_info:
            extract_json("no braces here")
        assert exc_info.value.raw_text == "no braces here"
        assert "no braces here" not in str(exc_info.value)

    def test_truncated_json_raises_malformed(self) -> None:
        with pytest.raises(MalformedResponseError) as exc_info:
            extract_json('{"symbol": "X", "pros": ["a", }')
        assert exc_info.value.raw_text.startswith('{"symbol"')

    def test_closing_brace_before_opening_uses_whole_text(self) -> None:
        with pytest.raises(MalformedResponseError) as exc_info:
            extract_json("} nothing {")
        assert exc_info.value.raw_text == "} nothing {"

    def test_non_object_json_is_malformed(self) -> None:
        with pytest.raises(MalformedResponseError):
            extract_json("[1, 2, 3]")

    def test_malformed_is_logged_for_operators(self, caplog) -> None:
        with caplog.at_level("ERROR", logger="investai.extraction"):
            with pytest.raises(MalformedResponseError):
                extract_json("{not json}")
        assert "{not json}" in caplog.text


class TestStripCodeFences:

    def test_removes_every_fence(self) -> None:
        text = "```json\n{}\n```\nand\n```python\nx\n```"
        assert "```" not in strip_code_fences(text)

    def test_leaves_plain_text_untouched(self) -> None:
        assert strip_code_fences('{"a": 1}') == '{"a": 1}'
