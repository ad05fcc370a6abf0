# tests/test_consumers.py
"""
Tests for the primitive prefix consumers and the repetition combinator.
"""

import pytest

from fmtcheck.consumers import (
    consume_character,
    consume_character_from_range,
    consume_character_from_set,
    consume_repeatedly,
    consume_string,
)


class TestConsumeCharacter:

    def test_match_strips_one_character(self):
        assert consume_character("%d", "%") == "d"

    def test_mismatch_returns_none(self):
        assert consume_character("d%", "%") is None

    def test_empty_view_is_no_match(self):
        assert consume_character("", "%") is None

    def test_last_character(self):
        assert consume_character("%", "%") == ""


class TestConsumeCharacterFromRange:

    def test_inclusive_bounds(self):
        assert consume_character_from_range("0x", "0", "9") == "x"
        assert consume_character_from_range("9x", "0", "9") == "x"

    def test_outside_range(self):
        assert consume_character_from_range("a9", "0", "9") is None

    def test_empty_view_is_no_match(self):
        assert consume_character_from_range("", "0", "9") is None


class TestConsumeCharacterFromSet:

    def test_inline_characters(self):
        assert consume_character_from_set("-5d", "+", "-", " ") == "5d"

    def test_inline_mismatch(self):
        assert consume_character_from_set("5d", "+", "-", " ") is None

    @pytest.mark.parametrize("collection", [
        frozenset("di"),
        {"d", "i"},
        ["d", "i"],
        ("d", "i"),
    ])
    def test_supplied_collection(self, collection):
        assert consume_character_from_set("d!", collection) == "!"
        assert consume_character_from_set("x!", collection) is None

    def test_empty_collection_never_matches(self):
        assert consume_character_from_set("d", frozenset()) is None

    def test_empty_view_is_no_match(self):
        assert consume_character_from_set("", "+", "-") is None
        assert consume_character_from_set("", frozenset("di")) is None


class TestConsumeString:

    def test_exact_prefix(self):
        assert consume_string("hhd", "hh") == "d"

    def test_partial_prefix_is_no_match(self):
        assert consume_string("hd", "hh") is None

    def test_view_shorter_than_literal(self):
        assert consume_string("h", "hh") is None
        assert consume_string("", "hh") is None


class TestConsumeRepeatedly:

    def test_consumes_whole_run(self):
        assert consume_repeatedly(consume_character_from_range, "123abc", "0", "9") == "abc"

    def test_zero_repetitions_succeed(self):
        assert consume_repeatedly(consume_character_from_range, "abc", "0", "9") == "abc"

    def test_consumes_to_end(self):
        assert consume_repeatedly(consume_character_from_range, "999", "0", "9") == ""

    def test_empty_view(self):
        assert consume_repeatedly(consume_character_from_range, "", "0", "9") == ""

    def test_long_run_does_not_exhaust_stack(self):
        text = "7" * 100_000 + "d"
        assert consume_repeatedly(consume_character_from_range, text, "0", "9") == "d"

    def test_stops_without_progress(self):
        calls = []

        def stuck(text):
            calls.append(text)
            return text

        assert consume_repeatedly(stuck, "abc") == "abc"
        assert calls == ["abc"]

    def test_result_is_suffix_of_input(self):
        text = "0042rest"
        result = consume_repeatedly(consume_character_from_range, text, "0", "9")
        assert text.endswith(result)
        assert result == "rest"
