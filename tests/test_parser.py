# tests/test_parser.py
"""
Tests for the placeholder parser and the format scanner.
"""

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fmtcheck.matcher import ArgumentCategory as C
from fmtcheck.parser import (
    PlaceholderParseResult,
    parse_first_placeholder,
    parse_format_to_placeholder_matchers as expectations,
    parse_format_to_placeholders,
    parse_placeholder_at,
    skip_escaped_starting_character,
)

S, U, F = C.SIGNED_INTEGER, C.UNSIGNED_INTEGER, C.FLOATING


class TestParseFirstPlaceholder:

    def test_simple(self):
        assert parse_first_placeholder("%d") == PlaceholderParseResult(True, (S,), 2)

    def test_trailing_text_is_not_consumed(self):
        assert parse_first_placeholder("%5.2f rest") == (True, (F,), 5)

    def test_star_fields_come_before_value(self):
        assert parse_first_placeholder("%*.*s") == (True, (U, U, C.STRING), 5)

    def test_not_a_placeholder(self):
        assert parse_first_placeholder("x%d") == (False, (), 0)

    @pytest.mark.parametrize("text", ["%", "%l", "%.", "%*", "%5", "%Ld", "%y", "%hs"])
    def test_invalid(self, text):
        assert parse_first_placeholder(text) == (False, (), 0)

    def test_full_grammar(self):
        assert parse_first_placeholder("%-10.3Lf") == (True, (F,), 8)


class TestPlaceholderRecord:

    def test_fields(self):
        (ph,) = parse_format_to_placeholders("id=%-08ld!")
        assert ph.offset == 3
        assert ph.text == "%-08ld"
        assert ph.flags == "-"
        assert ph.width == "08"
        assert ph.precision is None
        assert ph.length == "l"
        assert ph.specifier == "d"
        assert ph.categories == (S,)
        assert ph.end == 9
        assert str(ph) == "%-08ld"

    def test_precision_forms(self):
        assert parse_placeholder_at("%.*f").precision == "*"
        assert parse_placeholder_at("%.3f").precision == "3"
        assert parse_placeholder_at("%.f").precision == ""

    def test_offset(self):
        ph = parse_placeholder_at("ab %x", 3)
        assert ph.offset == 3
        assert ph.text == "%x"

    def test_missing(self):
        assert parse_placeholder_at("ab %x", 0) is None
        assert parse_placeholder_at("ab %", 3) is None


class TestEscapes:

    def test_skip_escape(self):
        assert skip_escaped_starting_character("%%d") == "d"
        assert skip_escaped_starting_character("%d") == "%d"
        assert skip_escaped_starting_character("") == ""

    @pytest.mark.parametrize("text", ["%%", "100%%", "%%d", "%%%%", "a%%b%%c"])
    def test_escapes_contribute_nothing(self, text):
        assert expectations(text) == ()

    def test_escape_before_placeholder(self):
        assert expectations("%%%d") == (S,)

    def test_escape_between_placeholders(self):
        assert expectations("%d%%%s") == (S, C.STRING)


class TestScanner:

    @pytest.mark.parametrize("text", ["", "hello world", "no placeholders here!"])
    def test_no_percent(self, text):
        assert expectations(text) == ()

    @pytest.mark.parametrize("text, expected", [
        ("%d", (S,)),
        ("%u", (U,)),
        ("%5.2f", (F,)),
        ("%*d", (U, S)),
        ("%.*f", (U, F)),
        ("%*.*s", (U, U, C.STRING)),
        ("%lld", (S,)),
        ("%hhd", (S,)),
        ("%zu", (U,)),
        ("%jd", (S,)),
        ("%td", (S,)),
        ("%Lf", (F,)),
        ("%ls", (C.STRING,)),
        ("%lc", (C.CHAR,)),
        ("%c", (C.CHAR,)),
        ("%p", (C.POINTER,)),
        ("%n", (C.UNSPECIFIED,)),
        ("%hhn", (C.UNSPECIFIED,)),
        ("%#x", (U,)),
        ("% d", (S,)),
        ("%0*d", (U, S)),
        ("%.f", (F,)),
        ("%10.3Lf", (F,)),
    ])
    def test_single_placeholder(self, text, expected):
        assert expectations(text) == expected

    def test_mixed_text(self):
        text = "user=%s id=%08u load=%.2f%% ptr=%p"
        assert expectations(text) == (C.STRING, U, F, C.POINTER)

    def test_illegal_length_combination_is_literal(self):
        assert expectations("%Ld") == ()
        assert expectations("%Ld %d") == (S,)

    def test_l_does_not_pair_with_floating(self):
        assert expectations("%lf") == ()

    def test_scanning_resumes_after_stray_percent(self):
        assert expectations("%5%d") == (S,)
        assert expectations("%y%i") == (S,)

    def test_repeated_flags_are_not_recognised(self):
        # Only one flag character is accepted per placeholder.
        assert expectations("%-+5d") == ()
        assert expectations("%-5d") == (S,)

    @pytest.mark.parametrize("text", ["abc%", "abc%l", "abc%.", "abc%*", "abc%-", "abc%hh"])
    def test_truncated_tail(self, text):
        assert expectations(text) == ()

    def test_truncated_tail_after_valid_placeholder(self):
        assert expectations("%s%") == (C.STRING,)

    def test_idempotent(self):
        text = "%*.*s and %lld of %Lg"
        first = expectations(text)
        expectations.cache_clear()
        assert expectations(text) == first == (U, U, C.STRING, S, F)

    def test_placeholder_offsets(self):
        placeholders = parse_format_to_placeholders("a %d b %%c %s")
        assert [ph.offset for ph in placeholders] == [2, 11]
        assert [ph.text for ph in placeholders] == ["%d", "%s"]

    def test_stray_percent_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="fmtcheck.parser"):
            parse_format_to_placeholders("only a stray %q here")
        assert any("offset 13" in record.getMessage() for record in caplog.records)


class TestArbitraryInput:

    @given(st.text())
    def test_scanner_accepts_any_text(self, text):
        result = expectations(text)
        assert isinstance(result, tuple)
        assert all(isinstance(category, C) for category in result)

    @given(st.text(alphabet="%-+ #0123456789.*hlLjztdiuoxXfFeEgGaAcspnq", max_size=40))
    def test_first_placeholder_is_consistent(self, text):
        result = parse_first_placeholder(text)
        if result.is_valid:
            assert 2 <= result.consumed_length <= len(text)
            assert result.categories
        else:
            assert result == (False, (), 0)
