# tests/parser_tests/test_clock_parsing.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Test suite for the JSON-like grammar and vector clock parsing

"""Test suite for the JSON-like SLY grammar and clock validation.

Covers tokenization, values accepted by the grammar, and the rejection of
clock text that is not a mapping of host names to non-negative integers.
"""

import pytest
from logparsing import MalformedClockError, ParseError, parse_clock, parse_json_like
from logparsing.lexer import JSONLikeLexer


class TestJSONLikeGrammar:
    """Test cases for the grammar shared by clock and motif text."""

    def test_tokens(self):
        tokens = [t.type for t in JSONLikeLexer().tokenize('{"A": [1, true, null]}')]
        assert tokens == [
            "LBRACE", "STRING", "COLON", "LBRACKET", "NUMBER", "COMMA",
            "TRUE", "COMMA", "NULL", "RBRACKET", "RBRACE",
        ]

    @pytest.mark.parametrize(
        "text, expected",
        [
            ('{}', {}),
            ('{"A":1}', {"A": 1}),
            ('  {"A" : 1 ,\n "B":0 } ', {"A": 1, "B": 0}),
            ('[]', []),
            ('[{"x":[1,2]}, "s", -3, 2.5, false]', [{"x": [1, 2]}, "s", -3, 2.5, False]),
            ('{"h\\"q": 1}', {'h"q': 1}),
            ('"true"', "true"),
        ],
    )
    def test_valid_values(self, text, expected):
        assert parse_json_like(text) == expected

    @pytest.mark.parametrize(
        "text",
        [
            '',
            '{',
            '{"A":1,}',
            "{'A':1}",
            '{A:1}',
            '{"A" 1}',
            '{"A":1}}',
            '{"A":1,"A":2}',
        ],
    )
    def test_invalid_text_raises_parse_error(self, text):
        with pytest.raises(ParseError):
            parse_json_like(text)


class TestClockParsing:
    """Test cases for turning clock text into VectorTimestamps."""

    def test_owned_timestamp(self):
        ts = parse_clock('{"A":1,"B":0}', "A")
        assert ts.host == "A"
        assert ts.to_dict() == {"A": 1, "B": 0}

    def test_surrounding_whitespace_is_ignored(self):
        assert parse_clock('  {"A":2}\t', "A").get_own_time() == 2

    @pytest.mark.parametrize(
        "text",
        [
            '[1, 2]',
            '{"A":-1}',
            '{"A":1.5}',
            '{"A":"1"}',
            '{"A":true}',
            '{"A":0}',
            '{"B":1}',
            '{"A":1',
        ],
    )
    def test_malformed_clocks(self, text):
        with pytest.raises(MalformedClockError) as info:
            parse_clock(text, "A", line=3, excerpt=f"event\nA {text}")
        error = info.value
        assert error.text == text
        assert error.line == 3
        assert "line 3" in str(error)
        assert text in str(error)

    def test_malformed_clock_is_a_parse_error(self):
        with pytest.raises(ParseError):
            parse_clock("not a clock", "A")

    def test_missing_host(self):
        with pytest.raises(MalformedClockError, match="host"):
            parse_clock('{"A":1}', None)
