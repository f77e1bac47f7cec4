# logparsing/lexer.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Lexical analyzer for JSON-like clock and motif text using SLY

"""Lexical analyzer for the JSON-like text found in logs and motif strings.

Vector clocks are written as objects mapping host names to counters, e.g.
``{"A":1,"B":0}``, and serialized motifs as arrays of such objects. This
lexer turns that text into tokens for :mod:`logparsing.grammar`.

Supported Tokens:
- Punctuation: { } [ ] : ,
- Strings: double-quoted with JSON escapes, decoded to str
- Numbers: JSON integers and floats, decoded to int or float
- Keywords: true, false, null
- Whitespace: ignored during tokenization
"""

import json
import re

from sly import Lexer
from .exceptions import ParseError
from utils.logger import get_logger

_INTEGER = re.compile(r"-?\d+")


class JSONLikeLexer(Lexer):
    """SLY-based lexer for JSON-like text.

    Attributes:
        tokens: Set of valid token types
        ignore: Characters to skip during tokenization
    """

    tokens = {
        "LBRACE",
        "RBRACE",
        "LBRACKET",
        "RBRACKET",
        "COLON",
        "COMMA",
        "STRING",
        "NUMBER",
        "TRUE",
        "FALSE",
        "NULL",
    }

    ignore = " \t\r\n"

    LBRACE = r"\{"
    RBRACE = r"\}"
    LBRACKET = r"\["
    RBRACKET = r"\]"
    COLON = r":"
    COMMA = r","

    TRUE = r"true"
    FALSE = r"false"
    NULL = r"null"

    @_(r'"(?:[^"\\\n]|\\.)*"')
    def STRING(self, t):
        t.value = json.loads(t.value)
        return t

    @_(r"-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?")
    def NUMBER(self, t):
        t.value = int(t.value) if _INTEGER.fullmatch(t.value) else float(t.value)
        return t

    def error(self, t):
        """Handle illegal characters during tokenization.

        Raises:
            ParseError: Always raised with character and position information
        """
        illegal_char = t.value[0]
        get_logger().debug(f"Illegal character '{illegal_char}' at position {self.index}")
        raise ParseError(f"Illegal character '{illegal_char}' at position {self.index}")
