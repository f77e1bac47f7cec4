# logparsing/grammar.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# LALR(1) grammar for JSON-like clock and motif text using SLY

"""JSON-like grammar implementation using SLY parser generator.

Builds plain Python values (dict, list, str, int, float, bool, None) from
the token stream of :class:`JSONLikeLexer`. Objects with a repeated key are
rejected, since a clock naming the same host twice is ambiguous.
"""

from sly import Parser
from .lexer import JSONLikeLexer
from .exceptions import ParseError
from utils.logger import get_logger


class JSONLikeParser(Parser):
    """SLY-based LALR(1) parser for JSON-like values."""

    tokens = JSONLikeLexer.tokens

    @_("value")
    def document(self, p):
        return p.value

    @_("obj", "arr")
    def value(self, p):
        return p[0]

    @_("STRING", "NUMBER")
    def value(self, p):
        return p[0]

    @_("TRUE")
    def value(self, p):
        return True

    @_("FALSE")
    def value(self, p):
        return False

    @_("NULL")
    def value(self, p):
        return None

    @_("LBRACE RBRACE")
    def obj(self, p):
        return {}

    @_("LBRACE members RBRACE")
    def obj(self, p):
        result = {}
        for key, value in p.members:
            if key in result:
                raise ParseError(f"Duplicate key '{key}'")
            result[key] = value
        return result

    @_("pair")
    def members(self, p):
        return [p.pair]

    @_("members COMMA pair")
    def members(self, p):
        return p.members + [p.pair]

    @_("STRING COLON value")
    def pair(self, p):
        return (p.STRING, p.value)

    @_("LBRACKET RBRACKET")
    def arr(self, p):
        return []

    @_("LBRACKET elements RBRACKET")
    def arr(self, p):
        return p.elements

    @_("value")
    def elements(self, p):
        return [p.value]

    @_("elements COMMA value")
    def elements(self, p):
        return p.elements + [p.value]

    def parse(self, text: str):
        """Parse JSON-like text into a Python value.

        Args:
            text: Text to parse

        Returns:
            The parsed value

        Raises:
            ParseError: If the text is empty or contains syntax errors
        """
        if not text.strip():
            raise ParseError("Input text is empty.")

        try:
            return super().parse(JSONLikeLexer().tokenize(text))
        except ParseError:
            raise
        except Exception as e:
            get_logger().debug(f"Unexpected parsing error: {e}")
            raise ParseError(f"Parse failed: {e}") from e

    def error(self, token):
        """Handle syntax errors during parsing.

        Raises:
            ParseError: Always raises with detailed error information
        """
        if token:
            error_msg = f"Syntax error near {token.value!r} at position {token.index}"
        else:
            error_msg = "Syntax error: unexpected end of input"

        raise ParseError(error_msg)
