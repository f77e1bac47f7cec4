# logparsing/clock.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Conversion of clock text into vector timestamps

"""Parses the textual vector clock attached to a log line.

The clock text is parsed with :class:`JSONLikeParser` and must yield an
object mapping host names to non-negative integers, in which the owning host
has a count of at least 1. Any failure is reported as a
:class:`MalformedClockError` carrying the clock text and, when known, the
line it came from.
"""

from typing import Optional

from model.vector_timestamp import VectorTimestamp
from .exceptions import MalformedClockError, ParseError
from .grammar import JSONLikeParser
from utils.logger import get_logger

logger = get_logger()


def parse_json_like(text: str):
    """Parse JSON-like text into plain Python values.

    Uses a fresh parser instance for each invocation so that calls never
    share state.

    Raises:
        ParseError: If the text is malformed
    """
    return JSONLikeParser().parse(text)


def parse_clock(
    clock_text: Optional[str],
    host: Optional[str],
    line: Optional[int] = None,
    excerpt: Optional[str] = None,
) -> VectorTimestamp:
    """Parse clock text into a VectorTimestamp owned by `host`.

    Args:
        clock_text: Text such as '{"A":1,"B":0}'
        host: Host that logged the event
        line: 1-based line number of the event, for error reporting
        excerpt: Matched log text, for error reporting

    Returns:
        The parsed VectorTimestamp

    Raises:
        MalformedClockError: If the text is not a valid host -> count mapping
    """
    if clock_text is None:
        raise MalformedClockError("", "No vector clock was captured.", line, excerpt)
    if not host:
        raise MalformedClockError(clock_text, "No host was captured for this event.", line, excerpt)

    try:
        clock = parse_json_like(clock_text.strip())
    except ParseError as e:
        logger.debug(f"Clock text {clock_text!r} rejected by parser: {e}")
        raise MalformedClockError(clock_text, f"The clock parser reports: {e}", line, excerpt) from e

    if not isinstance(clock, dict):
        raise MalformedClockError(
            clock_text,
            f"A vector clock must be an object mapping hosts to counts, got {type(clock).__name__}.",
            line,
            excerpt,
        )

    try:
        return VectorTimestamp(clock, host)
    except ValueError as e:
        raise MalformedClockError(clock_text, str(e), line, excerpt) from e
