# logparsing/__init__.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Raw log parsing: executions, events and vector clocks

"""Raw log parsing for vector-clock instrumented executions.

The parsing pipeline splits raw text into executions with a delimiter
pattern, extracts events with an event pattern, and parses each event's
JSON-like vector clock with a SLY grammar.

Core API:
    LogParser: Splits a log into labeled executions and parses each one
    ExecutionParser: Parses one execution's text into LogEvents
    parse_clock: Parses clock text into a VectorTimestamp

Example:
    >>> from logparsing import DEFAULT_EVENT_PATTERN, LogParser
    >>> log = 'a\\nA {"A":1}\\nb\\nB {"A":1,"B":1}'
    >>> parser = LogParser(log, None, DEFAULT_EVENT_PATTERN)
    >>> [e.text for e in parser.get_log_events("")]
    ['a', 'b']
"""

from .exceptions import (
    ParseError,
    MalformedClockError,
    MissingCaptureGroupError,
    DuplicateLabelError,
    UnknownLabelError,
)
from .clock import parse_clock, parse_json_like
from .log_parser import (
    DEFAULT_EVENT_PATTERN,
    Execution,
    ExecutionParser,
    LogParser,
)

__all__ = [
    "LogParser",
    "ExecutionParser",
    "Execution",
    "DEFAULT_EVENT_PATTERN",
    "parse_clock",
    "parse_json_like",
    "ParseError",
    "MalformedClockError",
    "MissingCaptureGroupError",
    "DuplicateLabelError",
    "UnknownLabelError",
]
