# logparsing/log_parser.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Splitting raw logs into executions and executions into events

"""LogParser and ExecutionParser.

The raw log may hold the text of several executions. A delimiter pattern
marks where one execution's text ends and the next begins; if it has a
``trace`` named group, the captured text labels the execution that follows
the delimiter. Text before the first delimiter is labeled with the empty
string. Without a delimiter the whole log is a single unlabeled execution.

Each execution's text is handed to an ExecutionParser, which applies the
event pattern left to right. The event pattern must have ``clock``, ``event``
and ``host`` named groups; any other named group becomes a free-form field of
the event.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Tuple, Union

from model.log_event import LogEvent
from .clock import parse_clock
from .exceptions import DuplicateLabelError, MissingCaptureGroupError, UnknownLabelError
from utils.logger import get_logger

logger = get_logger()

PatternLike = Union[str, Pattern[str]]

CLOCK_GROUP = "clock"
EVENT_GROUP = "event"
HOST_GROUP = "host"
TRACE_GROUP = "trace"
RESERVED_GROUPS = (CLOCK_GROUP, EVENT_GROUP, HOST_GROUP)

#: Event text on one line, host and JSON clock on the next
DEFAULT_EVENT_PATTERN = r"(?P<event>.*)\n(?P<host>\S*) (?P<clock>\{.*\})"

EXCERPT_LENGTH = 120


def compile_pattern(pattern: PatternLike) -> Pattern[str]:
    if isinstance(pattern, str):
        return re.compile(pattern)
    return pattern


def require_groups(pattern: Pattern[str], required: Tuple[str, ...]) -> None:
    """Raise MissingCaptureGroupError unless `pattern` defines every group in `required`."""
    missing = [name for name in required if name not in pattern.groupindex]
    if missing:
        raise MissingCaptureGroupError(pattern.pattern, missing)


@dataclass(frozen=True)
class Execution:
    """One labeled execution and its events in log order."""

    label: str
    events: Tuple[LogEvent, ...]


class ExecutionParser:
    """Parses the raw text of one execution into LogEvents.

    Parsing happens on construction. A malformed clock aborts the whole
    execution.

    Args:
        raw_text: The execution's log text
        label: Label of the execution
        pattern: Event pattern with 'clock', 'event' and 'host' named groups
        host: Host used for every event when the pattern captures none

    Raises:
        MissingCaptureGroupError: If the pattern lacks a required group
        MalformedClockError: If an event's clock cannot be parsed
    """

    def __init__(
        self,
        raw_text: str,
        label: str,
        pattern: PatternLike,
        host: Optional[str] = None,
    ) -> None:
        self.raw_text = raw_text
        self.label = label
        self.pattern = compile_pattern(pattern)
        self.host = host

        required = RESERVED_GROUPS if host is None else (CLOCK_GROUP, EVENT_GROUP)
        require_groups(self.pattern, required)

        self.field_names = [n for n in self.pattern.groupindex if n not in RESERVED_GROUPS]
        self.log_events: List[LogEvent] = [self._parse_match(m) for m in self.pattern.finditer(raw_text)]

        logger.execution_parsed(label, len(self.log_events))

    def _parse_match(self, match: re.Match) -> LogEvent:
        line = self.raw_text.count("\n", 0, match.start()) + 1

        host = match.group(HOST_GROUP) if HOST_GROUP in self.pattern.groupindex else None
        if host is None:
            host = self.host

        excerpt = match.group(0).strip()
        if len(excerpt) > EXCERPT_LENGTH:
            excerpt = excerpt[:EXCERPT_LENGTH] + "..."

        timestamp = parse_clock(match.group(CLOCK_GROUP), host, line=line, excerpt=excerpt)

        fields = {}
        for name in self.field_names:
            value = match.group(name)
            if value is not None:
                fields[name] = value

        text = match.group(EVENT_GROUP) or ""
        return LogEvent(text, timestamp, line, fields)

    def get_log_events(self) -> List[LogEvent]:
        return list(self.log_events)

    def to_execution(self) -> Execution:
        return Execution(self.label, tuple(self.log_events))


class LogParser:
    """Splits raw log text into labeled executions and parses each of them.

    Args:
        raw_text: The raw log text; surrounding whitespace is ignored
        delimiter: Pattern separating executions, optionally with a 'trace'
            named group labeling the execution that follows it
        pattern: Event pattern with 'clock', 'event' and 'host' named groups
        host: Host used for every event when the pattern captures none

    Raises:
        MissingCaptureGroupError: If the event pattern lacks a required group
        DuplicateLabelError: If two non-blank executions share a label
        MalformedClockError: If any event's clock cannot be parsed
    """

    def __init__(
        self,
        raw_text: str,
        delimiter: Optional[PatternLike],
        pattern: PatternLike,
        host: Optional[str] = None,
    ) -> None:
        self.raw_text = raw_text.strip()
        self.delimiter = compile_pattern(delimiter) if delimiter is not None else None
        self.pattern = compile_pattern(pattern)
        self.host = host

        # Validate before any text is processed
        require_groups(self.pattern, RESERVED_GROUPS if host is None else (CLOCK_GROUP, EVENT_GROUP))

        self.labels: List[str] = []
        self.executions: Dict[str, ExecutionParser] = {}

        for label, text in self._split():
            if not text.strip():
                continue
            if label in self.executions:
                raise DuplicateLabelError(label)
            self.executions[label] = ExecutionParser(text, label, self.pattern, host)
            self.labels.append(label)

        logger.debug(f"Log split into {len(self.labels)} executions: {self.labels}")

    def _split(self) -> List[Tuple[str, str]]:
        """(label, text) for every segment of the raw text, blank ones included."""
        if self.delimiter is None:
            return [("", self.raw_text)]

        segments = []
        label = ""
        start = 0
        for ordinal, match in enumerate(self.delimiter.finditer(self.raw_text), start=1):
            segments.append((label, self.raw_text[start:match.start()]))
            label = self._label_of(match, ordinal)
            start = match.end()
        segments.append((label, self.raw_text[start:]))
        return segments

    def _label_of(self, match: re.Match, ordinal: int) -> str:
        if TRACE_GROUP in self.delimiter.groupindex:
            trace = match.group(TRACE_GROUP)
            if trace is not None:
                return trace
        return str(ordinal)

    def get_labels(self) -> List[str]:
        """Labels of all executions, in the order they appear in the log."""
        return list(self.labels)

    def get_log_events(self, label: str) -> Optional[List[LogEvent]]:
        """Events of the execution labeled `label`, or None if there is none."""
        execution = self.executions.get(label)
        if execution is None:
            return None
        return execution.get_log_events()

    def get_execution(self, label: str) -> Execution:
        """The execution labeled `label`.

        Raises:
            UnknownLabelError: If no execution carries that label
        """
        if label not in self.executions:
            raise UnknownLabelError(label)
        return self.executions[label].to_execution()

    def get_executions(self) -> List[Execution]:
        return [self.executions[label].to_execution() for label in self.labels]
