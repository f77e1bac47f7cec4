# logparsing/exceptions.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Custom exceptions for log and clock parsing

"""Domain-specific exceptions for raw log processing.

Parse-time structural errors (bad clock text, patterns without the required
named groups, repeated labels) are fatal to the operation that triggered
them and carry enough context to build a user-facing message. A lookup of an
unknown execution label is an ordinary miss and has its own exception type so
callers can handle it separately.
"""

from typing import Iterable, Optional


class ParseError(RuntimeError):
    """Exception raised when JSON-like text does not conform to the grammar.

    Used by the SLY lexer and parser for clock and motif text.
    """

    pass


class MalformedClockError(ParseError):
    """Exception raised when clock text is not a mapping of hosts to counts.

    Attributes:
        text: The offending clock text
        line: 1-based line of the log the clock was found on, if known
        excerpt: The matched log text around the clock, if known
        reason: Description of what is wrong with the clock
    """

    def __init__(
        self,
        text: str,
        reason: str,
        line: Optional[int] = None,
        excerpt: Optional[str] = None,
    ) -> None:
        self.text = text
        self.reason = reason
        self.line = line
        self.excerpt = excerpt

        where = f" on line {line}" if line is not None else ""
        message = (
            f"An error occurred while trying to parse the vector timestamp{where}:\n\n"
            f"    {excerpt if excerpt is not None else text}\n\n"
            f"{reason}"
        )
        super().__init__(message)


class MissingCaptureGroupError(ValueError):
    """Exception raised when a pattern lacks a required named capture group.

    Attributes:
        pattern: Source of the offending pattern
        missing: Names of the missing groups
    """

    def __init__(self, pattern: str, missing: Iterable[str]) -> None:
        self.pattern = pattern
        self.missing = tuple(missing)
        names = ", ".join(f"'{name}'" for name in self.missing)
        super().__init__(f"Pattern {pattern!r} is missing the named capture group(s) {names}")


class DuplicateLabelError(ValueError):
    """Exception raised when two executions in one log carry the same label."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"Execution label {label!r} is used more than once")


class UnknownLabelError(KeyError):
    """Exception raised when looking up an execution label that was not parsed."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(label)

    def __str__(self) -> str:
        return f"No execution is labeled {self.label!r}"
