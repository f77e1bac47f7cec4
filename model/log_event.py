# model/log_event.py

"""
LogEvent
========

Immutable record of one event parsed out of a raw log. It carries the
event text, the vector timestamp of the host that logged it, the 1-based
line the match started on, and any extra named fields the event pattern
captured.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping

from .vector_timestamp import VectorTimestamp


@dataclass(frozen=True, slots=True)
class LogEvent:
    text: str
    timestamp: VectorTimestamp
    line_number: int
    fields: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def host(self) -> str:
        """The host that logged this event (owner of its timestamp)."""
        return self.timestamp.host

    def get_fields(self) -> Dict[str, str]:
        return dict(self.fields)

    # delegate happens-before relations to the timestamp
    def happened_before(self, other: LogEvent) -> bool:
        return self.timestamp < other.timestamp

    def concurrent(self, other: LogEvent) -> bool:
        """True if this event and `other` are concurrent in the partial order."""
        return self.timestamp.concurrent(other.timestamp)

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, LogEvent)
            and self.text == other.text
            and self.host == other.host
            and self.timestamp == other.timestamp
            and self.line_number == other.line_number
            and dict(self.fields) == dict(other.fields)
        )

    def __hash__(self) -> int:
        return hash((self.text, self.host, self.timestamp, self.line_number))

    def __str__(self) -> str:
        return f"{self.text}@{self.host}:{self.timestamp} (line {self.line_number})"
