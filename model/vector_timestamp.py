# model/vector_timestamp.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Immutable vector timestamp owned by the host that produced it

"""
Immutable Mattern–Fidge vector timestamp.

Supports:
  •  Component-wise ordering (≤) for happens-before checks.
  •  Concurrency detection (‖).
  •  Update (⊔) to merge observations, keeping the receiver's owner.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import Dict, Mapping, Tuple


class Ordering(Enum):
    """Result of comparing two vector timestamps."""

    LESS = auto()
    GREATER = auto()
    EQUAL = auto()
    CONCURRENT = auto()


@dataclass(frozen=True, slots=True, eq=False)
class VectorTimestamp:
    clock: Mapping[str, int]
    host: str

    def __post_init__(self) -> None:
        if not isinstance(self.host, str) or not self.host:
            raise ValueError("A vector timestamp must have a non-empty owner host")

        clock: Dict[str, int] = {}
        for h, t in dict(self.clock).items():
            if not isinstance(h, str):
                raise ValueError(f"Host identifiers must be strings, got {h!r}")
            if isinstance(t, bool) or not isinstance(t, int):
                raise ValueError(f"Time for host '{h}' must be an integer, got {t!r}")
            if t < 0:
                raise ValueError(f"Time for host '{h}' must be non-negative, got {t}")
            clock[h] = t

        if clock.get(self.host, 0) < 1:
            raise ValueError(
                f"The owner host '{self.host}' must have a time of at least 1 in its own clock"
            )

        object.__setattr__(self, "clock", MappingProxyType(clock))

    @classmethod
    def parse(cls, clock_text: str, host: str, line: int | None = None) -> VectorTimestamp:
        """Parse JSON-like clock text such as '{"A":1,"B":0}' owned by `host`."""
        from logparsing.clock import parse_clock

        return parse_clock(clock_text, host, line=line)

    def get(self, host: str) -> int:
        """Time recorded for `host`; 0 when the host is absent."""
        return self.clock.get(host, 0)

    def get_own_time(self) -> int:
        return self.clock[self.host]

    @property
    def hosts(self) -> Tuple[str, ...]:
        return tuple(self.clock)

    def to_dict(self) -> Dict[str, int]:
        return dict(self.clock)

    def leq(self, other: VectorTimestamp) -> bool:
        """
        Component-wise ≤ comparison.
        Missing entries are treated as 0.
        """
        return all(t <= other.clock.get(h, 0) for h, t in self.clock.items())

    def compare(self, other: VectorTimestamp) -> Ordering:
        below = self.leq(other)
        above = other.leq(self)
        if below and above:
            return Ordering.EQUAL
        if below:
            return Ordering.LESS
        if above:
            return Ordering.GREATER
        return Ordering.CONCURRENT

    def concurrent(self, other: VectorTimestamp) -> bool:
        """
        True if neither self ≤ other nor other ≤ self.
        """
        return self.compare(other) is Ordering.CONCURRENT

    def update(self, other: VectorTimestamp) -> VectorTimestamp:
        """
        Component-wise maximum (⊔) of two timestamps.
        The result is always owned by this timestamp's host.
        """
        merged = dict(other.clock)
        for h, t in self.clock.items():
            merged[h] = max(t, merged.get(h, 0))
        return VectorTimestamp(merged, self.host)

    def __le__(self, other: object) -> bool:  # type: ignore[override]
        if not isinstance(other, VectorTimestamp):
            return NotImplemented
        return self.leq(other)

    def __lt__(self, other: object) -> bool:  # type: ignore[override]
        if not isinstance(other, VectorTimestamp):
            return NotImplemented
        return self.compare(other) is Ordering.LESS

    def __ge__(self, other: object) -> bool:  # type: ignore[override]
        if not isinstance(other, VectorTimestamp):
            return NotImplemented
        return other.leq(self)

    def __gt__(self, other: object) -> bool:  # type: ignore[override]
        if not isinstance(other, VectorTimestamp):
            return NotImplemented
        return self.compare(other) is Ordering.GREATER

    def __eq__(self, other: object) -> bool:  # type: ignore[override]
        if not isinstance(other, VectorTimestamp):
            return NotImplemented
        return dict(self.clock) == dict(other.clock)

    def __hash__(self) -> int:
        """
        Stable, order-independent hash based on sorted items.
        The owner is not part of the hash, matching equality.
        """
        return hash(tuple(sorted(self.clock.items())))

    def __str__(self) -> str:
        items = ", ".join(f"{h}:{t}" for h, t in sorted(self.clock.items()))
        return f"[{items}]"

    def __repr__(self) -> str:
        return f"VectorTimestamp({dict(self.clock)!r}, host={self.host!r})"
