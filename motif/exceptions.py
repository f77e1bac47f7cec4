# motif/exceptions.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Custom exceptions for motif search

"""Domain-specific exceptions for motif search.

A search that finds nothing is an ordinary outcome: ``MotifFinder.search``
returns None and only ``MotifFinder.find`` raises :class:`NoMatchError`.
Malformed patterns are reported as :class:`PatternShapeError` before any
search starts.
"""

from model.exceptions import PatternShapeError


class NoMatchError(LookupError):
    """Exception raised when no part of the graph is consistent with the motif."""

    pass


class SearchBudgetExceededError(RuntimeError):
    """Exception raised when a search examines more candidates than allowed.

    Attributes:
        steps: Number of candidates examined before giving up
    """

    def __init__(self, steps: int) -> None:
        self.steps = steps
        super().__init__(f"Motif search gave up after examining {steps} candidates")


__all__ = ["NoMatchError", "PatternShapeError", "SearchBudgetExceededError"]
