# motif/__init__.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Motif search public API

"""Motif search over causality graphs.

Primary Components:
    MotifFinder: Backtracking search for a BuilderGraph inside a Graph
    Motif: One occurrence, with matched nodes and edges
    read_motif: Reads a serialized '#motif=[...]' string into a BuilderGraph

Example:
    >>> from model import BuilderGraph
    >>> from motif import MotifFinder
    >>> pattern = BuilderGraph(["a", "b"])
    >>> pattern.add_node("a").add_child(pattern.add_node("b"))
    >>> motif = MotifFinder().search(graph, pattern)
"""

from .exceptions import NoMatchError, PatternShapeError, SearchBudgetExceededError
from .motif import Motif
from .finder import MotifFinder, find_motif
from .motif_reader import read_motif

__all__ = [
    "Motif",
    "MotifFinder",
    "find_motif",
    "read_motif",
    "NoMatchError",
    "PatternShapeError",
    "SearchBudgetExceededError",
]
