# model/exceptions.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Custom exceptions for causality and pattern graph construction

"""Domain-specific exceptions for causality and pattern graph construction."""


class CausalityError(ValueError):
    """Exception raised when vector timestamps cannot form a causality graph.

    Raised when a host's events do not advance its own clock, when a clock
    refers to an event that was never logged, or when a reconstructed edge
    would not go from a strictly earlier to a strictly later timestamp.
    """

    pass


class PatternShapeError(ValueError):
    """Exception raised when a motif pattern cannot describe a partial order.

    Indicates a pattern without nodes, an edge to a node outside the pattern,
    an edge between two nodes of the same host, or a cycle.
    """

    pass
