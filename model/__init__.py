# model/__init__.py

"""
Domain objects for representing parsed executions and motif patterns:
vector timestamps, log events, causality graphs and the pattern graphs
searched for inside them. Log parsing and motif search live in their own packages.
"""

from .vector_timestamp import Ordering, VectorTimestamp
from .log_event import LogEvent
from .graph import Graph, Node, NodeKind
from .graph_builder import build_graph, connect_chains
from .builder_graph import BuilderGraph, BuilderNode
from .serializer import VectorTimestampSerializer
from .exceptions import CausalityError, PatternShapeError

__all__ = [
    "Ordering",
    "VectorTimestamp",
    "LogEvent",
    "Graph",
    "Node",
    "NodeKind",
    "build_graph",
    "connect_chains",
    "BuilderGraph",
    "BuilderNode",
    "VectorTimestampSerializer",
    "CausalityError",
    "PatternShapeError",
]
