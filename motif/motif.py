# motif/motif.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Result of a successful motif search

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Tuple

from model.graph import Node


@dataclass(frozen=True)
class Motif:
    """One occurrence of a motif inside a causality graph.

    Attributes:
        assignment: (pattern node, matched node) pairs in search order
        edges: Direct graph edges covering every pattern edge, each pattern
            edge expanded into one path between its matched nodes
    """

    assignment: Tuple[Tuple[Node, Node], ...]
    edges: Tuple[Tuple[Node, Node], ...]

    def get_nodes(self) -> List[Node]:
        return [node for _, node in self.assignment]

    def get_edges(self) -> List[Tuple[Node, Node]]:
        return list(self.edges)

    def image(self, pattern_node: Node) -> Node:
        """The graph node matched to `pattern_node`."""
        for slot, node in self.assignment:
            if slot is pattern_node:
                return node
        raise KeyError(pattern_node.id)

    @property
    def matched_node_ids(self) -> FrozenSet[int]:
        return frozenset(node.id for _, node in self.assignment)

    @property
    def matched_edges(self) -> FrozenSet[Tuple[int, int]]:
        return frozenset((a.id, b.id) for a, b in self.edges)

    def to_dict(self) -> Dict[str, list]:
        """Match in the shape consumed by highlighting layers."""
        return {
            "matched_node_ids": sorted(self.matched_node_ids),
            "matched_edges": [list(edge) for edge in sorted(self.matched_edges)],
        }

    def __str__(self) -> str:
        pairs = ", ".join(f"{slot.id}->{node.id}" for slot, node in self.assignment)
        return f"Motif({pairs})"
