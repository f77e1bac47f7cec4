# model/builder_graph.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# User-authored motif patterns with the same shape as a causality graph

"""BuilderNode and BuilderGraph.

A BuilderGraph is a motif: it describes the structure to search for, not
something that was observed. Its nodes are PATTERN nodes. The chain of a host
says which pattern nodes must happen in that order on one host, and a
cross-host edge says its source must happen before its target. Each host keeps
a head sentinel that serves as the anchor for ``insert_next`` when a pattern
is assembled node by node.
"""

from __future__ import annotations
import heapq
from typing import Dict, Iterable, List, Tuple

from .exceptions import PatternShapeError
from .graph import Graph, Node, NodeKind
from .graph_builder import connect_chains
from .vector_timestamp import VectorTimestamp


class BuilderNode(Node):
    """A pattern slot in a BuilderGraph."""

    kind = NodeKind.PATTERN

    def __init__(self) -> None:
        super().__init__()


class BuilderGraph(Graph):
    node_kind = NodeKind.PATTERN

    def add_node(self, host: str) -> BuilderNode:
        """Append a new pattern node at the end of `host`'s chain."""
        return self.append(host, BuilderNode())

    def remove_node(self, node: Node) -> None:
        node.remove()

    def get_pattern_hosts(self) -> List[str]:
        """Hosts that hold at least one pattern node, in host order."""
        return [host for host in self.get_hosts() if self.get_head(host).get_next() is not None]

    def validate(self) -> None:
        """Check that this pattern describes a partial order.

        Raises:
            PatternShapeError: If the pattern is empty, links to nodes outside
                this graph, links two nodes of one host, or has a cycle
        """
        nodes = self.get_nodes()
        if not nodes:
            raise PatternShapeError("The motif has no nodes")

        for node in nodes:
            for other in node.get_children() + node.get_parents():
                if other not in self:
                    raise PatternShapeError(
                        f"Pattern node {node.id} on host '{node.host}' is linked to a node "
                        f"that is not in any host chain of this motif"
                    )
                if other.host == node.host:
                    raise PatternShapeError(
                        f"Pattern nodes {node.id} and {other.id} are linked across the "
                        f"chain of host '{node.host}'"
                    )

        self.topological_order()

    def topological_order(self) -> List[Node]:
        """Pattern nodes ordered so that every node follows its predecessors.

        Ties are broken by host order, then chain position, which makes the
        order deterministic for a given pattern.

        Raises:
            PatternShapeError: If the pattern contains a cycle
        """
        nodes = self.get_nodes()
        rank: Dict[int, Tuple[int, int]] = {}
        for host_index, host in enumerate(self.get_hosts()):
            for position, node in enumerate(self.iter_host(host)):
                rank[node.id] = (host_index, position)

        indegree = {node.id: len(node.predecessors()) for node in nodes}
        ready = [(rank[n.id], n.id) for n in nodes if indegree[n.id] == 0]
        heapq.heapify(ready)

        order: List[Node] = []
        while ready:
            _, node_id = heapq.heappop(ready)
            node = self.get_node(node_id)
            order.append(node)
            for succ in node.successors():
                indegree[succ.id] -= 1
                if indegree[succ.id] == 0:
                    heapq.heappush(ready, (rank[succ.id], succ.id))

        if len(order) < len(nodes):
            stuck = sorted(node_id for node_id, degree in indegree.items() if degree > 0)
            raise PatternShapeError(f"The motif contains a cycle through nodes {stuck}")
        return order

    def to_vector_timestamps(self) -> List[VectorTimestamp]:
        """Timestamps that a log would carry if it contained exactly this motif.

        Every node starts at ``{host: chain index + 1}`` and is merged with
        the timestamps of all its predecessors. The result lists nodes host by
        host in chain order.
        """
        position: Dict[int, int] = {}
        for host in self.get_hosts():
            for index, node in enumerate(self.iter_host(host)):
                position[node.id] = index + 1

        stamps: Dict[int, VectorTimestamp] = {}
        for node in self.topological_order():
            ts = VectorTimestamp({node.host: position[node.id]}, node.host)
            for pred in node.predecessors():
                ts = ts.update(stamps[pred.id])
            stamps[node.id] = ts

        return [stamps[node.id] for node in self.get_nodes()]

    @classmethod
    def from_vector_timestamps(cls, timestamps: Iterable[VectorTimestamp]) -> BuilderGraph:
        """Rebuild a motif from the timestamps of its nodes.

        Nodes of a host are chained by increasing own time and linked across
        hosts with the same rule used for parsed logs.

        Raises:
            CausalityError: If the timestamps are not consistent
        """
        grouped: Dict[str, List[VectorTimestamp]] = {}
        for ts in timestamps:
            grouped.setdefault(ts.host, []).append(ts)

        graph = cls(list(grouped))
        chains = {}
        for host, stamps in grouped.items():
            ordered = sorted(stamps, key=lambda t: t.get_own_time())
            chains[host] = [(graph.add_node(host), ts) for ts in ordered]

        connect_chains(chains)
        return graph
