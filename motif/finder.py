# motif/finder.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Backtracking search for motif occurrences in a causality graph

"""
Finds occurrences of a motif (a BuilderGraph) inside a causality graph.

Every pattern host is bound to a distinct host of the graph and every pattern
node to a distinct node of the graph, such that:

- nodes of one pattern host keep their chain order on the bound host,
- for every cross-host pattern edge ``p -> q`` the node matched to ``p`` is a
  strict ancestor of the node matched to ``q`` in the graph.

Ancestry is graph reachability over chain and cross-host edges, never a
comparison of timestamps. The edges reported for a match are the direct
graph edges along one path per pattern edge, so each of them exists in the
graph.

Pattern nodes are assigned in topological order, so a node's chain
predecessor is always bound before it; its candidates are then only the
nodes after that predecessor's match on the same host. The search keeps an
explicit stack of frames, one per assigned pattern node, and pops a frame to
backtrack once its candidates run out. Candidates are tried in host order
and chain order, so results are reproducible for identical input.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, List, Optional, Set, Tuple

from model.builder_graph import BuilderGraph
from model.graph import Graph, Node
from .exceptions import NoMatchError, SearchBudgetExceededError
from .motif import Motif
from utils.logger import get_logger

logger = get_logger()


class _Reachability:
    """Memoized descendant sets of graph nodes."""

    def __init__(self) -> None:
        self._descendants: Dict[int, FrozenSet[int]] = {}

    def descendants(self, node: Node) -> FrozenSet[int]:
        cached = self._descendants.get(node.id)
        if cached is None:
            seen: Set[int] = set()
            stack = node.successors()
            while stack:
                current = stack.pop()
                if current.id in seen:
                    continue
                seen.add(current.id)
                stack.extend(current.successors())
            cached = self._descendants[node.id] = frozenset(seen)
        return cached

    def is_ancestor(self, ancestor: Node, descendant: Node) -> bool:
        return descendant.id in self.descendants(ancestor)

    def path(self, source: Node, target: Node) -> List[Tuple[Node, Node]]:
        """Direct edges along one path from `source` to `target`.

        At every step the first successor that still reaches `target` is
        taken, chain successor before children, so the path is the same for
        identical graphs.
        """
        edges = []
        current = source
        while current is not target:
            for succ in current.successors():
                if succ is target or self.is_ancestor(succ, target):
                    edges.append((current, succ))
                    current = succ
                    break
            else:
                raise ValueError(f"Node {target.id} is not reachable from node {source.id}")
        return edges


@dataclass
class _Frame:
    """Tentative assignment of one pattern node."""

    pattern_node: Node
    candidates: List[Node]
    cursor: int = 0
    chosen: Optional[Node] = None
    bound_host: bool = False


@dataclass
class _SearchState:
    graph: Graph
    max_steps: Optional[int]
    image: Dict[int, Node] = field(default_factory=dict)
    used_nodes: Set[int] = field(default_factory=set)
    host_map: Dict[str, str] = field(default_factory=dict)
    used_hosts: Set[str] = field(default_factory=set)
    reach: _Reachability = field(default_factory=_Reachability)
    steps: int = 0

    def commit(self, frame: _Frame, node: Node) -> None:
        pattern_node = frame.pattern_node
        frame.chosen = node
        self.image[pattern_node.id] = node
        self.used_nodes.add(node.id)
        if pattern_node.host not in self.host_map:
            self.host_map[pattern_node.host] = node.host
            self.used_hosts.add(node.host)
            frame.bound_host = True

    def release(self, frame: _Frame) -> None:
        pattern_node = frame.pattern_node
        del self.image[pattern_node.id]
        self.used_nodes.discard(frame.chosen.id)
        if frame.bound_host:
            self.used_hosts.discard(self.host_map.pop(pattern_node.host))
            frame.bound_host = False
        frame.chosen = None


class MotifFinder:
    """Searches causality graphs for occurrences of a motif.

    Args:
        max_steps: Upper bound on the number of candidates examined per
            search; None for no bound
    """

    def __init__(self, max_steps: Optional[int] = None) -> None:
        self.max_steps = max_steps

    def find(self, graph: Graph, builder_graph: BuilderGraph) -> Motif:
        """Return the first occurrence of `builder_graph` in `graph`.

        Raises:
            PatternShapeError: If the motif is malformed
            NoMatchError: If the motif does not occur in the graph
            SearchBudgetExceededError: If `max_steps` is exceeded
        """
        motif = self.search(graph, builder_graph)
        if motif is None:
            raise NoMatchError(
                f"No occurrence of the {len(builder_graph)}-node motif among "
                f"{len(graph)} events"
            )
        return motif

    def search(self, graph: Graph, builder_graph: BuilderGraph) -> Optional[Motif]:
        """Like :meth:`find` but returns None when there is no occurrence."""
        return next(self._matches(graph, builder_graph), None)

    def find_all(self, graph: Graph, builder_graph: BuilderGraph) -> List[Motif]:
        """Every occurrence of `builder_graph` in `graph`, in search order."""
        return list(self._matches(graph, builder_graph))

    def _matches(self, graph: Graph, pattern: BuilderGraph) -> Iterator[Motif]:
        pattern.validate()
        order = pattern.topological_order()
        pattern_edges = pattern.get_edges()

        logger.search_start(len(order), len(pattern.get_pattern_hosts()), len(graph))

        state = _SearchState(graph, self.max_steps)
        stack = [self._open(order[0], state)]
        found = 0

        while stack:
            frame = stack[-1]
            if frame.chosen is not None:
                state.release(frame)

            node = self._advance(frame, state)
            if logger.is_debug():
                logger.frame_debug(len(stack) - 1, frame.pattern_node.id, node.id if node else None)

            if node is None:
                stack.pop()
                continue

            state.commit(frame, node)
            if len(stack) == len(order):
                found += 1
                motif = self._motif(order, pattern_edges, state)
                logger.match_found(str(sorted(motif.matched_node_ids)), state.steps)
                yield motif
                continue

            stack.append(self._open(order[len(stack)], state))

        if not found:
            logger.search_exhausted(state.steps)

    def _open(self, pattern_node: Node, state: _SearchState) -> _Frame:
        """Frame for `pattern_node` with every candidate allowed by chain order."""
        prev = pattern_node.get_prev()
        if prev is not None:
            candidates = []
            node = state.image[prev.id].get_next()
            while node is not None:
                candidates.append(node)
                node = node.get_next()
        else:
            # First node of its pattern host, so the host is still unbound
            candidates = [
                node
                for host in state.graph.get_hosts()
                if host not in state.used_hosts
                for node in state.graph.iter_host(host)
            ]
        return _Frame(pattern_node, candidates)

    def _advance(self, frame: _Frame, state: _SearchState) -> Optional[Node]:
        """Next candidate of `frame` consistent with the current assignment."""
        while frame.cursor < len(frame.candidates):
            candidate = frame.candidates[frame.cursor]
            frame.cursor += 1

            state.steps += 1
            if state.max_steps is not None and state.steps > state.max_steps:
                raise SearchBudgetExceededError(state.max_steps)

            if self._consistent(frame.pattern_node, candidate, state):
                return candidate
        return None

    def _consistent(self, pattern_node: Node, candidate: Node, state: _SearchState) -> bool:
        if candidate.id in state.used_nodes:
            return False

        bound = state.host_map.get(pattern_node.host)
        if bound is None:
            if candidate.host in state.used_hosts:
                return False
        elif candidate.host != bound:
            return False

        # Every already-assigned neighbour must be ordered the same way
        reach = state.reach
        for pred in pattern_node.predecessors():
            other = state.image.get(pred.id)
            if other is not None and not reach.is_ancestor(other, candidate):
                return False
        for succ in pattern_node.successors():
            other = state.image.get(succ.id)
            if other is not None and not reach.is_ancestor(candidate, other):
                return False
        return True

    def _motif(self, order: List[Node], pattern_edges, state: _SearchState) -> Motif:
        assignment = tuple((p, state.image[p.id]) for p in order)
        edges = []
        seen = set()
        for a, b in pattern_edges:
            for parent, child in state.reach.path(state.image[a.id], state.image[b.id]):
                if (parent.id, child.id) not in seen:
                    seen.add((parent.id, child.id))
                    edges.append((parent, child))
        return Motif(assignment, tuple(edges))


def find_motif(graph: Graph, builder_graph: BuilderGraph, max_steps: Optional[int] = None) -> Motif:
    """Convenience wrapper around :meth:`MotifFinder.find`."""
    return MotifFinder(max_steps).find(graph, builder_graph)
