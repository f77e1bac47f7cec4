# model/graph.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Host chains and cross-host edges encoding happens-before between events

"""Node and Graph: the causality graph of one execution.

Every host owns a chain that starts at a head sentinel and ends at a tail
sentinel. Nodes between the sentinels are totally ordered by the order in
which the host logged them (``prev``/``next``). A node may additionally have
cross-host parents and children: an edge ``x -> y`` means the state of ``x``
was delivered to ``y``'s host right before ``y`` happened.

Node variants share this shape and are told apart by their :class:`NodeKind`
tag. A :class:`Graph` only accepts nodes of its own ``node_kind`` so that
event graphs and pattern graphs cannot be mixed.
"""

from __future__ import annotations
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from .log_event import LogEvent


class NodeKind(Enum):
    HEAD = "head"
    TAIL = "tail"
    EVENT = "event"
    PATTERN = "pattern"


class Node:
    """A slot in a host chain, optionally linked to nodes on other hosts.

    Attributes:
        kind: Variant tag of this node
        log_event: The wrapped event for EVENT nodes, None otherwise
    """

    kind = NodeKind.EVENT

    def __init__(self, log_event: Optional[LogEvent] = None) -> None:
        self.log_event = log_event
        self.id: Optional[int] = None
        self.host: Optional[str] = None
        self.graph: Optional[Graph] = None
        self.prev: Optional[Node] = None
        self.next: Optional[Node] = None
        self._parents: List[Node] = []
        self._children: List[Node] = []

    # --- getters --------------------------------------------------------

    def get_id(self) -> Optional[int]:
        return self.id

    def get_host(self) -> Optional[str]:
        return self.host

    def get_log_event(self) -> Optional[LogEvent]:
        return self.log_event

    def is_head(self) -> bool:
        return self.kind is NodeKind.HEAD

    def is_tail(self) -> bool:
        return self.kind is NodeKind.TAIL

    def is_sentinel(self) -> bool:
        return self.kind in (NodeKind.HEAD, NodeKind.TAIL)

    def get_prev(self) -> Optional[Node]:
        """Previous node on the same host, skipping the head sentinel."""
        if self.prev is None or self.prev.is_head():
            return None
        return self.prev

    def get_next(self) -> Optional[Node]:
        """Next node on the same host, skipping the tail sentinel."""
        if self.next is None or self.next.is_tail():
            return None
        return self.next

    def get_parents(self) -> List[Node]:
        return list(self._parents)

    def get_children(self) -> List[Node]:
        return list(self._children)

    def has_parents(self) -> bool:
        return bool(self._parents)

    def has_children(self) -> bool:
        return bool(self._children)

    def successors(self) -> List[Node]:
        """Direct happens-before successors: next on the host, then children."""
        nxt = self.get_next()
        return ([nxt] if nxt is not None else []) + self._children

    def predecessors(self) -> List[Node]:
        prv = self.get_prev()
        return ([prv] if prv is not None else []) + self._parents

    # --- mutation -------------------------------------------------------

    def insert_next(self, node: Node) -> None:
        """Insert a detached node right after this one on this node's host."""
        if self.graph is None:
            raise ValueError("Cannot insert after a node that is not part of a graph")
        if self.is_tail():
            raise ValueError("Cannot insert a node after a tail sentinel")
        if node.graph is not None:
            raise ValueError(f"Node {node.id} already belongs to a graph")
        if node.is_sentinel():
            raise ValueError("Sentinel nodes cannot be inserted")

        self.graph._register(node, self.host)

        node.prev = self
        node.next = self.next
        if self.next is not None:
            self.next.prev = node
        self.next = node

    def add_child(self, child: Node) -> None:
        """Add a cross-host happens-before edge from this node to `child`."""
        if self.graph is None or self.graph is not child.graph:
            raise ValueError("Both endpoints of an edge must belong to the same graph")
        if self.is_sentinel() or child.is_sentinel():
            raise ValueError("Sentinel nodes cannot take part in cross-host edges")
        if self.host == child.host:
            raise ValueError(
                f"Nodes {self.id} and {child.id} are both on host '{self.host}'; "
                f"same-host order is given by the chain"
            )
        if child in self._children:
            return
        self._children.append(child)
        child._parents.append(self)

    def remove_child(self, child: Node) -> None:
        if child in self._children:
            self._children.remove(child)
            child._parents.remove(self)

    def remove(self) -> None:
        """Detach this node from its chain, its edges and its graph."""
        if self.graph is None:
            return
        if self.is_sentinel():
            raise ValueError("Sentinel nodes are removed together with their host")

        for parent in list(self._parents):
            parent.remove_child(self)
        for child in list(self._children):
            self.remove_child(child)

        self.prev.next = self.next
        self.next.prev = self.prev
        self.prev = self.next = None

        self.graph._unregister(self)

    def __repr__(self) -> str:
        label = self.log_event.text if self.log_event is not None else self.kind.value
        return f"Node({self.id}, {self.host}, {label!r})"


class _Sentinel(Node):
    def __init__(self, kind: NodeKind) -> None:
        super().__init__()
        self.kind = kind


class Graph:
    """A set of host chains plus cross-host edges.

    Hosts keep the order in which they were added. Node ids are assigned by
    the graph in insertion order and are only unique within one graph.
    """

    node_kind = NodeKind.EVENT

    def __init__(self, hosts: Tuple[str, ...] | List[str] = ()) -> None:
        self._hosts: List[str] = []
        self._heads: Dict[str, Node] = {}
        self._tails: Dict[str, Node] = {}
        self._nodes: Dict[int, Node] = {}
        self._next_id = 0
        for host in hosts:
            self.add_host(host)

    def add_host(self, host: str) -> Node:
        """Create the empty chain for `host` and return its head sentinel."""
        if host in self._heads:
            raise ValueError(f"Host '{host}' already exists")

        head = _Sentinel(NodeKind.HEAD)
        tail = _Sentinel(NodeKind.TAIL)
        for sentinel in (head, tail):
            sentinel.graph = self
            sentinel.host = host
        head.next = tail
        tail.prev = head

        self._hosts.append(host)
        self._heads[host] = head
        self._tails[host] = tail
        return head

    def remove_host(self, host: str) -> None:
        for node in self.get_nodes_on_host(host):
            node.remove()
        self._hosts.remove(host)
        del self._heads[host]
        del self._tails[host]

    def has_host(self, host: str) -> bool:
        return host in self._heads

    def get_hosts(self) -> List[str]:
        return list(self._hosts)

    def get_head(self, host: str) -> Node:
        return self._heads[host]

    def get_tail(self, host: str) -> Node:
        return self._tails[host]

    def append(self, host: str, node: Node) -> Node:
        """Append `node` at the end of `host`'s chain."""
        if host not in self._tails:
            raise KeyError(f"Unknown host '{host}'")
        self._tails[host].prev.insert_next(node)
        return node

    def iter_host(self, host: str) -> Iterator[Node]:
        node = self._heads[host].next
        while node is not None and not node.is_tail():
            yield node
            node = node.next

    def get_nodes_on_host(self, host: str) -> List[Node]:
        return list(self.iter_host(host))

    def get_nodes(self) -> List[Node]:
        """All non-sentinel nodes, host by host in chain order."""
        return [node for host in self._hosts for node in self.iter_host(host)]

    def get_node(self, node_id: int) -> Optional[Node]:
        return self._nodes.get(node_id)

    def get_edges(self) -> List[Tuple[Node, Node]]:
        """All direct edges: chain successions first, then cross-host edges."""
        chain = []
        family = []
        for node in self.get_nodes():
            nxt = node.get_next()
            if nxt is not None:
                chain.append((node, nxt))
            family.extend((node, child) for child in node.get_children())
        return chain + family

    def _register(self, node: Node, host: str) -> None:
        if node.kind is not self.node_kind:
            raise ValueError(
                f"{type(self).__name__} only holds {self.node_kind.value} nodes, "
                f"got a {node.kind.value} node"
            )
        node.graph = self
        node.host = host
        node.id = self._next_id
        self._next_id += 1
        self._nodes[node.id] = node

    def _unregister(self, node: Node) -> None:
        del self._nodes[node.id]
        node.graph = None
        node.host = None

    def __contains__(self, node: object) -> bool:
        return isinstance(node, Node) and node.graph is self and not node.is_sentinel()

    def __len__(self) -> int:
        return len(self._nodes)

    def __str__(self) -> str:
        lines = []
        for host in self._hosts:
            chain = " -> ".join(str(n.id) for n in self.iter_host(host))
            lines.append(f"{host}: {chain}")
        return "\n".join(lines)
