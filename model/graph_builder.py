# model/graph_builder.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Reconstruction of message-passing causality from vector timestamps

"""Builds the causality graph of one execution from its parsed events.

Events of the same host form a chain in the order they were logged. A
cross-host edge ``x -> y`` (x on host A, y on host B) is added when y's
timestamp names x exactly (``y[A] == x[A]``), y's predecessor on B did not
already know x, and no other incoming candidate of y already knew x. The last
rule keeps only the direct deliveries: anything dropped is still reachable
through the candidate that knew it.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Tuple

from .exceptions import CausalityError
from .graph import Graph, Node
from .log_event import LogEvent
from .vector_timestamp import VectorTimestamp
from utils.logger import get_logger

logger = get_logger()

Chain = List[Tuple[Node, VectorTimestamp]]


def build_graph(events: Iterable[LogEvent]) -> Graph:
    """Build the causality graph for one execution's ordered events.

    Args:
        events: Parsed events in the order they appear in the log

    Returns:
        Graph with one chain per host, hosts in first-encountered order

    Raises:
        CausalityError: If the timestamps are not a consistent execution
    """
    graph = Graph()
    chains: Dict[str, Chain] = {}

    for event in events:
        if not graph.has_host(event.host):
            graph.add_host(event.host)
            chains[event.host] = []
        node = graph.append(event.host, Node(event))
        chains[event.host].append((node, event.timestamp))

    edge_count = connect_chains(chains)
    logger.graph_built(len(graph), len(chains), edge_count)
    return graph


def connect_chains(chains: Dict[str, Chain]) -> int:
    """Add the cross-host edges implied by the timestamps of `chains`.

    Each chain must already be linked on its host in the given order.

    Args:
        chains: host -> [(node, timestamp), ...] in chain order

    Returns:
        Number of cross-host edges added
    """
    by_time: Dict[str, Dict[int, Tuple[Node, VectorTimestamp]]] = {}
    for host, chain in chains.items():
        by_time[host] = _index_chain(host, chain)

    edge_count = 0
    for host, chain in chains.items():
        prev_ts = None
        for node, ts in chain:
            candidates = _delivered(host, ts, prev_ts, by_time)

            for parent, parent_ts in candidates:
                # Reachable through another candidate that already knew it
                if any(parent_ts < other_ts for other, other_ts in candidates if other is not parent):
                    continue
                if not parent_ts < ts:
                    raise CausalityError(
                        f"Event {ts} on host '{host}' receives from {parent_ts} on host "
                        f"'{parent.host}' but does not strictly follow it"
                    )
                parent.add_child(node)
                edge_count += 1
                logger.debug(f"Edge {parent.host}{parent_ts} -> {host}{ts}")

            prev_ts = ts

    return edge_count


def _index_chain(host: str, chain: Chain) -> Dict[int, Tuple[Node, VectorTimestamp]]:
    index: Dict[int, Tuple[Node, VectorTimestamp]] = {}
    prev_ts = None
    for node, ts in chain:
        if ts.host != host:
            raise CausalityError(f"Timestamp {ts} is owned by '{ts.host}', not '{host}'")
        if prev_ts is not None and (
            ts.get_own_time() <= prev_ts.get_own_time() or not prev_ts < ts
        ):
            raise CausalityError(
                f"Host '{host}' goes from {prev_ts} to {ts}; "
                f"successive events of a host must strictly advance its clock"
            )
        index[ts.get_own_time()] = (node, ts)
        prev_ts = ts
    return index


def _delivered(
    host: str,
    ts: VectorTimestamp,
    prev_ts: VectorTimestamp | None,
    by_time: Dict[str, Dict[int, Tuple[Node, VectorTimestamp]]],
) -> List[Tuple[Node, VectorTimestamp]]:
    """Events of other hosts first learned of by the event stamped `ts`."""
    candidates = []
    for other in ts.hosts:
        time = ts.get(other)
        if other == host or time == 0:
            continue
        if prev_ts is not None and prev_ts.get(other) >= time:
            continue
        target = by_time.get(other, {}).get(time)
        if target is None:
            raise CausalityError(
                f"Event {ts} on host '{host}' refers to event {time} of host "
                f"'{other}', which was never logged"
            )
        candidates.append(target)
    return candidates
