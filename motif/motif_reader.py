# motif/motif_reader.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Reading serialized motifs back into pattern graphs

"""Reads a motif written by :class:`model.VectorTimestampSerializer`.

The text is a JSON-like array of ``{"host": ..., "clock": {...}}`` objects,
optionally preceded by the ``#motif=`` header::

    #motif=[{"host":"a","clock":{"a":1}},{"host":"b","clock":{"a":1,"b":1}}]
"""

from model.builder_graph import BuilderGraph
from model.vector_timestamp import VectorTimestamp
from logparsing.clock import parse_json_like
from logparsing.exceptions import MalformedClockError, ParseError
from utils.logger import get_logger

logger = get_logger()

MOTIF_PREFIX = "#motif="


def read_motif(text: str) -> BuilderGraph:
    """Parse serialized motif text into a BuilderGraph.

    Args:
        text: Serialized motif, with or without the '#motif=' header

    Returns:
        The motif as a pattern graph

    Raises:
        ParseError: If the text is not an array of host/clock objects
        MalformedClockError: If a clock is not a valid host -> count mapping
        CausalityError: If the clocks do not describe a partial order
    """
    body = text.strip()
    if body.startswith(MOTIF_PREFIX):
        body = body[len(MOTIF_PREFIX):]

    entries = parse_json_like(body)
    if not isinstance(entries, list):
        raise ParseError("A motif must be an array of host/clock objects")

    timestamps = []
    for position, entry in enumerate(entries, start=1):
        if not isinstance(entry, dict) or "host" not in entry or "clock" not in entry:
            raise ParseError(f"Motif entry {position} must be an object with 'host' and 'clock'")
        host, clock = entry["host"], entry["clock"]
        if not isinstance(clock, dict):
            raise MalformedClockError(str(clock), f"Motif entry {position} has a clock that is not an object")
        try:
            timestamps.append(VectorTimestamp(clock, host))
        except ValueError as e:
            raise MalformedClockError(str(clock), str(e)) from e

    graph = BuilderGraph.from_vector_timestamps(timestamps)
    logger.debug(f"Motif read: {len(graph)} nodes on hosts {graph.get_hosts()}")
    return graph
