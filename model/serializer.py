# model/serializer.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Text serialization of vector timestamps

"""Serializes a list of vector timestamps into a single line of text.

Each timestamp is rendered through a format string in which the
placeholders `` `HOST` `` and `` `CLOCK` `` are replaced with the owner host
and the JSON clock. Rendered timestamps are joined with a separator and
wrapped in a header and footer. With the defaults the output is the motif
search string understood by :func:`motif.read_motif`::

    #motif=[{"host":"a","clock":{"a":1}},{"host":"b","clock":{"a":1,"b":1}}]
"""

import json
from typing import Iterable

from .vector_timestamp import VectorTimestamp

HOST_PLACEHOLDER = "`HOST`"
CLOCK_PLACEHOLDER = "`CLOCK`"

DEFAULT_MOTIF_FORMAT = '{"host":"`HOST`","clock":`CLOCK`}'
DEFAULT_MOTIF_SEPARATOR = ","
DEFAULT_MOTIF_HEADER = "#motif=["
DEFAULT_MOTIF_FOOTER = "]"


class VectorTimestampSerializer:
    def __init__(
        self,
        fmt: str = DEFAULT_MOTIF_FORMAT,
        separator: str = DEFAULT_MOTIF_SEPARATOR,
        header: str = DEFAULT_MOTIF_HEADER,
        footer: str = DEFAULT_MOTIF_FOOTER,
    ) -> None:
        self.format = fmt
        self.separator = separator
        self.header = header
        self.footer = footer

    def serialize(self, timestamps: Iterable[VectorTimestamp]) -> str:
        rendered = [self._render(ts) for ts in timestamps]
        return self.header + self.separator.join(rendered) + self.footer

    def _render(self, ts: VectorTimestamp) -> str:
        # json.dumps escapes the host; the quotes come from the format string
        host = json.dumps(ts.host)[1:-1]
        clock = json.dumps(ts.to_dict(), separators=(",", ":"))
        return self.format.replace(HOST_PLACEHOLDER, host).replace(CLOCK_PLACEHOLDER, clock)
