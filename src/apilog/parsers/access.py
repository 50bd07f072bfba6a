"""Daum search API access-log parser.

Line format::

    [200][http://apis.daum.net/search/book?apikey=abc123&q=python][Chrome][2024-01-01 10:00:00]

Every field is bracketed and the whole line must match; anything before the
first bracket or after the last one rejects the line.
"""
from __future__ import annotations

import re
from typing import Iterable, Iterator

from .base import BROWSERS, ParsedRecord

_ACCESS_RE = re.compile(
    r"\[(?P<status>\d{3})\]"                                   # [status]
    r"\[http://apis\.daum\.net/search/(?P<service>\w+)"         # [url .../search/service
    r"\?apikey=(?P<apikey>\w+)&q=[^\]]+\]"                      #  apikey, query]
    r"\[(?P<browser>" + "|".join(BROWSERS) + r")\]"             # [browser]
    r"\[(?P<timestamp>\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\]",  # [date time]
    re.ASCII,
)


class AccessLogParser:
    """Parse Daum search API access-log lines into :class:`ParsedRecord`."""

    @property
    def name(self) -> str:
        return "daum-access"

    def parse_line(self, line: str) -> ParsedRecord | None:
        m = _ACCESS_RE.fullmatch(line.removesuffix("\n").removesuffix("\r"))
        if not m:
            return None
        return ParsedRecord(
            status_code=m["status"],
            service_id=m["service"],
            api_key=m["apikey"],
            browser=m["browser"],
            timestamp=m["timestamp"],
        )

    def parse_lines(self, lines: Iterable[str]) -> Iterator[ParsedRecord | None]:
        for line in lines:
            yield self.parse_line(line)
