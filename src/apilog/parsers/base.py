"""Parsed record type and the parser Protocol."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Protocol, runtime_checkable

BROWSERS: tuple[str, ...] = ("IE", "Firefox", "Safari", "Chrome", "Opera")


@dataclass(frozen=True)
class ParsedRecord:
    """One well-formed access-log line.

    Attributes:
        status_code: Three-digit HTTP status, kept as a string ("200").
        service_id:  Path segment after ``/search/`` naming the API called.
        api_key:     Value of the ``apikey`` query parameter.
        browser:     One of :data:`BROWSERS`.
        timestamp:   ``YYYY-MM-DD HH:MM:SS``, validated but not interpreted.
    """

    status_code: str
    service_id: str
    api_key: str
    browser: str
    timestamp: str

    @property
    def is_success(self) -> bool:
        return self.status_code == "200"


@runtime_checkable
class LineParser(Protocol):
    """Protocol for line parsers — duck-typed, no inheritance required."""

    def parse_line(self, line: str) -> ParsedRecord | None:
        """Parse a single log line. Returns None if the line does not match."""
        ...

    def parse_lines(self, lines: Iterable[str]) -> Iterator[ParsedRecord | None]:
        """Parse every line, yielding one result per input line."""
        ...

    @property
    def name(self) -> str:
        """Human-readable parser name."""
        ...
