"""Shared pytest fixtures for apilog tests."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest


class CapturingDiagnostics:
    """Diagnostics double that records (level, formatted message) pairs."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def _log(self, level: str, msg: str, *args: Any) -> None:
        self.records.append((level, msg % args if args else msg))

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log("warning", msg, *args)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log("info", msg, *args)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log("error", msg, *args)

    def messages(self, level: str) -> list[str]:
        return [m for lvl, m in self.records if lvl == level]


@pytest.fixture()
def diagnostics() -> CapturingDiagnostics:
    return CapturingDiagnostics()


@pytest.fixture()
def tmp_log_file(tmp_path: Path):
    """Return a factory that creates temporary log files."""

    def _make(lines: list[str], name: str = "access.log") -> Path:
        p = tmp_path / name
        p.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
        return p

    return _make


def make_line(
    status: str = "200",
    service: str = "book",
    apikey: str = "abc123",
    query: str = "test",
    browser: str = "Chrome",
    ts: str = "2024-01-01 10:00:00",
) -> str:
    return (
        f"[{status}][http://apis.daum.net/search/{service}?apikey={apikey}&q={query}]"
        f"[{browser}][{ts}]"
    )


@pytest.fixture()
def e2e_lines() -> list[str]:
    return [
        "[200][http://apis.daum.net/search/book?apikey=abc123&q=test][Chrome][2024-01-01 10:00:00]",
        "[200][http://apis.daum.net/search/book?apikey=abc123&q=test2][Firefox][2024-01-01 10:00:01]",
        "[404][http://apis.daum.net/search/movie?apikey=xyz789&q=test][Chrome][2024-01-01 10:00:02]",
        "garbage line",
    ]
