"""Exceptions raised when an analysis run cannot complete."""
from __future__ import annotations

from pathlib import Path


class AnalysisError(Exception):
    """Base class for fatal analysis-run failures."""

    def __init__(self, message: str, path: str | Path) -> None:
        super().__init__(f"{message}: {path}")
        self.path = Path(path)


class LogReadError(AnalysisError):
    """The input log could not be opened or read to the end."""

    def __init__(self, path: str | Path) -> None:
        super().__init__("Failed to read log file", path)


class ReportWriteError(AnalysisError):
    """The report could not be written to the output path."""

    def __init__(self, path: str | Path) -> None:
        super().__init__("Failed to write report file", path)
