"""Analysis driver: read → parse → aggregate → report → write.

The report is rendered only after every input line has been processed, and
written only after rendering succeeds. A read failure therefore never leaves
an output file behind; a write failure leaves any previous report in place.
"""
from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .aggregators.counter import AggregateState, Aggregator
from .diagnostics import Diagnostics
from .errors import LogReadError, ReportWriteError
from .parsers.access import AccessLogParser
from .parsers.base import LineParser
from .visualization.report import ENGLISH, ReportLabels, build_report

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    state: AggregateState
    report: str
    output_path: Path


def process_line(
    line: str,
    parser: LineParser,
    aggregator: Aggregator,
    diagnostics: Diagnostics,
) -> None:
    """Parse one line and merge it into the aggregator."""
    aggregator.record_line()
    record = parser.parse_line(line)
    if record is None:
        aggregator.record_malformed()
        diagnostics.warning("Excluded malformed line => %s", line.removesuffix("\n").removesuffix("\r"))
        return
    aggregator.update(record)


def analyze_lines(
    lines: Iterable[str],
    aggregator: Aggregator | None = None,
    parser: LineParser | None = None,
    diagnostics: Diagnostics = logger,
) -> Aggregator:
    """Feed every line through the parser into an aggregator and return it."""
    aggregator = aggregator if aggregator is not None else Aggregator()
    parser = parser or AccessLogParser()
    for line in lines:
        process_line(line, parser, aggregator, diagnostics)
    return aggregator


def analyze_file(
    path: str | Path,
    *,
    workers: int = 1,
    encoding: str = "utf-8",
    parser: LineParser | None = None,
    diagnostics: Diagnostics = logger,
) -> AggregateState:
    """Analyze a log file and return the final aggregate state.

    With ``workers > 1`` the file is split into line-aligned byte ranges
    handled by a thread pool (see :mod:`apilog.perf.parallel`).

    Raises:
        LogReadError: the file is missing, unreadable, or fails mid-read.
    """
    aggregator = Aggregator()
    parser = parser or AccessLogParser()
    try:
        if workers > 1:
            from .perf.parallel import analyze_file_parallel

            analyze_file_parallel(
                str(path), aggregator, parser, diagnostics,
                workers=workers, encoding=encoding,
            )
        else:
            with open(path, encoding=encoding, errors="replace", newline="\n") as f:
                analyze_lines(f, aggregator, parser, diagnostics)
    except OSError as exc:
        diagnostics.error("Error while reading log file %s: %s", path, exc)
        raise LogReadError(path) from exc
    return aggregator.snapshot()


def write_report(text: str, path: str | Path, encoding: str = "utf-8") -> None:
    """Write ``text`` to ``path`` via a sibling temp file and an atomic rename.

    Raises:
        ReportWriteError: the temp file could not be written or moved.
    """
    target = Path(path)
    tmp_name: str | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
        )
        with os.fdopen(fd, "w", encoding=encoding, newline="\n") as fh:
            fh.write(text)
        os.replace(tmp_name, target)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ReportWriteError(target) from exc


def run(
    log_path: str | Path | None,
    output_path: str | Path | None,
    *,
    workers: int = 1,
    labels: ReportLabels = ENGLISH,
    encoding: str = "utf-8",
    parser: LineParser | None = None,
    diagnostics: Diagnostics = logger,
) -> AnalysisResult:
    """Run one full analysis: read ``log_path``, write the report to ``output_path``.

    Raises:
        ValueError:       either path is missing.
        LogReadError:     the log could not be read; no report is written.
        ReportWriteError: the report could not be written.
    """
    if not log_path:
        raise ValueError("log file path is not configured")
    if not output_path:
        raise ValueError("output file path is not configured")

    state = analyze_file(
        log_path,
        workers=workers,
        encoding=encoding,
        parser=parser,
        diagnostics=diagnostics,
    )
    report = build_report(state, labels)

    try:
        write_report(report + "\n", output_path, encoding=encoding)
    except ReportWriteError as exc:
        diagnostics.error("Error while writing report file %s: %s", output_path, exc.__cause__)
        raise

    diagnostics.info(
        "Log analysis complete: %d lines, %d qualifying, %d excluded. Report saved to %s",
        state.total_lines_processed,
        state.total_qualifying_requests,
        state.malformed_lines,
        output_path,
    )
    return AnalysisResult(state=state, report=report, output_path=Path(output_path))
