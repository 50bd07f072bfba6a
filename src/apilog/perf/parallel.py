"""Thread-pool analysis for large log files.

Strategy:
    1. Split the file into N byte-range chunks aligned to line boundaries.
    2. Each worker thread reads its chunk and feeds every line through the
       parser into the shared, lock-protected aggregator.
    3. ``pool.map`` returns only when every chunk is done; the report is
       built after that barrier.

A line belongs to the chunk in which it starts, so every line is processed
exactly once whatever the chunk boundaries. The encoding must be
ASCII-compatible (UTF-8, Latin-1, ...) for byte splitting to be safe.

Usage::

    from apilog.aggregators.counter import Aggregator
    from apilog.parsers.access import AccessLogParser
    from apilog.perf.parallel import analyze_file_parallel

    agg = Aggregator()
    analyze_file_parallel("access.log", agg, AccessLogParser(), logger, workers=8)
    state = agg.snapshot()
"""
from __future__ import annotations

import os
from functools import partial
from multiprocessing.pool import ThreadPool

from ..aggregators.counter import Aggregator
from ..diagnostics import Diagnostics
from ..parsers.base import LineParser
from ..pipeline import process_line

# Type alias for a byte range (start inclusive, end exclusive)
_Chunk = tuple[str, int, int]  # (path, start_byte, end_byte)


def _process_chunk(
    chunk: _Chunk,
    parser: LineParser,
    aggregator: Aggregator,
    diagnostics: Diagnostics,
    encoding: str,
) -> int:
    """Worker function: process lines starting in [start_byte, end_byte).

    Returns the number of lines handled.
    """
    path, start, end = chunk
    handled = 0

    with open(path, "rb") as fh:
        # Align to the next newline boundary if we're mid-line
        if start > 0:
            fh.seek(start - 1)
            if fh.read(1) != b"\n":
                fh.readline()
        else:
            fh.seek(0)

        while fh.tell() < end:
            raw = fh.readline()
            if not raw:
                break
            line = raw.decode(encoding, errors="replace")
            process_line(line, parser, aggregator, diagnostics)
            handled += 1

    return handled


def _line_chunks(path: str, n_chunks: int, encoding: str) -> list[_Chunk]:
    """Cut a file into at most n_chunks contiguous byte ranges.

    Ranges are raw byte offsets; _process_chunk moves each start to the next
    line boundary, which only works when "\\n" encodes to the single byte 0x0A.

    Raises:
        ValueError: ``encoding`` is not ASCII-compatible (e.g. UTF-16).
    """
    if "\n".encode(encoding) != b"\n":
        raise ValueError(f"parallel analysis needs an ASCII-compatible encoding, got {encoding!r}")

    size = os.path.getsize(path)
    if size == 0:
        return []
    step = max(size // n_chunks, 1)
    bounds = list(range(0, size, step))[:n_chunks] + [size]
    return [(path, lo, hi) for lo, hi in zip(bounds, bounds[1:])]


def analyze_file_parallel(
    path: str,
    aggregator: Aggregator,
    parser: LineParser,
    diagnostics: Diagnostics,
    workers: int | None = None,
    encoding: str = "utf-8",
) -> int:
    """Analyze ``path`` with a thread pool, updating ``aggregator`` in place.

    Args:
        path:        Path to the log file.
        aggregator:  Shared aggregator; updates are atomic per record.
        parser:      Line parser used by every worker.
        diagnostics: Receives a warning per excluded line.
        workers:     Number of worker threads. Defaults to os.cpu_count().
        encoding:    ASCII-compatible text encoding of the file.

    Returns:
        Total number of lines processed.

    Raises:
        OSError:    the file could not be opened or read.
        ValueError: ``encoding`` is not ASCII-compatible.
    """
    n = workers or os.cpu_count() or 4
    chunks = _line_chunks(path, n, encoding)
    if not chunks:
        return 0

    work = partial(
        _process_chunk,
        parser=parser,
        aggregator=aggregator,
        diagnostics=diagnostics,
        encoding=encoding,
    )

    if len(chunks) == 1:
        # Single chunk, no pool needed
        return work(chunks[0])

    with ThreadPool(processes=min(n, len(chunks))) as pool:
        counts = pool.map(work, chunks)

    return sum(counts)
