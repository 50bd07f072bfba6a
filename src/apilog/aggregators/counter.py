"""Count qualifying requests by API key, service id and browser."""
from __future__ import annotations

import copy
import threading
from collections import Counter as _Counter
from dataclasses import dataclass, field

from ..parsers.base import ParsedRecord


@dataclass
class AggregateState:
    """Counts accumulated over one analysis run.

    Each qualifying (status 200) record bumps exactly one entry in each of
    the three mappings, so every mapping sums to ``total_qualifying_requests``.
    """

    api_key_counts: _Counter[str] = field(default_factory=_Counter)
    api_service_counts: _Counter[str] = field(default_factory=_Counter)
    browser_counts: _Counter[str] = field(default_factory=_Counter)
    total_qualifying_requests: int = 0
    total_lines_processed: int = 0
    malformed_lines: int = 0
    non_success_lines: int = 0

    def is_consistent(self) -> bool:
        total = self.total_qualifying_requests
        return (
            sum(self.api_key_counts.values()) == total
            and sum(self.api_service_counts.values()) == total
            and sum(self.browser_counts.values()) == total
        )


class Aggregator:
    """Thread-safe accumulator over :class:`ParsedRecord` values.

    All mutations of one record happen under a single lock, so concurrent
    workers never leave the three mappings out of step with each other.

    Usage::

        agg = Aggregator()
        for record in records:
            agg.update(record)
        state = agg.snapshot()
    """

    def __init__(self) -> None:
        self._state = AggregateState()
        self._lock = threading.Lock()

    def update(self, record: ParsedRecord) -> None:
        with self._lock:
            if not record.is_success:
                self._state.non_success_lines += 1
                return
            self._state.api_key_counts[record.api_key] += 1
            self._state.api_service_counts[record.service_id] += 1
            self._state.browser_counts[record.browser] += 1
            self._state.total_qualifying_requests += 1

    def record_line(self) -> None:
        with self._lock:
            self._state.total_lines_processed += 1

    def record_malformed(self) -> None:
        with self._lock:
            self._state.malformed_lines += 1

    def merge(self, other: AggregateState) -> None:
        """Fold a partial state (e.g. one shard's counts) into this one."""
        with self._lock:
            s = self._state
            s.api_key_counts.update(other.api_key_counts)
            s.api_service_counts.update(other.api_service_counts)
            s.browser_counts.update(other.browser_counts)
            s.total_qualifying_requests += other.total_qualifying_requests
            s.total_lines_processed += other.total_lines_processed
            s.malformed_lines += other.malformed_lines
            s.non_success_lines += other.non_success_lines

    def snapshot(self) -> AggregateState:
        with self._lock:
            return copy.deepcopy(self._state)

    @property
    def total(self) -> int:
        with self._lock:
            return self._state.total_qualifying_requests

    def __repr__(self) -> str:
        return f"Aggregator(total={self.total})"
