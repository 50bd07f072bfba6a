"""Plain-text summary report.

Layout (numbering and three-space indentation are fixed; label wording
comes from :class:`ReportLabels`)::

    1. Top API key: abc123 (calls: 2)
    2. Top 3 API service IDs by requests:
       book: 2
    3. Browser usage share:
       Chrome: 50.00%
       Firefox: 50.00%

Ordering rules:
  * Top key: highest count, ties go to the lexicographically smallest key.
  * Top services: count descending, then service id ascending.
  * Browsers: alphabetical by name.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping

from ..aggregators.counter import AggregateState

_INDENT = "   "


@dataclass(frozen=True)
class ReportLabels:
    top_api_key: str
    call_count: str
    top_services: str
    browser_usage: str
    no_data: str


ENGLISH = ReportLabels(
    top_api_key="Top API key",
    call_count="calls",
    top_services="Top 3 API service IDs by requests",
    browser_usage="Browser usage share",
    no_data="no data",
)

KOREAN = ReportLabels(
    top_api_key="최다 호출 APIKEY",
    call_count="호출 수",
    top_services="상위 3개의 API Service ID 및 요청 수",
    browser_usage="웹 브라우저별 사용 비율",
    no_data="데이터 없음",
)

_LABELS: dict[str, ReportLabels] = {"en": ENGLISH, "ko": KOREAN}


def get_labels(language: str) -> ReportLabels:
    try:
        return _LABELS[language.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown report language {language!r} (choose from {sorted(_LABELS)})"
        ) from None


def rank_counts(counts: Mapping[str, int], n: int | None = None) -> list[tuple[str, int]]:
    """(key, count) pairs by count descending, key ascending on ties."""
    ranked = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return ranked if n is None else ranked[:n]


def top_api_key(counts: Mapping[str, int]) -> tuple[str, int] | None:
    """Return the (key, count) with the highest count, or None when empty."""
    ranked = rank_counts(counts, 1)
    return ranked[0] if ranked else None


def top_services(counts: Mapping[str, int], n: int = 3) -> list[tuple[str, int]]:
    return rank_counts(counts, n)


def percentage(count: int, total: int) -> float:
    """count / total * 100, or 0.0 when total is zero."""
    if total <= 0:
        return 0.0
    return count / total * 100


def format_percentage(pct: float) -> str:
    """Two decimals, rounding ties half-up on the shortest decimal form of ``pct``."""
    return f"{Decimal(repr(pct)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)}%"


def browser_shares(state: AggregateState) -> list[tuple[str, float]]:
    """Per-browser share of qualifying requests, alphabetical by browser.

    Empty when there were no qualifying requests.
    """
    total = state.total_qualifying_requests
    if total == 0:
        return []
    return [
        (browser, percentage(count, total))
        for browser, count in sorted(state.browser_counts.items())
    ]


def build_report(state: AggregateState, labels: ReportLabels = ENGLISH) -> str:
    """Render the three-section report (no trailing newline)."""
    lines: list[str] = []

    top = top_api_key(state.api_key_counts)
    if top is None:
        lines.append(f"1. {labels.top_api_key}: {labels.no_data}")
    else:
        key, count = top
        lines.append(f"1. {labels.top_api_key}: {key} ({labels.call_count}: {count})")

    lines.append(f"2. {labels.top_services}:")
    for service_id, count in top_services(state.api_service_counts):
        lines.append(f"{_INDENT}{service_id}: {count}")

    lines.append(f"3. {labels.browser_usage}:")
    for browser, pct in browser_shares(state):
        lines.append(f"{_INDENT}{browser}: {format_percentage(pct)}")

    return "\n".join(lines)
