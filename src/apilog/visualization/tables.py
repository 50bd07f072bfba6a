"""Rich-powered tables for an analysis summary on the console."""
from __future__ import annotations

from rich import box
from rich.console import Console
from rich.table import Table

from ..aggregators.counter import AggregateState
from .report import browser_shares, format_percentage, percentage, rank_counts

_console = Console()


def print_ranking_table(
    ranking: list[tuple[str, int]],
    total: int,
    title: str,
    key_col: str,
    count_col: str,
    console: Console | None = None,
) -> None:
    """Ranked (key, count) rows plus each row's share of ``total`` qualifying requests."""
    out = console or _console
    if not ranking:
        out.print(f"[yellow]{title}: no qualifying requests.[/yellow]")
        return

    table = Table(title=title, box=box.SIMPLE_HEAVY)
    table.add_column("Rank", style="dim", justify="right")
    table.add_column(key_col)
    table.add_column(count_col, justify="right", style="cyan")
    table.add_column("Share", justify="right")
    for rank, (key, count) in enumerate(ranking, start=1):
        table.add_row(str(rank), key, str(count), format_percentage(percentage(count, total)))

    out.print(table)


def print_browser_table(
    shares: list[tuple[str, float]],
    title: str = "Browser usage",
    console: Console | None = None,
) -> None:
    out = console or _console
    if not shares:
        out.print("[yellow]No qualifying requests, browser usage unavailable.[/yellow]")
        return

    table = Table(title=title, box=box.MINIMAL_DOUBLE_HEAD)
    table.add_column("Browser", style="bold")
    table.add_column("Share", justify="right", style="cyan")
    for browser, pct in shares:
        table.add_row(browser, format_percentage(pct))

    out.print(table)


def print_summary(
    state: AggregateState,
    top: int = 10,
    console: Console | None = None,
) -> None:
    """Print totals plus API key, service and browser tables."""
    out = console or _console
    out.print(
        f"\n[bold]Lines:[/bold] {state.total_lines_processed}  "
        f"[bold]Qualifying:[/bold] {state.total_qualifying_requests}  "
        f"[bold]Non-200:[/bold] {state.non_success_lines}  "
        f"[bold]Excluded:[/bold] {state.malformed_lines}"
    )
    total = state.total_qualifying_requests
    print_ranking_table(
        rank_counts(state.api_key_counts, n=top), total,
        title=f"Top {top} API keys", key_col="API key", count_col="Calls", console=out,
    )
    print_ranking_table(
        rank_counts(state.api_service_counts, n=top), total,
        title=f"Top {top} API services", key_col="Service ID", count_col="Requests", console=out,
    )
    print_browser_table(browser_shares(state), console=out)
