"""apilog CLI — entry point.

Commands:
    apilog analyze [LOG_FILE] [-o OUTPUT]   Analyze an access log and write the report

Paths not given on the command line fall back to APILOG_LOG_FILE_PATH and
APILOG_OUTPUT_FILE_PATH (environment or .env).
"""
from __future__ import annotations

import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console

from .config import Settings
from .diagnostics import configure_logging
from .errors import AnalysisError
from .pipeline import run
from .visualization.report import get_labels

console = Console()
err_console = Console(stderr=True)


# ── CLI root ─────────────────────────────────────────────────────────────────


@click.group()
@click.version_option(version="1.0.0", prog_name="apilog")
def main() -> None:
    """apilog — API access-log analyzer."""


# ── analyze ──────────────────────────────────────────────────────────────────


@main.command()
@click.argument("log_file", required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--output", "-o", "output", default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Report file (overwritten). Defaults to APILOG_OUTPUT_FILE_PATH.",
)
@click.option(
    "--workers", "-w", default=None, type=click.IntRange(min=1),
    help="Worker threads (1 = sequential). Defaults to APILOG_WORKERS.",
)
@click.option(
    "--labels", "language", default=None,
    type=click.Choice(["en", "ko"], case_sensitive=False),
    help="Report label wording. Defaults to APILOG_REPORT_LANGUAGE.",
)
@click.option("--summary/--no-summary", default=False, help="Also print summary tables to the console.")
def analyze(
    log_file: Path | None,
    output: Path | None,
    workers: int | None,
    language: str | None,
    summary: bool,
) -> None:
    """Analyze an API access log and write the three-section report.

    \b
    Examples:
      apilog analyze access.log -o report.txt
      apilog analyze access.log -o report.txt --workers 4 --summary
      APILOG_LOG_FILE_PATH=access.log APILOG_OUTPUT_FILE_PATH=out.txt apilog analyze
    """
    try:
        settings = Settings()
    except ValidationError as exc:
        raise click.UsageError(f"Invalid configuration:\n{exc}") from exc

    logger = configure_logging(settings.log_level)

    log_path = log_file or settings.log_file_path
    output_path = output or settings.output_file_path
    if log_path is None:
        raise click.UsageError("No log file given. Pass LOG_FILE or set APILOG_LOG_FILE_PATH.")
    if output_path is None:
        raise click.UsageError("No output file given. Pass --output or set APILOG_OUTPUT_FILE_PATH.")

    try:
        result = run(
            log_path,
            output_path,
            workers=workers or settings.workers,
            labels=get_labels(language or settings.report_language),
            encoding=settings.encoding,
            diagnostics=logger,
        )
    except AnalysisError as exc:
        err_console.print(f"[red]{exc}[/red]")
        sys.exit(1)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    if summary:
        from .visualization.tables import print_summary

        print_summary(result.state, console=console)

    console.print(f"[dim]Report written to {result.output_path}[/dim]")


if __name__ == "__main__":
    main()
