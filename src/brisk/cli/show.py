# Copyright (c) Syntropy Systems
"""brisk show command - display a saved report."""
from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from brisk.models.result import Outcome, WorkloadResult
from brisk.report import load_report

console = Console()

OUTCOME_STYLES = {
    Outcome.OK: "green",
    Outcome.NOT_SUPPORTED: "dim",
    Outcome.TIMEOUT: "yellow",
    Outcome.ERROR: "red",
}


def format_score(result: WorkloadResult) -> str:
    """Score with rich markup for its outcome."""
    style = OUTCOME_STYLES.get(result.outcome, "white")
    return f"[{style}]{result.display}[/{style}]"


def build_results_table(results: list[WorkloadResult], title: str | None = None) -> Table:
    """Build the per-workload results table."""
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Workload")
    table.add_column("Score", justify="right")
    table.add_column("Iterations", justify="right", style="dim")
    table.add_column("Duration", justify="right", style="dim")

    for result in results:
        table.add_row(
            result.name,
            format_score(result),
            str(result.iterations),
            f"{result.duration_ms:.0f}ms",
        )

    return table


def show(
    report_path: Path = typer.Argument(..., help="Report written by 'brisk run --output'"),
) -> None:
    """Show a saved benchmark report."""
    try:
        report = load_report(report_path)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"\n[bold]Report[/bold] {report_path}")
    console.print(f"  [dim]started:[/dim] {report.started_at}")
    console.print(f"  [dim]finished:[/dim] {report.finished_at}")
    if report.host is not None:
        host = report.host
        console.print(f"  [dim]host:[/dim] {host.hostname} ({host.platform})")
        console.print(f"  [dim]python:[/dim] {host.python_version}")
        if host.cpu_count is not None:
            console.print(f"  [dim]cpus:[/dim] {host.cpu_count}")
        if host.memory_total_gb is not None:
            console.print(f"  [dim]memory:[/dim] {host.memory_total_gb:.1f} GB")
    console.print()

    if not report.results:
        console.print("[dim]No results in report[/dim]")
        return

    console.print(build_results_table(report.results))
