# Copyright (c) Syntropy Systems
"""Compare command - compare saved reports side by side."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from brisk.models.result import SuiteReport
from brisk.report import load_report

console = Console()


def compare(
    report_paths: list[Path] = typer.Argument(..., help="Reports to compare (2 or more)"),
) -> None:
    """Compare saved reports side by side.

    The best score for each workload is highlighted.

    Example:
        brisk compare laptop.json desktop.json

    """
    if len(report_paths) < 2:
        console.print("[red]Need at least 2 reports to compare[/red]")
        raise typer.Exit(1)

    reports: list[SuiteReport] = []
    for path in report_paths:
        try:
            reports.append(load_report(path))
        except ValueError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)

    console.print(f"\n[bold]Comparing {len(reports)} reports[/bold]\n")

    # Workload names in first-seen order
    names: list[str] = []
    for report in reports:
        for result in report.results:
            if result.name not in names:
                names.append(result.name)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Workload", style="dim")
    for path in report_paths:
        table.add_column(path.stem, justify="right")

    for name in names:
        values: list[str] = []
        numeric_values: list[float | None] = []
        for report in reports:
            result = report.get(name)
            if result is None:
                values.append("-")
                numeric_values.append(None)
            else:
                values.append(result.display)
                numeric_values.append(result.throughput)

        styled_values = values.copy()
        valid_nums = [v for v in numeric_values if v is not None]
        if len(valid_nums) >= 2:
            best_val = max(valid_nums)
            for i, num in enumerate(numeric_values):
                if num == best_val:
                    styled_values[i] = f"[green]{values[i]}[/green]"

        table.add_row(name, *styled_values)

    console.print(table)
