# Copyright (c) Syntropy Systems
"""brisk run command."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from brisk.cli.show import build_results_table, format_score
from brisk.config import load_config
from brisk.host import collect_host_info
from brisk.models.result import WorkloadResult
from brisk.report import build_report, save_report, utcnow
from brisk.suite import BenchmarkSuite

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def run(
    duration: Optional[float] = typer.Option(
        None,
        "--duration",
        "-d",
        help="Target duration per workload in milliseconds",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Hard timeout for asynchronous workloads in milliseconds",
    ),
    only: Optional[str] = typer.Option(
        None,
        "--only",
        help="Comma-separated workload names to run",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: nearest brisk.yaml)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Save a JSON report to this path",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log scheduler activity",
    ),
) -> None:
    """
    Run the benchmark battery.

    Each workload runs for the target duration and is scored in ops/s.

    Examples:

        brisk run

        brisk run --duration 500 --only math,json

        brisk run --output results/today.json
    """
    _configure_logging(verbose)

    try:
        config = load_config(config_file).with_overrides(
            target_duration=duration,
            hard_timeout=timeout,
        )
        suite = BenchmarkSuite(config)
        if only:
            suite.select(name.strip() for name in only.split(",") if name.strip())
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not suite.workloads:
        console.print("[yellow]No workloads selected[/yellow]")
        return

    started_at = utcnow()
    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Benchmarking", total=len(suite.workloads))

        def on_progress(result: WorkloadResult, completed: int, total: int) -> None:
            progress.update(task, completed=completed, total=total)
            progress.console.print(
                f"  [dim]{completed}/{total}[/dim] {result.name}: {format_score(result)}"
            )

        suite.on_progress = on_progress
        results = asyncio.run(suite.start())

    if results is None:
        console.print("[yellow]A benchmark is already running[/yellow]")
        raise typer.Exit(1)

    console.print()
    console.print(build_results_table(results, title="Results"))

    if output is not None:
        report = build_report(results, config, started_at, host=collect_host_info())
        save_report(report, output)
        console.print(f"[green]Saved report:[/green] {output}")
