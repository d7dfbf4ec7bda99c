# Copyright (c) Syntropy Systems
"""brisk list command."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from brisk.config import load_config
from brisk.workloads import default_workloads

console = Console()


def list_workloads(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: nearest brisk.yaml)",
    ),
) -> None:
    """List the workloads in the battery."""
    try:
        config = load_config(config_file)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("Kind", style="dim")
    table.add_column("Description")

    for workload in default_workloads(config):
        table.add_row(workload.name, workload.kind, workload.description)

    console.print(table)
