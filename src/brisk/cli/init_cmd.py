# Copyright (c) Syntropy Systems
"""brisk init command."""

from pathlib import Path

import typer
import yaml
from rich.console import Console

from brisk.config import CONFIG_FILENAME, default_config_dict

console = Console()


def init(
    path: Path = typer.Argument(
        Path(),
        help="Directory to initialize (default: current directory)",
    ),
) -> None:
    """Write a default brisk.yaml.

    The file holds the target duration, chunk budget, hard timeout and
    workload sizes used by ``brisk run``.
    """
    target = path.resolve()
    config_path = target / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]Already initialized:[/yellow] {config_path}")
        return

    target.mkdir(parents=True, exist_ok=True)
    with config_path.open("w") as f:
        yaml.dump(default_config_dict(), f, default_flow_style=False)

    console.print(f"[green]Initialized brisk config:[/green] {config_path}")
