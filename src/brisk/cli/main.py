# Copyright (c) Syntropy Systems
"""Main CLI entry point for brisk."""

import typer

from brisk.cli.compare import compare
from brisk.cli.init_cmd import init
from brisk.cli.list_cmd import list_workloads
from brisk.cli.run_cmd import run
from brisk.cli.show import show

app = typer.Typer(
    name="brisk",
    help=(
        "Adaptive micro-benchmarks. Time-boxed workloads, ops/s scores, "
        "and an event loop that stays responsive."
    ),
    no_args_is_help=True,
    add_completion=False,
)

# Register commands
_ = app.command()(init)
_ = app.command(name="list")(list_workloads)
_ = app.command()(run)
_ = app.command()(show)
_ = app.command()(compare)


if __name__ == "__main__":
    app()
