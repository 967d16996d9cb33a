"""Root CLI entry point for domhash."""
from __future__ import annotations

import typer

from . import compare as compare_cli
from . import hash as hash_cli
from . import report as report_cli

app = typer.Typer(add_completion=False, help="domhash command line interface")
app.command("hash", help="Compute the DOM hash of one document")(hash_cli.hash_input)
app.command("compare", help="Compare the structure of two documents")(compare_cli.compare_inputs)
app.command("report", help="Render reports from stored fingerprints")(report_cli.report)


def run() -> None:
    """Execute the root CLI."""

    app()


__all__ = ["app", "run"]
