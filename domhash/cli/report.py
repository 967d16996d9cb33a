"""Report generation from stored fingerprint files."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from domhash.cli._common import CLI_ERRORS, echo_comparison, fail
from domhash.core import DomHashResult
from domhash.fingerprint.similarity import compare_results
from domhash.report import write_report
from domhash.utils.io import read_json
from domhash.utils.validate import validate_fingerprint_schema

app = typer.Typer(add_completion=False, help="Render comparison reports from fingerprint JSON files")


def _load_fingerprint(path: Path) -> DomHashResult:
    try:
        document = read_json(path)
        validate_fingerprint_schema(document)
    except CLI_ERRORS as exc:
        fail(f"Failed to load fingerprint '{path}': {exc}")
    return DomHashResult.from_dict(document)


@app.command()
def report(
    a: Path = typer.Option(..., "--a", exists=True, readable=True, dir_okay=False, help="Baseline fingerprint"),
    b: Path = typer.Option(..., "--b", exists=True, readable=True, dir_okay=False, help="Candidate fingerprint"),
    shape_metric: str = typer.Option("jaccard", "--shape-metric", "-m", help="Shape similarity metric"),
    layout_metric: str = typer.Option("jaccard", "--layout-metric", help="Layout similarity metric"),
    diff: bool = typer.Option(True, "--diff/--no-diff", help="Include the structural diff"),
    md: Optional[Path] = typer.Option(None, "--md", help="Write Markdown report to this path"),
    html: Optional[Path] = typer.Option(None, "--html", help="Write HTML report to this path"),
    json_out: Optional[Path] = typer.Option(None, "--json", help="Write JSON report to this path"),
) -> None:
    """Compare fingerprints written by ``domhash hash --out``."""

    fp_a = _load_fingerprint(a)
    fp_b = _load_fingerprint(b)

    try:
        comparison = compare_results(
            fp_a,
            fp_b,
            shape_metric=shape_metric,
            layout_metric=layout_metric,
            include_diff=diff,
        )
    except CLI_ERRORS as exc:
        fail(exc)

    targets = [("markdown", md), ("html", html), ("json", json_out)]
    written = False
    for fmt, destination in targets:
        if destination is None:
            continue
        try:
            write_report(comparison, fmt, destination)
        except OSError as exc:
            fail(f"Failed to write {fmt} report: {exc}")
        typer.echo(f"{fmt.capitalize()} report written to {destination}")
        written = True

    if not written:
        echo_comparison(comparison)


def run() -> None:
    """Entrypoint for ``python -m domhash.cli.report`` usage."""

    app()


__all__ = ["app", "report", "run"]
