"""CLI for comparing two documents."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from domhash.cli._common import CLI_ERRORS, configure_logging, echo_comparison, fail, parse_attr_list
from domhash.core import domhash
from domhash.fingerprint.similarity import compare_results
from domhash.options import DomHashOptions
from domhash.report import format_result, write_report

app = typer.Typer(add_completion=False, help="Compare the structure of two documents.")


@app.command()
def compare_inputs(
    source_a: str = typer.Argument(..., help="Baseline HTML string, file path, or URL"),
    source_b: str = typer.Argument(..., help="Candidate HTML string, file path, or URL"),
    algorithm: str = typer.Option("sha256", "--algorithm", "-a", help="Hashing algorithm"),
    include_attrs: Optional[str] = typer.Option(
        None, "--include-attrs", "-i", help="Comma-separated list of attributes to include"
    ),
    include_data_aria: bool = typer.Option(False, "--include-data-aria", help="Keep data-* and aria-* attributes"),
    text: bool = typer.Option(False, "--text", help="Keep non-blank text nodes in the canonical string"),
    shape_metric: str = typer.Option(
        "jaccard", "--shape-metric", "-m", help="Shape similarity metric: jaccard, lcs, cosine, ted"
    ),
    layout_metric: str = typer.Option("jaccard", "--layout-metric", help="Layout similarity metric"),
    layout_aware: bool = typer.Option(False, "--layout-aware", "-l", help="Also compare layout vectors"),
    diff: bool = typer.Option(False, "--diff", "-d", help="Show the structural diff"),
    parser: str = typer.Option("html.parser", "--parser", help="Element tree provider: html.parser, lxml, json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Render as json, markdown or html"),
    out: Optional[Path] = typer.Option(None, "--out", help="Write the rendered comparison to this path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Fingerprint both inputs with the same options and report how similar they are."""

    configure_logging(verbose)
    options = DomHashOptions(
        algorithm=algorithm,
        include_attributes=parse_attr_list(include_attrs),
        include_data_and_aria_attributes=include_data_aria,
        include_text=text,
        shape_vector=True,
        layout_aware=layout_aware,
        parser=parser,
    )

    try:
        result_a = domhash(source_a, options)
        result_b = domhash(source_b, options)
        comparison = compare_results(
            result_a,
            result_b,
            shape_metric=shape_metric,
            layout_metric=layout_metric,
            include_diff=diff,
        )
    except CLI_ERRORS as exc:
        fail(exc)

    if output is None and out is None:
        typer.echo(f"Hash A: {comparison.hash_a}")
        typer.echo(f"Hash B: {comparison.hash_b}")
        echo_comparison(comparison)
        return

    fmt = output or "json"
    try:
        if out is not None:
            write_report(comparison, fmt, out)
            typer.secho(f"Comparison written to {out}", fg=typer.colors.GREEN)
        else:
            typer.echo(format_result(comparison, fmt))
    except CLI_ERRORS as exc:
        fail(exc)


def run() -> None:
    """Entrypoint for ``python -m domhash.cli.compare`` usage."""

    app()


__all__ = ["app", "compare_inputs", "run"]
