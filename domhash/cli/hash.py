"""CLI for fingerprinting a single document."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from domhash.cli._common import CLI_ERRORS, configure_logging, echo_json, echo_score, fail, parse_attr_list
from domhash.core import DomHashResult, domhash
from domhash.options import DomHashOptions
from domhash.utils.io import write_json

app = typer.Typer(add_completion=False, help="Compute the DOM hash of one document.")


def _print_result(result: DomHashResult) -> None:
    typer.echo(f"Hash: {result.hash}")
    typer.echo(f"Stats: tags={result.tag_count}, depth={result.depth}")
    if result.shape is not None:
        echo_json("Shape", result.shape)
    if result.layout_hash is not None:
        echo_json("Layout Shape", result.layout_shape)
        typer.echo(f"Layout Hash: {result.layout_hash}")
    if result.resilience is not None:
        echo_score("Resilience", result.resilience)
    if result.structural is not None:
        echo_score("Structural", result.structural)
    if result.structure_tree is not None:
        typer.echo("Structure Tree:")
        typer.echo(json.dumps(result.structure_tree.to_dict(), indent=2))


@app.command()
def hash_input(
    source: str = typer.Argument(..., help="HTML string, file path, or URL"),
    algorithm: str = typer.Option(
        "sha256", "--algorithm", "-a", help="Hashing algorithm: sha256, murmur3, blake, simhash, minhash"
    ),
    include_attrs: Optional[str] = typer.Option(
        None, "--include-attrs", "-i", help="Comma-separated list of attributes to include"
    ),
    include_data_aria: bool = typer.Option(False, "--include-data-aria", help="Keep data-* and aria-* attributes"),
    text: bool = typer.Option(False, "--text", help="Keep non-blank text nodes in the canonical string"),
    shape_vector: bool = typer.Option(False, "--shape-vector", "-s", help="Output the compressed shape vector"),
    layout_aware: bool = typer.Option(False, "--layout-aware", "-l", help="Enable layout-aware hashing"),
    resilience: bool = typer.Option(False, "--resilience", "-r", help="Output the resilience score"),
    structural: bool = typer.Option(False, "--structural", help="Output the structural score"),
    structure_tree: bool = typer.Option(False, "--structure-tree", help="Output the compressed structure tree"),
    parser: str = typer.Option("html.parser", "--parser", help="Element tree provider: html.parser, lxml, json"),
    config: Optional[Path] = typer.Option(
        None, "--config", exists=True, readable=True, dir_okay=False, help="Scoring config YAML"
    ),
    out: Optional[Path] = typer.Option(None, "--out", help="Write the fingerprint JSON to this path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Fingerprint ``source`` and print the hash plus any requested extras."""

    configure_logging(verbose)
    options = DomHashOptions(
        algorithm=algorithm,
        include_attributes=parse_attr_list(include_attrs),
        include_data_and_aria_attributes=include_data_aria,
        include_text=text,
        shape_vector=shape_vector,
        layout_aware=layout_aware,
        resilience=resilience,
        structural=structural,
        structure_tree=structure_tree,
        parser=parser,
        scoring_config=str(config) if config else None,
    )

    try:
        result = domhash(source, options)
        _print_result(result)
    except CLI_ERRORS as exc:
        fail(exc)

    if out is not None:
        try:
            write_json(out, result.to_dict())
        except CLI_ERRORS as exc:
            fail(f"Failed to write fingerprint: {exc}")
        typer.secho(f"Fingerprint written to {out}", fg=typer.colors.GREEN)


def run() -> None:
    """Entrypoint for ``python -m domhash.cli.hash`` usage."""

    app()


__all__ = ["app", "hash_input", "run"]
