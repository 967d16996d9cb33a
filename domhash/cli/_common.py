"""Helpers shared by the domhash CLI commands."""
from __future__ import annotations

import json
import logging
from typing import List, NoReturn, Optional

import typer

from domhash.errors import DomHashError
from domhash.fingerprint.scoring import ScoreBreakdown
from domhash.fingerprint.similarity import ComparisonResult
from domhash.report import format_percent

# reported as [ERROR] instead of a traceback; json.dumps with indent recurses per nesting level
CLI_ERRORS = (DomHashError, ValueError, OSError, RecursionError)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def fail(message: object) -> NoReturn:
    typer.secho(f"[ERROR] {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def parse_attr_list(value: Optional[str]) -> Optional[List[str]]:
    """Split ``"id, class,,href"`` into ``["id", "class", "href"]``."""

    if not value:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def echo_score(name: str, score: ScoreBreakdown) -> None:
    typer.echo(f"{name}: {score.emoji} {score.label} ({format_percent(score.score)})")
    breakdown = ", ".join(f"{key}={value * 100:.1f}%" for key, value in score.breakdown.items())
    typer.echo(f"Breakdown: {breakdown}")


def echo_comparison(comparison: ComparisonResult) -> None:
    typer.echo(f"Structural similarity: {format_percent(comparison.similarity)}")
    if comparison.shape_similarity is not None:
        typer.echo(f"Shape similarity ({comparison.shape_metric.label}): {format_percent(comparison.shape_similarity)}")
    if comparison.layout_similarity is not None:
        typer.echo(f"Layout similarity ({comparison.layout_metric.label}): {format_percent(comparison.layout_similarity)}")
    if comparison.diff is not None:
        typer.echo("\nStructural Diff:")
        for line in comparison.diff:
            typer.echo(line)


def echo_json(label: str, payload: object) -> None:
    typer.echo(f"{label}: {json.dumps(payload, ensure_ascii=False)}")
