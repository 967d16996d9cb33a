"""Render comparison results as JSON, Markdown or HTML."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader, select_autoescape

from domhash.fingerprint.similarity import ComparisonResult
from domhash.utils.io import ensure_parent_dir

FORMATS = ("json", "markdown", "html")

_TEMPLATE_DIR = Path(__file__).resolve().with_name("templates")
_TEMPLATES = {
    "markdown": "comparison.md.j2",
    "html": "comparison.html.j2",
}
_ALIASES = {"md": "markdown", "htm": "html"}


def format_percent(value: float) -> str:
    return f"{value * 100:.2f}%"


_ENV = Environment(
    loader=FileSystemLoader(_TEMPLATE_DIR),
    autoescape=select_autoescape(["html", "html.j2"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
_ENV.filters["pct"] = format_percent


def format_result(result: ComparisonResult, output_format: str) -> str:
    """Render ``result`` in ``output_format`` (``json``, ``markdown`` or ``html``)."""

    fmt = _ALIASES.get(output_format.lower(), output_format.lower())
    if fmt == "json":
        return json.dumps(result.to_dict(), ensure_ascii=False, indent=2)
    template_name = _TEMPLATES.get(fmt)
    if template_name is None:
        raise ValueError(f"Unsupported format: {output_format}. Choose from: {', '.join(FORMATS)}")
    return _ENV.get_template(template_name).render(report=_build_report_payload(result))


def write_report(result: ComparisonResult, output_format: str, destination: Path | str) -> Path:
    """Render ``result`` and write it to ``destination``."""

    path = ensure_parent_dir(destination)
    output = format_result(result, output_format)
    path.write_text(output if output.endswith("\n") else output + "\n", encoding="utf-8")
    return path


def _build_report_payload(result: ComparisonResult) -> Dict[str, Any]:
    return {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "hash_a": result.hash_a,
        "hash_b": result.hash_b,
        "identical": result.hash_a == result.hash_b,
        "similarity": result.similarity,
        "shape_similarity": result.shape_similarity,
        "shape_label": result.shape_metric.label,
        "layout_similarity": result.layout_similarity,
        "layout_label": result.layout_metric.label,
        "diff": result.diff,
    }


__all__ = ["FORMATS", "format_percent", "format_result", "write_report"]
