from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from domhash.cli import compare as compare_cli
from domhash.cli import hash as hash_cli
from domhash.cli import main as main_cli
from domhash.cli import report as report_cli
from domhash.utils.io import read_json
from domhash.utils.validate import validate_fingerprint_schema

runner = CliRunner()


def test_hash_prints_requested_sections() -> None:
    result = runner.invoke(
        hash_cli.app,
        ["<ul><li></li><li></li></ul>", "--shape-vector", "--layout-aware", "--resilience"],
    )

    assert result.exit_code == 0, result.output
    assert "Hash: " in result.stdout
    assert 'Shape: ["ul", "li*2"]' in result.stdout
    assert 'Layout Shape: ["ul:block", "li:block*2"]' in result.stdout
    assert "Layout Hash: " in result.stdout
    assert "Resilience: " in result.stdout


def test_hash_writes_fingerprint(tmp_path: Path, article_path: Path) -> None:
    out = tmp_path / "fp" / "article.json"

    result = runner.invoke(
        hash_cli.app,
        [str(article_path), "--structural", "--structure-tree", "--algorithm", "blake", "--out", str(out)],
    )

    assert result.exit_code == 0, result.output
    document = read_json(out)
    validate_fingerprint_schema(document)
    assert document["algorithm"] == "blake"
    assert document["structureTree"]["tag"] == "html"


def test_hash_reports_errors() -> None:
    result = runner.invoke(hash_cli.app, ["<div></div>", "--algorithm", "md5"])

    assert result.exit_code == 1
    assert "[ERROR]" in result.output


def test_compare_prints_similarity_and_diff(article_path: Path, list_path: Path) -> None:
    result = runner.invoke(
        compare_cli.app,
        [str(article_path), str(list_path), "--shape-metric", "ted", "--layout-aware", "--diff"],
    )

    assert result.exit_code == 0, result.output
    assert "Structural similarity: " in result.stdout
    assert "Shape similarity (Tree Edit Distance): " in result.stdout
    assert "Layout similarity (Jaccard): " in result.stdout
    assert "Structural Diff:" in result.stdout


def test_compare_json_output() -> None:
    result = runner.invoke(compare_cli.app, ["<div><p></p></div>", "<div><p></p></div>", "--output", "json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["similarity"] == 1.0
    assert payload["shapeMetric"] == "jaccard"
    assert payload["hashA"] == payload["hashB"]


def test_compare_writes_html(tmp_path: Path) -> None:
    out = tmp_path / "cmp.html"

    result = runner.invoke(
        compare_cli.app,
        ["<div><p></p></div>", "<div><span></span></div>", "-o", "html", "--out", str(out), "-d"],
    )

    assert result.exit_code == 0, result.output
    assert "Structural Diff" in out.read_text(encoding="utf-8")


def test_compare_rejects_unknown_metric() -> None:
    result = runner.invoke(compare_cli.app, ["<div></div>", "<div></div>", "--shape-metric", "euclid"])

    assert result.exit_code == 1
    assert "[ERROR]" in result.output


def test_report_from_stored_fingerprints(tmp_path: Path, article_path: Path, list_path: Path) -> None:
    fp_a = tmp_path / "a.json"
    fp_b = tmp_path / "b.json"
    for source, dest in ((article_path, fp_a), (list_path, fp_b)):
        written = runner.invoke(hash_cli.app, [str(source), "--shape-vector", "--out", str(dest)])
        assert written.exit_code == 0, written.output

    md_path = tmp_path / "report.md"
    result = runner.invoke(report_cli.app, ["--a", str(fp_a), "--b", str(fp_b), "--md", str(md_path)])

    assert result.exit_code == 0, result.output
    text = md_path.read_text(encoding="utf-8")
    assert "| Shape (Jaccard) |" in text
    assert "## Structural Diff" in text


def test_report_rejects_invalid_fingerprint(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text('{"hash": "zz"}', encoding="utf-8")

    result = runner.invoke(report_cli.app, ["--a", str(bad), "--b", str(bad)])

    assert result.exit_code == 1
    assert "[ERROR]" in result.output


def test_root_app_dispatches_subcommands() -> None:
    result = runner.invoke(main_cli.app, ["hash", "<div></div>"])

    assert result.exit_code == 0, result.output
    assert "Hash: " in result.stdout
    assert "Stats: tags=1, depth=0" in result.stdout


def test_hash_handles_deep_nesting() -> None:
    depth = 1100
    result = runner.invoke(hash_cli.app, ["<div>" * depth + "</div>" * depth, "--shape-vector"])

    assert result.exit_code == 0, result.output
    assert f'Shape: ["div*{depth}"]' in result.stdout
