from __future__ import annotations

from pathlib import Path

import pytest

from domhash import DomHashOptions, DomHashResult, domhash
from domhash.errors import UnsupportedAlgorithm
from domhash.fingerprint import compare_results, digest
from domhash.utils.validate import SchemaValidationError, validate_fingerprint_schema
from helpers import ARTICLE_HTML, LIST_HTML, node

FULL = DomHashOptions(
    shape_vector=True,
    layout_aware=True,
    resilience=True,
    structural=True,
    structure_tree=True,
)


def test_default_result_is_minimal() -> None:
    result = domhash(ARTICLE_HTML)

    assert result.hash == digest(result.canonical, "sha256")
    assert list(result.to_dict()) == ["hash", "algorithm", "stats", "canonical"]
    assert result.to_dict()["stats"] == {"tagCount": 9, "depth": 4}


def test_text_changes_do_not_move_the_hash() -> None:
    a = domhash("<p>first version</p>")
    b = domhash("<p>second version</p>")

    assert a.hash == b.hash
    assert domhash("<p>first version</p>", include_text=True).hash != domhash(
        "<p>second version</p>", include_text=True
    ).hash


def test_keyword_overrides_replace_options() -> None:
    result = domhash("<div></div>", DomHashOptions(shape_vector=True), algorithm="murmur3")

    assert result.algorithm == "murmur3"
    assert len(result.hash) == 8
    assert result.shape == ["div"]


def test_unsupported_algorithm_is_raised() -> None:
    with pytest.raises(UnsupportedAlgorithm):
        domhash("<div></div>", algorithm="crc32")


def test_full_result_matches_schema_and_round_trips() -> None:
    result = domhash(LIST_HTML, FULL)
    payload = result.to_dict()

    validate_fingerprint_schema(payload)
    assert DomHashResult.from_dict(payload) == result
    assert payload["shape"] == ["html", "body", "ul", "li", "a", "li", "a", "li", "a", "div", "span"]
    assert payload["layoutShape"][-2:] == ["div:none", "span:block"]
    assert payload["layoutHash"] == digest(payload["layoutCanonical"], "sha256")
    assert set(payload["resilienceBreakdown"]) == {"tagPenalty", "depthPenalty", "layoutPenalty"}
    assert set(payload["structuralBreakdown"]) == {
        "tagPenalty",
        "depthPenalty",
        "repetitionPenalty",
        "leafPenalty",
    }


def test_structure_tree_marks_hidden_elements() -> None:
    result = domhash(LIST_HTML, FULL)

    assert result.structure_tree.to_dict() == {
        "tag": "html",
        "children": [
            {
                "tag": "body",
                "children": [
                    {"tag": "ul", "children": [{"tag": "li", "children": [{"tag": "a"}], "repeat": 3}]},
                    {"tag": "div", "hidden": True, "children": [{"tag": "span"}]},
                ],
            }
        ],
    }


def test_layout_aware_resilience_averages_tag_and_layout() -> None:
    result = domhash(LIST_HTML, FULL)
    breakdown = result.resilience.breakdown

    expected = 1.0 - (breakdown["tagPenalty"] + breakdown["layoutPenalty"]) / 2
    assert result.resilience.score == pytest.approx(expected)


def test_synthetic_tree_is_fingerprinted_directly() -> None:
    tree = node("ul", node("li", style={"display": "none"}), node("li"))

    result = domhash(tree, FULL)

    assert result.canonical == "<ul><li></li><li></li></ul>"
    assert result.layout_canonical == "ul:block/static/visible/1/V,li:none/static/visible/1/H,li:block/static/visible/1/V"
    assert result.shape == ["ul", "li*2"]


def test_custom_scoring_config(tmp_path: Path) -> None:
    config_path = tmp_path / "scoring.yaml"
    config_path.write_text("labels:\n  fragile_below: 0.0\n  moderate_below: 0.0\n", encoding="utf-8")

    result = domhash(LIST_HTML, resilience=True, scoring_config=str(config_path))

    assert result.resilience.label == "Strong"


def test_compare_results_between_fingerprints() -> None:
    a = domhash("<ul><li></li><li></li></ul>", shape_vector=True, layout_aware=True)
    b = domhash("<ul><li></li><li></li><li></li></ul>", shape_vector=True, layout_aware=True)

    comparison = compare_results(a, b, shape_metric="lcs", include_diff=True)

    assert 0.0 < comparison.similarity < 1.0
    assert comparison.shape_similarity == 0.5
    assert comparison.layout_similarity == 1 / 3
    assert comparison.diff[-1] == "+ </ul>"
    assert list(comparison.to_dict()) == [
        "hashA",
        "hashB",
        "similarity",
        "shapeSimilarity",
        "shapeMetric",
        "layoutSimilarity",
        "layoutMetric",
        "diff",
    ]


def test_invalid_fingerprint_documents_are_rejected() -> None:
    with pytest.raises(SchemaValidationError):
        validate_fingerprint_schema({"hash": "not-hex", "canonical": ""})
    with pytest.raises(SchemaValidationError):
        validate_fingerprint_schema({"hash": "ab", "stats": {"tagCount": 1, "depth": 0}, "canonical": "", "extra": 1})


def test_deep_documents_fingerprint_with_every_pass() -> None:
    depth = 1200
    result = domhash("<div>" * depth + "</div>" * depth, FULL)

    assert result.tag_count == depth
    assert result.shape == [f"div*{depth}"]
    assert result.layout_shape == [f"div:block*{depth}"]
    assert result.structural.label == "Fragile"
    assert result.structure_tree.tag == "div"
