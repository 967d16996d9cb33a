"""Structural fingerprinting of HTML documents."""

from .adapters import parse_input
from .core import DomHashResult, domhash, fingerprint_element
from .errors import DomHashError, EnvironmentUnavailable, InvalidInput, UnsupportedAlgorithm
from .fingerprint import (
    ComparisonResult,
    DOMNodeShape,
    HashAlgorithm,
    LayoutFeature,
    ScoreBreakdown,
    ShapeMetric,
    canonicalize,
    compare_layout_vectors,
    compare_results,
    compare_shape_cosine,
    compare_shape_jaccard,
    compare_shape_lcs,
    compare_shape_vectors,
    compare_shapes,
    compare_structures,
    compare_tree_edit_distance,
    compute_resilience_score,
    compute_structural_score,
    digest,
    extract_dom_structure_tree,
    extract_layout_features,
    serialize_layout_features,
    structural_diff,
)
from .options import DomHashOptions
from .report import format_result, write_report

__version__ = "0.1.0"

__all__ = [
    "parse_input",
    "DomHashResult",
    "domhash",
    "fingerprint_element",
    "DomHashError",
    "EnvironmentUnavailable",
    "InvalidInput",
    "UnsupportedAlgorithm",
    "ComparisonResult",
    "DOMNodeShape",
    "HashAlgorithm",
    "LayoutFeature",
    "ScoreBreakdown",
    "ShapeMetric",
    "canonicalize",
    "compare_layout_vectors",
    "compare_results",
    "compare_shape_cosine",
    "compare_shape_jaccard",
    "compare_shape_lcs",
    "compare_shape_vectors",
    "compare_shapes",
    "compare_structures",
    "compare_tree_edit_distance",
    "compute_resilience_score",
    "compute_structural_score",
    "digest",
    "extract_dom_structure_tree",
    "extract_layout_features",
    "serialize_layout_features",
    "structural_diff",
    "DomHashOptions",
    "format_result",
    "write_report",
]
