"""Canonicalization, layout, structure, scoring, digest and similarity utilities."""

from .canonical import CanonicalizeResult, StructureNode, canonicalize, compress_shape, expand_shape
from .diff import structural_diff
from .hasher import HashAlgorithm, digest
from .layout import (
    LayoutFeature,
    extract_layout_features,
    hidden_lookup,
    layout_shape,
    layout_tokens,
    serialize_layout_features,
)
from .scoring import ScoreBreakdown, ScoringConfig, compute_resilience_score, compute_structural_score, load_scoring_config
from .similarity import (
    ComparisonResult,
    ShapeMetric,
    compare_layout_vectors,
    compare_results,
    compare_shape_cosine,
    compare_shape_jaccard,
    compare_shape_lcs,
    compare_shape_vectors,
    compare_shapes,
    compare_structures,
    compare_tree_edit_distance,
    levenshtein,
)
from .structure import DOMNodeShape, extract_dom_structure_tree

__all__ = [
    "CanonicalizeResult",
    "StructureNode",
    "canonicalize",
    "compress_shape",
    "expand_shape",
    "structural_diff",
    "HashAlgorithm",
    "digest",
    "LayoutFeature",
    "extract_layout_features",
    "hidden_lookup",
    "layout_shape",
    "layout_tokens",
    "serialize_layout_features",
    "ScoreBreakdown",
    "ScoringConfig",
    "compute_resilience_score",
    "compute_structural_score",
    "load_scoring_config",
    "ComparisonResult",
    "ShapeMetric",
    "compare_layout_vectors",
    "compare_results",
    "compare_shape_cosine",
    "compare_shape_jaccard",
    "compare_shape_lcs",
    "compare_shape_vectors",
    "compare_shapes",
    "compare_structures",
    "compare_tree_edit_distance",
    "levenshtein",
    "DOMNodeShape",
    "extract_dom_structure_tree",
]
