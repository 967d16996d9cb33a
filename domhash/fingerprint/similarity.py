"""Similarity metrics between canonical strings and shape vectors."""
from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from domhash.errors import UnsupportedAlgorithm
from domhash.fingerprint.diff import structural_diff

Tokens = Sequence[str]

__all__ = [
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
]


def levenshtein(a: str, b: str) -> int:
    """Edit distance with unit insert/delete/substitute costs, one row of memory."""

    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)
    row = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        diagonal, row[0] = row[0], i
        for j, char_b in enumerate(b, start=1):
            above = row[j]
            if char_a == char_b:
                row[j] = diagonal
            else:
                row[j] = min(diagonal, above, row[j - 1]) + 1
            diagonal = above
    return row[len(b)]


def compare_structures(a: str, b: str) -> float:
    """``1 - levenshtein / max length`` over two canonical strings."""

    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein(a, b) / longest


def compare_shape_vectors(a: Tokens, b: Tokens) -> float:
    """Jaccard similarity of the token sets."""

    set_a, set_b = set(a), set(b)
    union = set_a | set_b
    if not union:
        return 1.0
    return len(set_a & set_b) / len(union)


compare_shape_jaccard = compare_shape_vectors


def compare_shape_lcs(a: Tokens, b: Tokens) -> float:
    """Longest common subsequence length over the longer sequence's length."""

    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    previous = [0] * (len(b) + 1)
    for token_a in a:
        current = [0] * (len(b) + 1)
        for j, token_b in enumerate(b, start=1):
            if token_a == token_b:
                current[j] = previous[j - 1] + 1
            else:
                current[j] = max(previous[j], current[j - 1])
        previous = current
    return previous[len(b)] / longest


def compare_shape_cosine(a: Tokens, b: Tokens) -> float:
    """Cosine similarity of token frequency vectors; ``1.0`` when either is empty."""

    freq_a, freq_b = Counter(a), Counter(b)
    dot = sum(freq_a[token] * freq_b[token] for token in freq_a.keys() & freq_b.keys())
    mag_a = sum(count * count for count in freq_a.values())
    mag_b = sum(count * count for count in freq_b.values())
    if mag_a == 0 or mag_b == 0:
        return 1.0
    return dot / math.sqrt(mag_a * mag_b)


def compare_tree_edit_distance(a: Tokens, b: Tokens) -> float:
    """Approximate tree edit similarity.

    This is not a tree edit distance: the token sequences are joined with ``,``
    and compared with :func:`compare_structures`. Callers rely on it being cheap.
    """

    return compare_structures(",".join(a), ",".join(b))


class ShapeMetric(str, Enum):
    JACCARD = "jaccard"
    LCS = "lcs"
    COSINE = "cosine"
    TED = "ted"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, name: Union[str, "ShapeMetric"]) -> "ShapeMetric":
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError as exc:
            supported = ", ".join(item.value for item in cls)
            raise UnsupportedAlgorithm(f"Unknown shape similarity metric '{name}'. Choose from: {supported}") from exc


_LABELS = {
    ShapeMetric.JACCARD: "Jaccard",
    ShapeMetric.LCS: "LCS",
    ShapeMetric.COSINE: "Cosine",
    ShapeMetric.TED: "Tree Edit Distance",
}

_METRICS: Dict[ShapeMetric, Callable[[Tokens, Tokens], float]] = {
    ShapeMetric.JACCARD: compare_shape_vectors,
    ShapeMetric.LCS: compare_shape_lcs,
    ShapeMetric.COSINE: compare_shape_cosine,
    ShapeMetric.TED: compare_tree_edit_distance,
}


def compare_shapes(a: Tokens, b: Tokens, metric: Union[str, ShapeMetric] = ShapeMetric.JACCARD) -> float:
    """Compare two shape vectors with the metric selected by name."""

    return _METRICS[ShapeMetric.parse(metric)](a, b)


def compare_layout_vectors(a: Tokens, b: Tokens, metric: Union[str, ShapeMetric] = ShapeMetric.JACCARD) -> float:
    """Compare two layout vectors; Jaccard unless another metric is named."""

    return compare_shapes(a, b, metric)


@dataclass(frozen=True)
class ComparisonResult:
    hash_a: str
    hash_b: str
    similarity: float
    shape_metric: ShapeMetric = ShapeMetric.JACCARD
    layout_metric: ShapeMetric = ShapeMetric.JACCARD
    shape_similarity: Optional[float] = None
    layout_similarity: Optional[float] = None
    diff: Optional[List[str]] = field(default=None)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "hashA": self.hash_a,
            "hashB": self.hash_b,
            "similarity": self.similarity,
        }
        if self.shape_similarity is not None:
            payload["shapeSimilarity"] = self.shape_similarity
            payload["shapeMetric"] = self.shape_metric.value
        if self.layout_similarity is not None:
            payload["layoutSimilarity"] = self.layout_similarity
            payload["layoutMetric"] = self.layout_metric.value
        if self.diff is not None:
            payload["diff"] = list(self.diff)
        return payload


def compare_results(
    result_a: Any,
    result_b: Any,
    *,
    shape_metric: Union[str, ShapeMetric] = ShapeMetric.JACCARD,
    layout_metric: Union[str, ShapeMetric] = ShapeMetric.JACCARD,
    include_diff: bool = False,
) -> ComparisonResult:
    """Compare two :class:`~domhash.core.engine.DomHashResult` objects."""

    shape_metric = ShapeMetric.parse(shape_metric)
    layout_metric = ShapeMetric.parse(layout_metric)

    shape_similarity = None
    if result_a.shape is not None and result_b.shape is not None:
        shape_similarity = compare_shapes(result_a.shape, result_b.shape, shape_metric)

    layout_similarity = None
    if result_a.layout_shape is not None and result_b.layout_shape is not None:
        layout_similarity = compare_layout_vectors(result_a.layout_shape, result_b.layout_shape, layout_metric)

    return ComparisonResult(
        hash_a=result_a.hash,
        hash_b=result_b.hash,
        similarity=compare_structures(result_a.canonical, result_b.canonical),
        shape_metric=shape_metric,
        layout_metric=layout_metric,
        shape_similarity=shape_similarity,
        layout_similarity=layout_similarity,
        diff=structural_diff(result_a.canonical, result_b.canonical) if include_diff else None,
    )
