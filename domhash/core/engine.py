"""Fingerprint orchestration: run every pass over one tree and aggregate the results."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional

from domhash.adapters import parse_input
from domhash.adapters.base import Element
from domhash.fingerprint.canonical import canonicalize, expand_shape
from domhash.fingerprint.hasher import HashAlgorithm, digest
from domhash.fingerprint.layout import (
    extract_layout_features,
    hidden_lookup,
    layout_shape,
    layout_tokens,
    serialize_layout_features,
)
from domhash.fingerprint.scoring import (
    ScoreBreakdown,
    compute_resilience_score,
    compute_structural_score,
    load_scoring_config,
)
from domhash.fingerprint.structure import DOMNodeShape, extract_dom_structure_tree
from domhash.options import DomHashOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DomHashResult:
    """Everything computed for one document. Optional parts are ``None`` when not requested."""

    hash: str
    canonical: str
    tag_count: int
    depth: int
    algorithm: str = HashAlgorithm.SHA256.value
    shape: Optional[List[str]] = None
    layout_hash: Optional[str] = None
    layout_canonical: Optional[str] = None
    layout_shape: Optional[List[str]] = None
    resilience: Optional[ScoreBreakdown] = None
    structural: Optional[ScoreBreakdown] = None
    structure_tree: Optional[DOMNodeShape] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "hash": self.hash,
            "algorithm": self.algorithm,
            "stats": {"tagCount": self.tag_count, "depth": self.depth},
            "canonical": self.canonical,
        }
        if self.shape is not None:
            payload["shape"] = list(self.shape)
        if self.layout_hash is not None:
            payload["layoutHash"] = self.layout_hash
            payload["layoutCanonical"] = self.layout_canonical
            payload["layoutShape"] = list(self.layout_shape or [])
        for prefix, score in (("resilience", self.resilience), ("structural", self.structural)):
            if score is not None:
                payload[f"{prefix}Score"] = score.score
                payload[f"{prefix}Breakdown"] = dict(score.breakdown)
                payload[f"{prefix}Label"] = score.label
                payload[f"{prefix}Emoji"] = score.emoji
        if self.structure_tree is not None:
            payload["structureTree"] = self.structure_tree.to_dict()
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DomHashResult":
        """Rebuild a result from :meth:`to_dict` output."""

        stats = payload.get("stats", {})
        tree = payload.get("structureTree")
        return cls(
            hash=payload["hash"],
            canonical=payload["canonical"],
            tag_count=int(stats.get("tagCount", 0)),
            depth=int(stats.get("depth", 0)),
            algorithm=payload.get("algorithm", HashAlgorithm.SHA256.value),
            shape=list(payload["shape"]) if "shape" in payload else None,
            layout_hash=payload.get("layoutHash"),
            layout_canonical=payload.get("layoutCanonical"),
            layout_shape=list(payload["layoutShape"]) if "layoutShape" in payload else None,
            resilience=_score_from_dict(payload, "resilience"),
            structural=_score_from_dict(payload, "structural"),
            structure_tree=DOMNodeShape.from_dict(tree) if tree else None,
        )


def domhash(source: Any, options: Optional[DomHashOptions] = None, **overrides: Any) -> DomHashResult:
    """Fingerprint ``source`` (markup, path, URL or element tree).

    Keyword ``overrides`` replace individual fields of ``options``.
    """

    options = options or DomHashOptions()
    if overrides:
        options = replace(options, **overrides)
    root = parse_input(source, parser=options.parser)
    return fingerprint_element(root, options)


def fingerprint_element(root: Element, options: Optional[DomHashOptions] = None) -> DomHashResult:
    """Run the canonical, layout, scoring and structure passes over ``root``."""

    options = options or DomHashOptions()
    algorithm = HashAlgorithm.parse(options.algorithm)
    scoring = load_scoring_config(options.scoring_config)

    structure = canonicalize(root, options)
    hash_value = digest(structure.canonical, algorithm)
    logger.debug(
        "Canonicalized %d elements (depth %d) into %d chars",
        structure.tag_count,
        structure.depth,
        len(structure.canonical),
    )

    features = extract_layout_features(root) if options.layout_aware else None
    layout_fields: Dict[str, Any] = {}
    raw_layout: Optional[List[str]] = None
    if features is not None:
        layout_canonical = serialize_layout_features(features)
        raw_layout = layout_tokens(features)
        layout_fields = {
            "layout_hash": digest(layout_canonical, algorithm),
            "layout_canonical": layout_canonical,
            "layout_shape": layout_shape(features),
        }

    raw_tags = expand_shape(structure.shape)
    resilience = compute_resilience_score(raw_tags, raw_layout, config=scoring) if options.resilience else None
    structural = compute_structural_score(raw_tags, config=scoring) if options.structural else None

    tree = None
    if options.structure_tree:
        lookup = hidden_lookup(root, features) if features is not None else None
        tree = extract_dom_structure_tree(root, lookup)

    return DomHashResult(
        hash=hash_value,
        canonical=structure.canonical,
        tag_count=structure.tag_count,
        depth=structure.depth,
        algorithm=algorithm.value,
        shape=structure.shape if options.shape_vector else None,
        resilience=resilience,
        structural=structural,
        structure_tree=tree,
        **layout_fields,
    )


def _score_from_dict(payload: Mapping[str, Any], prefix: str) -> Optional[ScoreBreakdown]:
    if f"{prefix}Score" not in payload:
        return None
    return ScoreBreakdown(
        score=float(payload[f"{prefix}Score"]),
        breakdown=dict(payload.get(f"{prefix}Breakdown", {})),
        label=payload.get(f"{prefix}Label", ""),
        emoji=payload.get(f"{prefix}Emoji", ""),
    )


__all__ = ["DomHashResult", "domhash", "fingerprint_element"]
