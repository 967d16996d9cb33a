"""Heuristic resilience and structural scores for shape vectors."""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

import yaml

from domhash.utils.mathx import longest_run, mean, ratio

SCORING_PATH = Path(__file__).resolve().with_name("scoring.yaml")

STRONG = ("Strong", "✅")
MODERATE = ("Moderate", "⚠️")
FRAGILE = ("Fragile", "❌")

__all__ = [
    "SCORING_PATH",
    "ScoreBreakdown",
    "ScoringConfig",
    "compute_resilience_score",
    "compute_structural_score",
    "label_for",
    "load_scoring_config",
]


@dataclass(frozen=True)
class ScoringConfig:
    fragile_below: float = 0.5
    moderate_below: float = 0.85
    depth_soft_cap: int = 100
    repetition_cap: int = 20
    leaf_tags: Tuple[str, ...] = ("div", "span")


@dataclass(frozen=True)
class ScoreBreakdown:
    score: float
    breakdown: Dict[str, float] = field(default_factory=dict)
    label: str = STRONG[0]
    emoji: str = STRONG[1]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "breakdown": dict(self.breakdown),
            "label": self.label,
            "emoji": self.emoji,
        }


def load_scoring_config(path: str | Path | None = None) -> ScoringConfig:
    """Load scoring constants from ``path`` (defaults to the packaged ``scoring.yaml``)."""

    if path is None:
        return _default_config()
    return _read_config(Path(path))


@lru_cache(maxsize=1)
def _default_config() -> ScoringConfig:
    return _read_config(SCORING_PATH)


def _read_config(config_path: Path) -> ScoringConfig:
    with config_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle)
    if not data:
        return ScoringConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Scoring config '{config_path}' must define a mapping")

    defaults = ScoringConfig()
    labels = data.get("labels") or {}
    leaf_tags = data.get("leaf_tags")
    config = ScoringConfig(
        fragile_below=float(labels.get("fragile_below", defaults.fragile_below)),
        moderate_below=float(labels.get("moderate_below", defaults.moderate_below)),
        depth_soft_cap=int(data.get("depth_soft_cap", defaults.depth_soft_cap)),
        repetition_cap=int(data.get("repetition_cap", defaults.repetition_cap)),
        leaf_tags=tuple(str(tag).lower() for tag in leaf_tags) if leaf_tags is not None else defaults.leaf_tags,
    )
    if config.depth_soft_cap <= 0 or config.repetition_cap <= 0:
        raise ValueError(f"Scoring config '{config_path}' caps must be positive")
    if not 0.0 <= config.fragile_below <= config.moderate_below <= 1.0:
        raise ValueError(f"Scoring config '{config_path}' label thresholds must satisfy 0 <= fragile <= moderate <= 1")
    return config


def label_for(score: float, config: Optional[ScoringConfig] = None) -> Tuple[str, str]:
    """Return the ``(label, emoji)`` pair for ``score``."""

    config = config or load_scoring_config()
    if score < config.fragile_below:
        return FRAGILE
    if score < config.moderate_below:
        return MODERATE
    return STRONG


def compute_resilience_score(
    structure: Sequence[str],
    layout: Optional[Sequence[str]] = None,
    *,
    config: Optional[ScoringConfig] = None,
) -> ScoreBreakdown:
    """Estimate how much the fingerprint would move under small edits.

    ``structure`` is the raw per-element tag list (expand compressed shapes first)
    and ``layout`` the uncompressed ``tag:display`` tokens. Supplying ``layout``,
    even empty, swaps the depth penalty out of the average for the layout penalty.
    """

    config = config or load_scoring_config()
    total = len(structure)
    if total == 0:
        tag_penalty = depth_penalty = layout_penalty = 0.0
    else:
        tag_penalty = _variety_penalty(structure)
        depth_penalty = min(1.0, total / config.depth_soft_cap)
        layout_penalty = _variety_penalty([_display_of(entry) for entry in layout]) if layout else 0.0

    if layout is not None:
        penalties = [tag_penalty, layout_penalty]
    else:
        penalties = [tag_penalty, depth_penalty, layout_penalty]
    return _build_breakdown(
        penalties,
        {"tagPenalty": tag_penalty, "depthPenalty": depth_penalty, "layoutPenalty": layout_penalty},
        config,
    )


def compute_structural_score(
    structure: Sequence[str],
    *,
    config: Optional[ScoringConfig] = None,
) -> ScoreBreakdown:
    """Estimate markup informativeness from the raw tag sequence."""

    config = config or load_scoring_config()
    total = len(structure)
    if total == 0:
        tag_penalty = depth_penalty = repetition_penalty = leaf_penalty = 0.0
    else:
        tag_penalty = _variety_penalty(structure)
        depth_penalty = min(1.0, total / config.depth_soft_cap)
        repetition_penalty = min(longest_run(structure) / config.repetition_cap, 1.0)
        leaf_penalty = ratio(sum(1 for tag in structure if tag in config.leaf_tags), total)

    breakdown = {
        "tagPenalty": tag_penalty,
        "depthPenalty": depth_penalty,
        "repetitionPenalty": repetition_penalty,
        "leafPenalty": leaf_penalty,
    }
    return _build_breakdown(list(breakdown.values()), breakdown, config)


def _variety_penalty(values: Sequence[str]) -> float:
    if not values:
        return 0.0
    return 1.0 - min(ratio(len(set(values)), len(values)), 1.0)


def _display_of(entry: str) -> str:
    _tag, _sep, display = entry.partition(":")
    return display


def _build_breakdown(penalties: Sequence[float], breakdown: Dict[str, float], config: ScoringConfig) -> ScoreBreakdown:
    score = max(0.0, 1.0 - mean(penalties))
    label, emoji = label_for(score, config)
    return ScoreBreakdown(score=score, breakdown=breakdown, label=label, emoji=emoji)
