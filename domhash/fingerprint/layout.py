"""Layout feature extraction and serialization."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from domhash.adapters.base import STYLE_DEFAULTS, Element, iter_elements, tag_name
from domhash.fingerprint.canonical import compress_shape

__all__ = [
    "LayoutFeature",
    "extract_layout_features",
    "hidden_lookup",
    "layout_shape",
    "layout_tokens",
    "resolve_element_style",
    "serialize_layout_features",
]


@dataclass(frozen=True)
class LayoutFeature:
    tag: str
    display: str = STYLE_DEFAULTS["display"]
    visibility: str = STYLE_DEFAULTS["visibility"]
    opacity: str = STYLE_DEFAULTS["opacity"]
    position: str = STYLE_DEFAULTS["position"]
    is_hidden: bool = False

    @property
    def token(self) -> str:
        return f"{self.tag}:{self.display}"

    def serialize(self) -> str:
        flag = "H" if self.is_hidden else "V"
        return f"{self.tag}:{self.display}/{self.position}/{self.visibility}/{self.opacity}/{flag}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tag": self.tag,
            "display": self.display,
            "visibility": self.visibility,
            "opacity": self.opacity,
            "position": self.position,
            "isHidden": self.is_hidden,
        }


def resolve_element_style(element: Element) -> Dict[str, str]:
    """Return display/visibility/opacity/position for ``element``.

    Elements without a ``style_facts`` capability, or whose facts are incomplete,
    fall back to the defaults.
    """

    style_facts = getattr(element, "style_facts", None)
    facts: Mapping[str, Any] = {}
    if callable(style_facts):
        facts = style_facts() or {}

    resolved: Dict[str, str] = {}
    for prop, default in STYLE_DEFAULTS.items():
        value = facts.get(prop)
        resolved[prop] = str(value).strip() if value is not None and str(value).strip() else default
    resolved["opacity"] = _normalize_opacity(resolved["opacity"])
    return resolved


def extract_layout_features(root: Element) -> List[LayoutFeature]:
    """One :class:`LayoutFeature` per element, pre-order, root first."""

    features: List[LayoutFeature] = []
    for element in iter_elements(root):
        style = resolve_element_style(element)
        hidden = (
            style["display"] == "none"
            or style["visibility"] == "hidden"
            or float(style["opacity"]) == 0
        )
        features.append(
            LayoutFeature(
                tag=tag_name(element),
                display=style["display"],
                visibility=style["visibility"],
                opacity=style["opacity"],
                position=style["position"],
                is_hidden=hidden,
            )
        )
    return features


def serialize_layout_features(features: Sequence[LayoutFeature]) -> str:
    """Layout canonical string: ``tag:display/position/visibility/opacity/H|V`` joined by commas."""

    return ",".join(feature.serialize() for feature in features)


def layout_tokens(features: Sequence[LayoutFeature]) -> List[str]:
    return [feature.token for feature in features]


def layout_shape(features: Sequence[LayoutFeature]) -> List[str]:
    """Run-length compressed ``tag:display`` vector."""

    return compress_shape(layout_tokens(features))


def hidden_lookup(root: Element, features: Optional[Sequence[LayoutFeature]] = None) -> Dict[Element, bool]:
    """Map every element under ``root`` to its hidden flag."""

    if features is None:
        features = extract_layout_features(root)
    return {element: feature.is_hidden for element, feature in zip(iter_elements(root), features)}


def _normalize_opacity(raw: str) -> str:
    try:
        float(raw)
    except ValueError:
        return STYLE_DEFAULTS["opacity"]
    return raw
