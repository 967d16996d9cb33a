"""Canonical serialization and run-length shape vectors for element trees."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Set, Tuple, Union

from domhash.adapters.base import Element, tag_name
from domhash.options import DomHashOptions

RUN_SEPARATOR = "*"
_EXCLUDED_PREFIXES = ("data-", "aria-")

__all__ = [
    "CanonicalizeResult",
    "StructureNode",
    "canonicalize",
    "compress_shape",
    "escape_text",
    "expand_shape",
    "filter_attributes",
    "serialize_structure",
]


@dataclass
class StructureNode:
    tag: str
    attributes: List[str]
    children: List[Union["StructureNode", str]] = field(default_factory=list)


@dataclass(frozen=True)
class CanonicalizeResult:
    canonical: str
    shape: List[str]
    tag_count: int
    depth: int


def canonicalize(root: Element, options: Optional[DomHashOptions] = None) -> CanonicalizeResult:
    """Serialize ``root`` into its canonical string and compressed shape vector."""

    options = options or DomHashOptions()
    allow_list = {name.lower() for name in options.include_attributes or ()}
    tags: List[str] = []
    max_depth = 0

    structure = StructureNode(tag=tag_name(root), attributes=[])
    stack: List[Tuple[Element, StructureNode, int]] = [(root, structure, 0)]
    while stack:
        element, node, depth = stack.pop()
        tags.append(node.tag)
        max_depth = max(max_depth, depth)
        node.attributes = filter_attributes(
            element.attributes(),
            allow_list,
            include_data_and_aria=options.include_data_and_aria_attributes,
        )

        pending: List[Tuple[Element, StructureNode, int]] = []
        for child in element.children():
            if isinstance(child, str):
                if options.include_text and child.strip():
                    node.children.append(child)
                continue
            child_node = StructureNode(tag=tag_name(child), attributes=[])
            node.children.append(child_node)
            pending.append((child, child_node, depth + 1))
        stack.extend(reversed(pending))

    return CanonicalizeResult(
        canonical=serialize_structure(structure),
        shape=compress_shape(tags),
        tag_count=len(tags),
        depth=max_depth,
    )


def filter_attributes(
    attributes: Iterable[Tuple[str, str]],
    allow_list: Set[str],
    *,
    include_data_and_aria: bool = False,
) -> List[str]:
    """Return the sorted, lowercased attribute names kept by the inclusion policy."""

    kept = set()
    for name, _value in attributes:
        lowered = name.lower()
        if not include_data_and_aria and lowered.startswith(_EXCLUDED_PREFIXES):
            continue
        if allow_list and lowered not in allow_list:
            continue
        kept.add(lowered)
    return sorted(kept)


def escape_text(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def serialize_structure(node: Union[StructureNode, str]) -> str:
    if isinstance(node, str):
        return escape_text(node)
    parts: List[str] = []
    # plain strings on the stack are already rendered output
    stack: List[Union[StructureNode, str]] = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue
        opening = f"{item.tag} {' '.join(item.attributes)}" if item.attributes else item.tag
        parts.append(f"<{opening}>")
        stack.append(f"</{item.tag}>")
        stack.extend(
            escape_text(child) if isinstance(child, str) else child for child in reversed(item.children)
        )
    return "".join(parts)


def compress_shape(tokens: Sequence[str]) -> List[str]:
    """Collapse maximal runs of identical tokens into ``token*n``."""

    compressed: List[str] = []
    last: Optional[str] = None
    count = 0
    for token in tokens:
        if token == last:
            count += 1
            continue
        if last is not None:
            compressed.append(_encode_run(last, count))
        last, count = token, 1
    if last is not None:
        compressed.append(_encode_run(last, count))
    return compressed


def expand_shape(tokens: Sequence[str]) -> List[str]:
    """Inverse of :func:`compress_shape`."""

    expanded: List[str] = []
    for token in tokens:
        base, sep, count = token.rpartition(RUN_SEPARATOR)
        if sep and count.isdigit() and int(count) >= 2:
            expanded.extend([base] * int(count))
        else:
            expanded.append(token)
    return expanded


def _encode_run(token: str, count: int) -> str:
    return f"{token}{RUN_SEPARATOR}{count}" if count > 1 else token
