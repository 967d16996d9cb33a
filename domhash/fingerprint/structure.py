"""Nested structure tree with sibling-run compression."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Hashable, List, Mapping, Optional, Tuple

from domhash.adapters.base import Element, element_children, tag_name

__all__ = ["DOMNodeShape", "extract_dom_structure_tree"]

# (shape, signature); equal signatures mean equal subtrees including child repeats
_Entry = Tuple["DOMNodeShape", int]


@dataclass(frozen=True)
class DOMNodeShape:
    tag: str
    hidden: bool = False
    children: Tuple["DOMNodeShape", ...] = field(default_factory=tuple)
    repeat: int = 1

    def to_dict(self) -> Dict[str, Any]:
        root: Dict[str, Any] = {}
        stack: List[Tuple[DOMNodeShape, Dict[str, Any]]] = [(self, root)]
        while stack:
            shape, payload = stack.pop()
            payload["tag"] = shape.tag
            if shape.hidden:
                payload["hidden"] = True
            if shape.children:
                payload["children"] = [{} for _ in shape.children]
                stack.extend(zip(shape.children, payload["children"]))
            if shape.repeat > 1:
                payload["repeat"] = shape.repeat
        return root

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DOMNodeShape":
        stack: List[Tuple[Mapping[str, Any], bool]] = [(payload, False)]
        built: List[List[DOMNodeShape]] = [[]]
        while stack:
            item, expanded = stack.pop()
            if not expanded:
                stack.append((item, True))
                built.append([])
                stack.extend((child, False) for child in reversed(item.get("children") or []))
                continue
            children = tuple(built.pop())
            built[-1].append(
                cls(
                    tag=str(item["tag"]),
                    hidden=bool(item.get("hidden", False)),
                    children=children,
                    repeat=int(item.get("repeat", 1)),
                )
            )
        return built[0][0]


def extract_dom_structure_tree(
    root: Element,
    hidden_lookup: Optional[Mapping[Element, bool]] = None,
) -> DOMNodeShape:
    """Build the structure tree for ``root``.

    Adjacent siblings with identical shape are merged into one entry carrying
    ``repeat``. ``hidden_lookup`` maps elements to their hidden flag, usually from
    :func:`domhash.fingerprint.layout.hidden_lookup`. The walk keeps its own stack
    so arbitrarily deep documents are fine.
    """

    signatures: Dict[Hashable, int] = {}
    stack: List[Tuple[Element, bool]] = [(root, False)]
    pending: List[List[_Entry]] = [[]]
    while stack:
        element, expanded = stack.pop()
        if not expanded:
            stack.append((element, True))
            pending.append([])
            stack.extend((child, False) for child in reversed(element_children(element)))
            continue

        children = _collapse_runs(pending.pop())
        hidden = bool(hidden_lookup.get(element, False)) if hidden_lookup else False
        shape = DOMNodeShape(tag=tag_name(element), hidden=hidden, children=tuple(child for child, _ in children))
        key = (shape.tag, hidden, tuple((signature, child.repeat) for child, signature in children))
        pending[-1].append((shape, signatures.setdefault(key, len(signatures))))
    return pending[0][0][0]


def _collapse_runs(children: List[_Entry]) -> List[_Entry]:
    collapsed: List[_Entry] = []
    index = 0
    while index < len(children):
        current, signature = children[index]
        count = 1
        while index + count < len(children) and children[index + count][1] == signature:
            count += 1
        collapsed.append((replace(current, repeat=count) if count > 1 else current, signature))
        index += count
    return collapsed
