"""Synthetic element trees described as nested JSON objects."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from domhash.adapters.base import STYLE_DEFAULTS, parse_inline_style, register, resolve_style_facts
from domhash.errors import InvalidInput

ChildNode = Union["Node", str]


@dataclass(eq=False)
class Node:
    """In-memory element used for headless or synthetic trees.

    ``computed_style`` plays the role of a browser's computed style; when it is
    absent, the inline ``style`` attribute and then plain ``props`` are consulted.
    """

    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)
    child_nodes: List[ChildNode] = field(default_factory=list)
    computed_style: Optional[Dict[str, str]] = None
    props: Dict[str, str] = field(default_factory=dict)

    def attributes(self) -> Iterator[Tuple[str, str]]:
        return iter(self.attrs.items())

    def children(self) -> Iterator[ChildNode]:
        return iter(self.child_nodes)

    def style_facts(self) -> Dict[str, str]:
        inline = parse_inline_style(self._style_attribute())
        return resolve_style_facts(computed=self.computed_style, inline=inline, props=self.props)

    def _style_attribute(self) -> Optional[str]:
        for name, value in self.attrs.items():
            if name.lower() == "style":
                return value
        return None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Node":
        """Build a node from ``{"tag", "attributes", "children", "style", ...}``."""

        if not isinstance(payload, Mapping):
            raise InvalidInput(f"Expected an object describing an element, got {type(payload).__name__}")
        tag = payload.get("tag")
        if not tag or not isinstance(tag, str):
            raise InvalidInput("Element object is missing a 'tag' name")

        children: List[ChildNode] = []
        for child in payload.get("children", []) or []:
            if isinstance(child, str):
                children.append(child)
            else:
                children.append(cls.from_dict(child))

        attributes = {str(name): "" if value is None else str(value) for name, value in (payload.get("attributes") or {}).items()}
        computed = payload.get("style")
        props = {prop: str(payload[prop]) for prop in STYLE_DEFAULTS if prop in payload}
        return cls(
            tag=tag,
            attrs=attributes,
            child_nodes=children,
            computed_style=dict(computed) if isinstance(computed, Mapping) else None,
            props=props,
        )


@register
class JsonTreeProvider:
    """Builds a :class:`Node` tree from a JSON document or decoded mapping."""

    name = "json"

    def parse(self, source: Any) -> Node:
        if isinstance(source, Node):
            return source
        if isinstance(source, (str, bytes)):
            try:
                source = json.loads(source)
            except json.JSONDecodeError as exc:
                raise InvalidInput(f"Invalid JSON element tree: {exc}") from exc
        return Node.from_dict(source)


__all__ = ["JsonTreeProvider", "Node"]
