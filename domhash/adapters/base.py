"""Element tree protocol, style resolution helpers and provider registry."""
from __future__ import annotations

import re
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Protocol, Tuple, Union

from domhash.errors import InvalidInput

STYLE_DEFAULTS: Dict[str, str] = {
    "display": "block",
    "visibility": "visible",
    "opacity": "1",
    "position": "static",
}

_DECLARATION = re.compile(r"(?:^|;)\s*([A-Za-z-]+)\s*:\s*([^;]+)")
_IMPORTANT = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)

ProviderFactory = Callable[[], "Provider"]


class Element(Protocol):
    """Read-only view of one element in a document tree."""

    tag: str

    def attributes(self) -> Iterable[Tuple[str, str]]:
        """Yield ``(name, value)`` pairs in source order."""

    def children(self) -> Iterable[Union["Element", str]]:
        """Yield child elements and text nodes (as ``str``) in document order."""


class Provider(Protocol):
    """Turns some source object into a rooted :class:`Element` tree."""

    name: str

    def parse(self, source: Any) -> Element:
        """Return the root element for ``source``."""


REGISTRY: Dict[str, ProviderFactory] = {}


def register(provider_cls: Callable[[], Provider]) -> Callable[[], Provider]:
    """Class decorator registering an element tree provider."""

    name = getattr(provider_cls, "name", None)
    if not name:
        raise ValueError("Providers must define a 'name' attribute for registration")
    REGISTRY[name] = provider_cls  # type: ignore[assignment]
    return provider_cls


def get_provider(name: str) -> Provider:
    """Return an instantiated provider by ``name``."""

    if name not in REGISTRY:
        raise InvalidInput(f"Unknown parser '{name}'. Registered: {', '.join(sorted(REGISTRY))}")
    return REGISTRY[name]()


def parse_inline_style(style: Optional[str]) -> Dict[str, str]:
    """Parse a literal ``style`` attribute into a property map.

    Only ``property: value`` declarations are recognised; later declarations win.
    Keyword values are case-insensitive and come back lowercased without ``!important``.
    """

    if not style:
        return {}
    declarations: Dict[str, str] = {}
    for prop, value in _DECLARATION.findall(style):
        declarations[prop.strip().lower()] = _IMPORTANT.sub("", value.strip()).lower()
    return declarations


def resolve_style_facts(
    computed: Optional[Mapping[str, Any]] = None,
    inline: Optional[Mapping[str, Any]] = None,
    props: Optional[Mapping[str, Any]] = None,
) -> Dict[str, str]:
    """Merge style sources by priority: computed, inline, plain properties, defaults."""

    facts: Dict[str, str] = {}
    for prop, default in STYLE_DEFAULTS.items():
        value = default
        for source in (computed, inline, props):
            if not source:
                continue
            candidate = source.get(prop)
            if candidate is not None and str(candidate).strip():
                value = str(candidate).strip().lower()
                break
        facts[prop] = value
    return facts


def is_element(node: Any) -> bool:
    return callable(getattr(node, "children", None)) and callable(getattr(node, "attributes", None))


def tag_name(element: Any) -> str:
    """Return the lowercase tag name of ``element`` or raise :class:`InvalidInput`."""

    tag = getattr(element, "tag", None)
    if not tag or not isinstance(tag, str):
        raise InvalidInput(f"Element {element!r} has no tag name")
    return tag.lower()


def element_children(element: Element) -> List[Element]:
    return [child for child in element.children() if not isinstance(child, str)]


def iter_elements(root: Element) -> Iterator[Element]:
    """Yield ``root`` and its descendant elements in pre-order."""

    stack: List[Element] = [root]
    while stack:
        element = stack.pop()
        yield element
        stack.extend(reversed(element_children(element)))


__all__ = [
    "Element",
    "Provider",
    "REGISTRY",
    "STYLE_DEFAULTS",
    "element_children",
    "get_provider",
    "is_element",
    "iter_elements",
    "parse_inline_style",
    "register",
    "resolve_style_facts",
    "tag_name",
]
