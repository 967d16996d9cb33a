"""BeautifulSoup backed element tree providers."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from domhash.adapters.base import parse_inline_style, register, resolve_style_facts
from domhash.errors import EnvironmentUnavailable, InvalidInput
from domhash.utils.env import lxml_available

logger = logging.getLogger(__name__)


class LxmlNotAvailable(EnvironmentUnavailable):
    """Raised when the ``lxml`` parser is selected but not installed."""


class SoupElement:
    """Adapts a :class:`bs4.element.Tag` to the :class:`~domhash.adapters.base.Element` protocol."""

    def __init__(self, node: Tag, tag: Optional[str] = None) -> None:
        self._node = node
        self._tag_override = tag

    @property
    def tag(self) -> str:
        return self._tag_override or self._node.name

    @property
    def node(self) -> Tag:
        return self._node

    def attributes(self) -> Iterator[Tuple[str, str]]:
        for name, value in self._node.attrs.items():
            # multi-valued attributes such as ``class`` arrive as lists
            if isinstance(value, (list, tuple)):
                value = " ".join(value)
            yield name, value

    def children(self) -> Iterator[Union["SoupElement", str]]:
        for child in self._node.children:
            if isinstance(child, Tag):
                yield SoupElement(child)
            elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
                yield str(child)

    def style_facts(self) -> Dict[str, str]:
        return resolve_style_facts(inline=parse_inline_style(self._node.get("style")))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SoupElement) and other._node is self._node

    def __hash__(self) -> int:
        return id(self._node)

    def __repr__(self) -> str:
        return f"SoupElement(<{self.tag}>)"


def document_root(soup: BeautifulSoup) -> SoupElement:
    """Return the document element of ``soup``.

    Fragments with several top-level elements are wrapped in a synthetic ``html`` root.
    """

    if soup.html is not None:
        return SoupElement(soup.html)
    top_level = [child for child in soup.children if isinstance(child, Tag)]
    if not top_level:
        raise InvalidInput("No element found in HTML source")
    if len(top_level) == 1:
        return SoupElement(top_level[0])
    logger.debug("Wrapping %d top-level elements in a synthetic <html> root", len(top_level))
    return SoupElement(soup, tag="html")


@register
class HtmlParserProvider:
    """Parses HTML text with the parser bundled with BeautifulSoup."""

    name = "html.parser"
    features = "html.parser"

    def parse(self, source: Any) -> SoupElement:
        if isinstance(source, Tag):
            if isinstance(source, BeautifulSoup):
                return document_root(source)
            return SoupElement(source)
        if isinstance(source, bytes):
            source = source.decode("utf-8", errors="replace")
        if not isinstance(source, str):
            raise InvalidInput(f"Unsupported source type for {self.name}: {type(source).__name__}")
        # a leading BOM would otherwise become a text node before the root
        clean_html = source.replace("\ufeff", "").strip()
        if not clean_html:
            raise InvalidInput("Empty HTML source")
        soup = BeautifulSoup(clean_html, self._features())
        return document_root(soup)

    def _features(self) -> str:
        return self.features


@register
class LxmlProvider(HtmlParserProvider):
    """Parses HTML text with lxml through BeautifulSoup."""

    name = "lxml"
    features = "lxml"

    def _features(self) -> str:
        if not lxml_available():
            raise LxmlNotAvailable("lxml must be installed to use the 'lxml' parser")
        return self.features


__all__ = ["HtmlParserProvider", "LxmlNotAvailable", "LxmlProvider", "SoupElement", "document_root"]
