"""Element tree providers and registry exports."""
from .base import REGISTRY, Element, Provider, get_provider, iter_elements, register
from .json_adapter import JsonTreeProvider, Node
from .soup_adapter import HtmlParserProvider, LxmlNotAvailable, LxmlProvider, SoupElement
from .source import fetch_html, parse_input

__all__ = [
    "Element",
    "Provider",
    "REGISTRY",
    "get_provider",
    "iter_elements",
    "register",
    "HtmlParserProvider",
    "LxmlProvider",
    "LxmlNotAvailable",
    "SoupElement",
    "JsonTreeProvider",
    "Node",
    "fetch_html",
    "parse_input",
]
