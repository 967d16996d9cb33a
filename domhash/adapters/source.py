"""Resolve user supplied sources (markup, paths, URLs, trees) to a root element."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Union

import requests

from domhash.adapters.base import Element, get_provider, is_element
from domhash.errors import InvalidInput
from domhash.utils.env import http_timeout

logger = logging.getLogger(__name__)

Source = Union[str, Path, bytes, Element, Any]


def parse_input(source: Source, *, parser: str = "html.parser") -> Element:
    """Return the root element for ``source``.

    ``source`` may be an element tree already, HTML text, a URL, a path to an
    ``.html`` file, or a path to a ``.json`` file describing a synthetic tree.
    """

    if is_element(source):
        return source  # type: ignore[return-value]
    if isinstance(source, Path):
        return _parse_file(source, parser)
    if isinstance(source, str):
        text = source.replace("\ufeff", "").strip()
        if text.startswith("<") or (parser == "json" and text.startswith(("{", "["))):
            return get_provider(parser).parse(text)
        if text.startswith(("http://", "https://")):
            return get_provider(parser).parse(fetch_html(text))
        path = Path(text)
        if _is_file(path):
            return _parse_file(path, parser)
        raise InvalidInput(f"Input is neither markup, a URL, nor an existing file: {text[:80]!r}")
    return get_provider(parser).parse(source)


def fetch_html(url: str) -> str:
    """Download ``url`` and return its body as text."""

    logger.info("Fetching %s", url)
    try:
        response = requests.get(url, timeout=http_timeout())
        response.raise_for_status()
    except requests.RequestException as exc:
        raise InvalidInput(f"Failed to fetch '{url}': {exc}") from exc
    return response.text


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        # names longer than the filesystem allows
        return False


def _parse_file(path: Path, parser: str) -> Element:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidInput(f"Failed to read '{path}': {exc}") from exc
    logger.debug("Parsing %s (%d chars)", path, len(content))
    if path.suffix.lower() == ".json":
        return get_provider("json").parse(content)
    return get_provider(parser).parse(content)


__all__ = ["Source", "fetch_html", "parse_input"]
