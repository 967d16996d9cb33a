from __future__ import annotations

import json
from pathlib import Path

import pytest
import requests

from domhash.adapters import JsonTreeProvider, LxmlNotAvailable, SoupElement, get_provider, parse_input
from domhash.errors import InvalidInput
from domhash.fingerprint import canonicalize
from domhash.utils.env import DEFAULT_HTTP_TIMEOUT, http_timeout
from helpers import node


def test_soup_and_synthetic_trees_canonicalize_alike() -> None:
    soup_root = parse_input('<div class="a b"><span></span>text</div>')
    synthetic = node("div", node("span"), "text", attrs={"class": "a b"})

    assert canonicalize(soup_root).canonical == canonicalize(synthetic).canonical


def test_multi_valued_attributes_are_joined() -> None:
    root = parse_input('<p class="one two"></p>')

    assert isinstance(root, SoupElement)
    assert list(root.attributes()) == [("class", "one two")]


def test_fragment_with_siblings_gets_synthetic_root() -> None:
    root = parse_input("<p></p><p></p>")

    assert root.tag == "html"
    assert canonicalize(root).canonical == "<html><p></p><p></p></html>"


def test_leading_bom_is_ignored() -> None:
    assert canonicalize(parse_input("\ufeff<div></div>")).canonical == "<div></div>"


def test_empty_sources_are_rejected() -> None:
    with pytest.raises(InvalidInput):
        get_provider("html.parser").parse("   ")
    with pytest.raises(InvalidInput):
        parse_input("   ")
    with pytest.raises(InvalidInput):
        parse_input("just some words")


def test_unknown_parser() -> None:
    with pytest.raises(InvalidInput):
        parse_input("<div></div>", parser="html5lib-nope")


def test_html_file_path(article_path: Path) -> None:
    from_path = canonicalize(parse_input(article_path))
    from_text = canonicalize(parse_input(str(article_path)))

    assert from_path == from_text
    assert from_path.tag_count == 9


def test_json_tree_file(tmp_path: Path) -> None:
    tree = {
        "tag": "ul",
        "children": [
            {"tag": "li", "attributes": {"class": "item"}, "style": {"display": "inline"}},
            {"tag": "li", "display": "none"},
        ],
    }
    path = tmp_path / "tree.json"
    path.write_text(json.dumps(tree), encoding="utf-8")

    root = parse_input(path)

    assert canonicalize(root).canonical == "<ul><li class></li><li></li></ul>"
    assert root.child_nodes[1].style_facts()["display"] == "none"


def test_json_tree_requires_tag() -> None:
    with pytest.raises(InvalidInput):
        JsonTreeProvider().parse('{"children": []}')
    with pytest.raises(InvalidInput):
        JsonTreeProvider().parse("{not json")


def test_lxml_parser_when_installed() -> None:
    pytest.importorskip("lxml", reason="lxml not installed; skipping lxml provider test")

    root = parse_input("<div><span></span></div>", parser="lxml")

    assert canonicalize(root).canonical == "<html><body><div><span></span></div></body></html>"


def test_lxml_parser_reports_missing_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("domhash.adapters.soup_adapter.lxml_available", lambda: False)

    with pytest.raises(LxmlNotAvailable):
        parse_input("<div></div>", parser="lxml")


class _FakeResponse:
    def __init__(self, text: str, status: int = 200) -> None:
        self.text = text
        self.status = status

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")


def test_url_sources_are_fetched(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return _FakeResponse("<main><p></p></main>")

    monkeypatch.setenv("DOMHASH_HTTP_TIMEOUT", "3")
    monkeypatch.setattr("domhash.adapters.source.requests.get", fake_get)

    root = parse_input("https://example.com/page")

    assert canonicalize(root).canonical == "<main><p></p></main>"
    assert calls == [("https://example.com/page", 3.0)]


def test_failed_fetch_is_invalid_input(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "domhash.adapters.source.requests.get",
        lambda url, timeout: _FakeResponse("", status=404),
    )

    with pytest.raises(InvalidInput):
        parse_input("http://example.com/missing")


def test_http_timeout_ignores_bad_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOMHASH_HTTP_TIMEOUT", "soon")
    assert http_timeout() == DEFAULT_HTTP_TIMEOUT

    monkeypatch.setenv("DOMHASH_HTTP_TIMEOUT", "-1")
    assert http_timeout() == DEFAULT_HTTP_TIMEOUT


def test_inline_json_with_json_parser() -> None:
    root = parse_input('{"tag": "div", "children": [{"tag": "span"}]}', parser="json")

    assert canonicalize(root).canonical == "<div><span></span></div>"
    with pytest.raises(InvalidInput):
        parse_input('{"tag": "div"}')
