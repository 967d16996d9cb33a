from __future__ import annotations

from typing import Any, Dict, List, Optional

from domhash.adapters import Node

ARTICLE_HTML = """<!DOCTYPE html>
<html>
  <head><title>Post</title></head>
  <body>
    <article class="post" data-id="7">
      <h1>Hello</h1>
      <p>First <b>bold</b> paragraph</p>
      <p>Second paragraph</p>
    </article>
  </body>
</html>
"""

LIST_HTML = """<html>
  <body>
    <ul id="menu">
      <li><a href="/a">A</a></li>
      <li><a href="/b">B</a></li>
      <li><a href="/c">C</a></li>
    </ul>
    <div style="display: none"><span>hidden</span></div>
  </body>
</html>
"""


def node(tag: str, *children: Any, attrs: Optional[Dict[str, str]] = None, style: Optional[Dict[str, str]] = None) -> Node:
    """Build a synthetic element; ``style`` acts as its computed style."""

    return Node(tag=tag, attrs=dict(attrs or {}), child_nodes=list(children), computed_style=style)


def uniform_tags(tag: str, count: int) -> List[str]:
    return [tag] * count


__all__ = ["ARTICLE_HTML", "LIST_HTML", "node", "uniform_tags"]
