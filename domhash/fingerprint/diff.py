"""Best-effort line diff between two canonical strings."""
from __future__ import annotations

import re
from itertools import zip_longest
from typing import List

_TOKEN = re.compile(r"<[^>]+>(?:</[^>]+>)?")

__all__ = ["structural_diff", "tokenize_canonical"]


def tokenize_canonical(canonical: str) -> List[str]:
    """Split a canonical string into tag tokens; empty leaves keep their closing tag."""

    return _TOKEN.findall(canonical)


def structural_diff(a: str, b: str) -> List[str]:
    """Align tag tokens by position and mark removals ``-``, additions ``+``, matches with two spaces."""

    lines: List[str] = []
    for token_a, token_b in zip_longest(tokenize_canonical(a), tokenize_canonical(b)):
        if token_a == token_b:
            lines.append(f"  {token_a}")
            continue
        if token_a:
            lines.append(f"- {token_a}")
        if token_b:
            lines.append(f"+ {token_b}")
    return lines
