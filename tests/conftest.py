"""Pytest configuration for domhash tests."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from helpers import ARTICLE_HTML, LIST_HTML  # noqa: E402


@pytest.fixture
def article_path(tmp_path: Path) -> Path:
    path = tmp_path / "article.html"
    path.write_text(ARTICLE_HTML, encoding="utf-8")
    return path


@pytest.fixture
def list_path(tmp_path: Path) -> Path:
    path = tmp_path / "list.html"
    path.write_text(LIST_HTML, encoding="utf-8")
    return path
