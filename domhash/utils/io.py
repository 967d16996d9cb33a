"""JSON IO helpers for fingerprint documents."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

__all__ = ["read_json", "write_json", "ensure_parent_dir"]


def read_json(path: str | Path) -> Dict[str, Any]:
    """Load a JSON object from ``path``.

    Decoding problems surface as :class:`ValueError` naming the file; IO errors propagate.
    """

    file_path = Path(path)
    content = file_path.read_text(encoding="utf-8")
    try:
        document = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in '{file_path}': {exc}") from exc
    if not isinstance(document, dict):
        raise ValueError(f"Expected a JSON object in '{file_path}', got {type(document).__name__}")
    return document


def ensure_parent_dir(path: str | Path) -> Path:
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    return file_path


def write_json(path: str | Path, obj: Dict[str, Any]) -> None:
    """Write ``obj`` to ``path`` as indented UTF-8 JSON, keeping key order."""

    file_path = ensure_parent_dir(path)
    serialized = json.dumps(obj, ensure_ascii=False, indent=2)
    file_path.write_text(serialized + "\n", encoding="utf-8")
