"""Schema validation for stored fingerprint documents."""
from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

from jsonschema import Draft7Validator

from domhash.errors import DomHashError

SCHEMA_PATH = Path(__file__).resolve().parents[1] / "schema" / "domhash.schema.json"


class SchemaValidationError(DomHashError, ValueError):
    """Raised when a fingerprint document fails JSON Schema validation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@lru_cache(maxsize=1)
def _load_schema() -> Dict[str, Any]:
    with SCHEMA_PATH.open("r", encoding="utf-8") as handle:
        return json.load(handle)


@lru_cache(maxsize=1)
def _build_validator() -> Draft7Validator:
    return Draft7Validator(_load_schema())


def validate_fingerprint_schema(document: Dict[str, Any]) -> None:
    """Validate ``document`` or raise :class:`SchemaValidationError`."""

    errors = sorted(_build_validator().iter_errors(document), key=lambda err: [str(part) for part in err.path])
    if errors:
        formatted = "\n".join(
            f"{'/'.join(str(x) for x in error.path)}: {error.message}" if error.path else error.message
            for error in errors
        )
        raise SchemaValidationError(formatted)


__all__ = ["SCHEMA_PATH", "SchemaValidationError", "validate_fingerprint_schema"]
