"""Utility helpers for domhash."""

from .env import http_timeout, lxml_available
from .io import ensure_parent_dir, read_json, write_json
from .validate import SchemaValidationError, validate_fingerprint_schema

__all__ = [
    "http_timeout",
    "lxml_available",
    "ensure_parent_dir",
    "read_json",
    "write_json",
    "SchemaValidationError",
    "validate_fingerprint_schema",
]
