"""Environment detection utilities."""
from __future__ import annotations

import importlib.util
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT = 10.0


def lxml_available() -> bool:
    """Return ``True`` when the optional ``lxml`` parser can be imported."""

    return importlib.util.find_spec("lxml") is not None


def http_timeout() -> float:
    """Timeout in seconds for URL sources, from ``DOMHASH_HTTP_TIMEOUT``."""

    raw = os.environ.get("DOMHASH_HTTP_TIMEOUT")
    if not raw:
        return DEFAULT_HTTP_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric DOMHASH_HTTP_TIMEOUT=%r", raw)
        return DEFAULT_HTTP_TIMEOUT
    return value if value > 0 else DEFAULT_HTTP_TIMEOUT
