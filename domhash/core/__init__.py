"""Fingerprint orchestration for domhash."""

from .engine import DomHashResult, domhash, fingerprint_element

__all__ = ["DomHashResult", "domhash", "fingerprint_element"]
