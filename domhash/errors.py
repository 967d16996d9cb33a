"""Exception types raised by domhash."""
from __future__ import annotations

__all__ = ["DomHashError", "InvalidInput", "UnsupportedAlgorithm", "EnvironmentUnavailable"]


class DomHashError(Exception):
    """Base class for every error signalled by domhash."""


class InvalidInput(DomHashError, ValueError):
    """Raised when a source or tree cannot be fingerprinted."""


class UnsupportedAlgorithm(DomHashError, ValueError):
    """Raised for an unknown digest or similarity metric selector."""


class EnvironmentUnavailable(DomHashError, RuntimeError):
    """Raised when a required backend is not available in this runtime."""
