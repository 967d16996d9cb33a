"""Command line interface for domhash."""

from .main import app, run

__all__ = ["app", "run"]
