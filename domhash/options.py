"""Per-call options for fingerprinting."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

__all__ = ["DomHashOptions"]


@dataclass(frozen=True)
class DomHashOptions:
    """Configures which passes :func:`domhash.domhash` runs and how.

    ``include_attributes`` is a case-insensitive allow-list; ``None`` or an empty
    sequence keeps every attribute that survives the ``data-``/``aria-`` filter.
    """

    algorithm: str = "sha256"
    include_attributes: Optional[Sequence[str]] = None
    include_data_and_aria_attributes: bool = False
    include_text: bool = False
    shape_vector: bool = False
    layout_aware: bool = False
    resilience: bool = False
    structural: bool = False
    structure_tree: bool = False
    parser: str = "html.parser"
    scoring_config: Optional[str] = None
