"""Expansion configuration."""

from __future__ import annotations

import re
from dataclasses import dataclass

_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

DEFAULT_ATTRIBUTE = "logtest"


@dataclass(frozen=True, slots=True)
class ExpansionConfig:
    """Configuration for the source-level expander.

    Immutable (frozen dataclass). All fields have defaults.

    Attributes:
        attribute: Annotation name that marks a function for expansion.
            Matches `#[name]`, `#[name(...)]` and paths ending in `::name`.
    """

    attribute: str = DEFAULT_ATTRIBUTE

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.attribute:
            raise ValueError("attribute must not be empty")
        if not _IDENT.fullmatch(self.attribute):
            raise ValueError(f"attribute must be an identifier, got {self.attribute!r}")
