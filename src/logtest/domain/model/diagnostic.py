"""Diagnostic and expansion result value objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from logtest.domain.model.span import Span


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Compile-time error anchored at a source span.

    Attributes:
        message: Headline, e.g. "expected `fn`, found `struct`"
        span: Divergence point in the original source
        label: Short note printed under the caret, empty if none
    """

    message: str
    span: Span
    label: str = ""

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.message:
            raise ValueError("diagnostic message must not be empty")
        if self.span is None:
            raise TypeError("span must not be None")


@dataclass(frozen=True, slots=True)
class ExpandedItem:
    """One function rewritten by the expander.

    Attributes:
        name: Function name
        is_async: Registered with the async test runner
        span: Span of the annotation and item in the original source
    """

    name: str
    is_async: bool
    span: Span

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("item name must not be empty")


@dataclass(frozen=True, slots=True)
class ExpansionResult:
    """Outcome of expanding one source file.

    Attributes:
        path: Source file
        original: Source text as read
        expanded: Source text with every parsable annotated item rewritten
        items: Rewritten items, in source order
        diagnostics: Errors for items left untouched, in source order
    """

    path: Path
    original: str
    expanded: str
    items: tuple[ExpandedItem, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.path is None:
            raise TypeError("path must not be None")
        if not self.items and self.expanded != self.original:
            raise ValueError("expanded source differs but no items were rewritten")

    @property
    def changed(self) -> bool:
        """Expansion modified the source."""
        return self.expanded != self.original

    @property
    def ok(self) -> bool:
        """No diagnostics were reported."""
        return not self.diagnostics
