"""Source span value object."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class Span:
    """Exact region of Rust source text.

    Attributes:
        file: Path to source file
        line: Start line (1-based, must be > 0)
        column: Start column (0-based, must be >= 0)
        end_line: End line (must be >= line)
        end_column: End column (exclusive)
        start: Start character offset in the source
        end: End character offset (exclusive, must be >= start)
    """

    file: Path
    line: int
    column: int
    end_line: int
    end_column: int
    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.file is None:
            raise TypeError("file must not be None")
        if self.line <= 0:
            raise ValueError(f"line must be > 0, got {self.line}")
        if self.column < 0:
            raise ValueError(f"column must be >= 0, got {self.column}")
        if self.end_line < self.line:
            raise ValueError(f"end_line ({self.end_line}) must be >= line ({self.line})")
        if self.start < 0:
            raise ValueError(f"start must be >= 0, got {self.start}")
        if self.end < self.start:
            raise ValueError(f"end ({self.end}) must be >= start ({self.start})")

    def __str__(self) -> str:
        """Format as file:line:column (1-based column, like rustc)."""
        return f"{self.file}:{self.line}:{self.column + 1}"

    def join(self, other: Span) -> Span:
        """Smallest span covering both spans.

        Raises:
            ValueError: If spans belong to different files
        """
        if other.file != self.file:
            raise ValueError(f"cannot join spans from {self.file} and {other.file}")

        first, last = (self, other) if self.start <= other.start else (other, self)
        tail = last if last.end >= first.end else first
        return Span(
            file=self.file,
            line=first.line,
            column=first.column,
            end_line=tail.end_line,
            end_column=tail.end_column,
            start=first.start,
            end=tail.end,
        )

    def point_after(self) -> Span:
        """Zero-width span right after this one (unexpected end of input)."""
        return Span(
            file=self.file,
            line=self.end_line,
            column=self.end_column,
            end_line=self.end_line,
            end_column=self.end_column,
            start=self.end,
            end=self.end,
        )

    @property
    def is_multiline(self) -> bool:
        """Span covers more than one line."""
        return self.end_line > self.line
