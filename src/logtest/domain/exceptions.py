"""Domain exceptions: all public errors of logtest.

All exceptions visible to users are defined in the domain.
Application/Infrastructure raise these, not their own public exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from logtest.domain.model.span import Span


class LogTestError(Exception):
    """Base for all logtest error exceptions.

    Allows: except LogTestError to catch all library errors.
    """


class MalformedSignatureError(LogTestError, SyntaxError):
    """Function item does not have the expected shape.

    Raised for a missing `fn` keyword, name, parameter group or body,
    and for tokens left over after the body.
    Inherits SyntaxError for semantic correctness.

    Attributes:
        span: Where parsing diverged from expectation.
        expected: What the parser was looking for.
        found: Text of the offending token, None at end of input.
        reason: Error description.
    """

    def __init__(self, *, span: Span, expected: str, found: str | None) -> None:
        """Initialize with divergence span, expectation and found token."""
        self.span = span
        self.expected = expected
        self.found = found
        what = f"`{found}`" if found is not None else "end of input"
        self.reason = f"expected {expected}, found {what}"
        super().__init__(self.reason)


class LexError(LogTestError, SyntaxError):
    """Source text cannot be split into tokens.

    Unterminated literal or comment, unbalanced delimiter, stray character.

    Attributes:
        span: Position of the offending text.
        reason: Error description.
    """

    def __init__(self, *, span: Span, reason: str) -> None:
        """Initialize with position and reason."""
        self.span = span
        self.reason = reason
        super().__init__(reason)


class SourceReadError(LogTestError, OSError):
    """Source file cannot be read or decoded.

    Inherits OSError for semantic correctness.

    Attributes:
        path: File that failed.
        reason: Error description.
    """

    def __init__(self, *, path: Path, reason: str) -> None:
        """Initialize with file path and error reason."""
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class TypeSyntaxError(LogTestError, SyntaxError):
    """Tokens do not form a type expression.

    Raised by the type parser. The signature parser treats it as an
    absent return type, so it never reaches users of expand().

    Attributes:
        span: Where the type grammar diverged.
        reason: Error description.
    """

    def __init__(self, *, span: Span, reason: str) -> None:
        """Initialize with position and reason."""
        self.span = span
        self.reason = reason
        super().__init__(reason)
