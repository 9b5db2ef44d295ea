"""logtest domain layer.

Pure domain logic with no external dependencies.
Only imports: typing, dataclasses, enum, pathlib, re, collections.abc
"""

from logtest.domain.exceptions import (
    LexError,
    LogTestError,
    MalformedSignatureError,
    SourceReadError,
    TypeSyntaxError,
)
from logtest.domain.model import (
    Delimiter,
    Diagnostic,
    ExpandedItem,
    ExpansionConfig,
    ExpansionResult,
    FunctionRecord,
    Group,
    ReturnType,
    Spacing,
    Span,
    Token,
    TokenKind,
    TokenStream,
    Visibility,
    VisibilityClause,
)
from logtest.domain.ports import ReporterProtocol

__all__ = [
    # Exceptions
    "LogTestError",
    "MalformedSignatureError",
    "LexError",
    "SourceReadError",
    "TypeSyntaxError",
    # Enums
    "Delimiter",
    "Spacing",
    "TokenKind",
    "Visibility",
    # Value objects
    "Span",
    "Token",
    "Group",
    "TokenStream",
    "VisibilityClause",
    "ReturnType",
    "FunctionRecord",
    "Diagnostic",
    "ExpandedItem",
    "ExpansionResult",
    "ExpansionConfig",
    # Ports
    "ReporterProtocol",
]
