"""Domain model: value objects for tokens, records and results."""

from logtest.domain.model.configuration import DEFAULT_ATTRIBUTE, ExpansionConfig
from logtest.domain.model.diagnostic import Diagnostic, ExpandedItem, ExpansionResult
from logtest.domain.model.enums import Delimiter, Spacing, TokenKind, Visibility
from logtest.domain.model.function_record import FunctionRecord, ReturnType, VisibilityClause
from logtest.domain.model.span import Span
from logtest.domain.model.token import Group, Token, TokenStream, TokenTree, iter_leaves

__all__ = [
    # Enums
    "Delimiter",
    "Spacing",
    "TokenKind",
    "Visibility",
    # Value objects
    "Span",
    "Token",
    "Group",
    "TokenTree",
    "TokenStream",
    "iter_leaves",
    # Records
    "VisibilityClause",
    "ReturnType",
    "FunctionRecord",
    # Results
    "Diagnostic",
    "ExpandedItem",
    "ExpansionResult",
    # Configuration
    "DEFAULT_ATTRIBUTE",
    "ExpansionConfig",
]
