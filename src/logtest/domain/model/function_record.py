"""Structured record of one annotated function item."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from logtest.domain.model.enums import Delimiter, Visibility

if TYPE_CHECKING:
    from logtest.domain.model.span import Span
    from logtest.domain.model.token import Group, Token, TokenTree


@dataclass(frozen=True, slots=True)
class VisibilityClause:
    """Visibility qualifier with its source tokens.

    Attributes:
        kind: PRIVATE/PUBLIC/SCOPED
        trees: Tokens to re-emit verbatim (empty for PRIVATE)
    """

    kind: Visibility
    trees: tuple[TokenTree, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.kind is Visibility.PRIVATE and self.trees:
            raise ValueError("private visibility must not carry tokens")
        if self.kind is not Visibility.PRIVATE and not self.trees:
            raise ValueError(f"{self.kind.name} visibility requires tokens")


@dataclass(frozen=True, slots=True)
class ReturnType:
    """Parsed `-> Type` clause.

    Attributes:
        arrow: The `-` and `>` tokens of the arrow
        trees: Tokens of the type expression
    """

    arrow: tuple[Token, Token]
    trees: tuple[TokenTree, ...]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.trees:
            raise ValueError("return type must not be empty")

    @property
    def span(self) -> Span:
        """Span of the type expression (without the arrow)."""
        return self.trees[0].span.join(self.trees[-1].span)


@dataclass(frozen=True, slots=True)
class FunctionRecord:
    """Function item as seen by the synthesizer.

    Produced by one left-to-right pass of the signature parser.
    Every field keeps its source tokens and therefore its spans.

    Attributes:
        visibility: Visibility clause
        async_token: `async` qualifier, None for synchronous functions
        fn_token: `fn` keyword
        name: Function name identifier
        parameters: Parameter group, never interpreted
        return_type: Return clause, None if absent or unparsable
        body: Brace-delimited body
    """

    visibility: VisibilityClause
    async_token: Token | None
    fn_token: Token
    name: Token
    parameters: Group
    return_type: ReturnType | None
    body: Group

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.fn_token.is_ident("fn"):
            raise ValueError(f"fn_token must be `fn`, got {self.fn_token.text!r}")
        if not self.name.is_ident():
            raise ValueError(f"name must be an identifier, got {self.name.text!r}")
        if self.async_token is not None and not self.async_token.is_ident("async"):
            raise ValueError(f"async_token must be `async`, got {self.async_token.text!r}")
        if self.parameters.delimiter is Delimiter.BRACE:
            raise ValueError("parameters must not be brace-delimited")
        if self.body.delimiter is not Delimiter.BRACE:
            raise ValueError("body must be brace-delimited")

    @property
    def is_async(self) -> bool:
        """Function carries the `async` qualifier."""
        return self.async_token is not None

    @property
    def span(self) -> Span:
        """Span from the first signature token to the end of the body."""
        if self.visibility.trees:
            first = self.visibility.trees[0].span
        elif self.async_token is not None:
            first = self.async_token.span
        else:
            first = self.fn_token.span
        return first.join(self.body.span)
