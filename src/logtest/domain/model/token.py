"""Token tree value objects.

Leaf tokens and delimited groups, the unit the parser consumes and the
synthesizer emits. Every token carries the span it was lexed from, or the
span of the source construct it was generated for.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from logtest.domain.model.enums import Delimiter, Spacing, TokenKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from logtest.domain.model.span import Span


@dataclass(frozen=True, slots=True)
class Token:
    """Leaf token.

    Attributes:
        text: Exact source text of the token
        kind: Lexical class
        span: Source span
        spacing: JOINT if glued to the next token
        index: Ordinal in the lexed source, None for generated tokens
        trivia: Whitespace and comments preceding the token in the source.
            For generated tokens an explicit layout override, or None.
    """

    text: str
    kind: TokenKind
    span: Span
    spacing: Spacing = Spacing.ALONE
    index: int | None = None
    trivia: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.text:
            raise ValueError("token text must not be empty")
        if self.span is None:
            raise TypeError("span must not be None")
        if self.index is not None and self.index < 0:
            raise ValueError(f"index must be >= 0, got {self.index}")
        if self.kind is TokenKind.PUNCT and len(self.text) != 1:
            raise ValueError(f"punct token must be one character, got {self.text!r}")

    @property
    def is_generated(self) -> bool:
        """Token was not lexed from source."""
        return self.index is None

    def is_ident(self, name: str | None = None) -> bool:
        """Check for identifier, optionally with exact text."""
        return self.kind is TokenKind.IDENT and (name is None or self.text == name)

    def is_punct(self, char: str | None = None) -> bool:
        """Check for punctuation, optionally with exact character."""
        return self.kind is TokenKind.PUNCT and (char is None or self.text == char)


@dataclass(frozen=True, slots=True)
class Group:
    """Delimited token group: (...), [...] or {...}.

    Attributes:
        delimiter: Delimiter pair
        open: Opening delimiter token
        close: Closing delimiter token
        trees: Token trees between the delimiters
    """

    delimiter: Delimiter
    open: Token
    close: Token
    trees: tuple[TokenTree, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.open.text != self.delimiter.open:
            raise ValueError(
                f"open token {self.open.text!r} does not match {self.delimiter.name}"
            )
        if self.close.text != self.delimiter.close:
            raise ValueError(
                f"close token {self.close.text!r} does not match {self.delimiter.name}"
            )

    @property
    def span(self) -> Span:
        """Span from opening to closing delimiter."""
        return self.open.span.join(self.close.span)

    def leaves(self) -> Iterator[Token]:
        """Leaf tokens in source order, delimiters included."""
        yield self.open
        yield from iter_leaves(self.trees)
        yield self.close


TokenTree = Token | Group


@dataclass(frozen=True, slots=True)
class TokenStream:
    """Ordered sequence of token trees."""

    trees: tuple[TokenTree, ...] = ()

    def __iter__(self) -> Iterator[TokenTree]:
        return iter(self.trees)

    def __len__(self) -> int:
        return len(self.trees)

    def leaves(self) -> Iterator[Token]:
        """Leaf tokens in order, group delimiters included."""
        return iter_leaves(self.trees)


def iter_leaves(trees: Iterable[TokenTree]) -> Iterator[Token]:
    """Flatten token trees into leaf tokens."""
    for tree in trees:
        if isinstance(tree, Group):
            yield from tree.leaves()
        else:
            yield tree

