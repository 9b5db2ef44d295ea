"""Forward-only cursor over token trees."""

from __future__ import annotations

from typing import TYPE_CHECKING

from logtest.domain.model.enums import Delimiter, Spacing, TokenKind
from logtest.domain.model.token import Group, Token

if TYPE_CHECKING:
    from logtest.domain.model.span import Span
    from logtest.domain.model.token import TokenTree


class Cursor:
    """Position in a sequence of token trees.

    Parsers only move forward. fork() gives an independent lookahead copy
    that the caller can adopt with commit() or simply drop.
    """

    __slots__ = ("_trees", "_pos", "_end")

    def __init__(self, trees: tuple[TokenTree, ...], end: Span, pos: int = 0) -> None:
        """Initialize cursor.

        Args:
            trees: Trees to walk
            end: Span reported for "unexpected end of input"
            pos: Starting index
        """
        self._trees = trees
        self._end = end
        self._pos = pos

    @classmethod
    def over_group(cls, group: Group) -> Cursor:
        """Cursor over the contents of a group; its end is the close delimiter."""
        return cls(group.trees, group.close.span)

    # -- inspection -----------------------------------------------------------

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self._trees)

    @property
    def position(self) -> int:
        return self._pos

    def peek(self, offset: int = 0) -> TokenTree | None:
        """Tree at current position + offset, None past the end."""
        index = self._pos + offset
        if index < len(self._trees):
            return self._trees[index]
        return None

    def peek_ident(self, name: str | None = None, offset: int = 0) -> bool:
        tree = self.peek(offset)
        return isinstance(tree, Token) and tree.is_ident(name)

    def peek_punct(self, char: str, offset: int = 0) -> bool:
        tree = self.peek(offset)
        return isinstance(tree, Token) and tree.is_punct(char)

    def peek_kind(self, kind: TokenKind, offset: int = 0) -> bool:
        tree = self.peek(offset)
        return isinstance(tree, Token) and tree.kind is kind

    def peek_group(self, *delimiters: Delimiter, offset: int = 0) -> bool:
        tree = self.peek(offset)
        return isinstance(tree, Group) and (not delimiters or tree.delimiter in delimiters)

    def peek_joint(self, first: str, second: str) -> bool:
        """Two-character operator such as `->` or `::` at the cursor."""
        head = self.peek()
        return (
            isinstance(head, Token)
            and head.is_punct(first)
            and head.spacing is Spacing.JOINT
            and self.peek_punct(second, 1)
        )

    def current_span(self) -> Span:
        """Span of the tree at the cursor, or the end span."""
        tree = self.peek()
        return tree.span if tree is not None else self._end

    def current_text(self) -> str | None:
        """Short text of the tree at the cursor, None at end of input."""
        tree = self.peek()
        if tree is None:
            return None
        if isinstance(tree, Group):
            return tree.delimiter.open
        return tree.text

    # -- movement -------------------------------------------------------------

    def advance(self) -> TokenTree:
        """Consume and return the current tree.

        Raises:
            IndexError: If the cursor is at the end
        """
        tree = self.peek()
        if tree is None:
            raise IndexError("cursor is at end of input")
        self._pos += 1
        return tree

    def eat_ident(self, name: str | None = None) -> Token | None:
        """Consume an identifier if present."""
        if not self.peek_ident(name):
            return None
        token = self.advance()
        assert isinstance(token, Token)
        return token

    def eat_punct(self, char: str) -> Token | None:
        """Consume a punctuation token if present."""
        if not self.peek_punct(char):
            return None
        token = self.advance()
        assert isinstance(token, Token)
        return token

    def eat_joint(self, first: str, second: str) -> tuple[Token, Token] | None:
        """Consume a two-character operator if present."""
        if not self.peek_joint(first, second):
            return None
        head = self.advance()
        tail = self.advance()
        assert isinstance(head, Token) and isinstance(tail, Token)
        return head, tail

    def eat_group(self, *delimiters: Delimiter) -> Group | None:
        """Consume a group with one of the delimiters if present."""
        if not self.peek_group(*delimiters):
            return None
        group = self.advance()
        assert isinstance(group, Group)
        return group

    def skip_until_group(self, delimiter: Delimiter) -> None:
        """Move to the next group with the delimiter outside `<...>`, or to the end.

        Groups between unclosed angle brackets are generic arguments and are
        skipped. The `>` of `->` closes nothing.
        """
        depth = 0
        while not self.at_end:
            if depth == 0 and self.peek_group(delimiter):
                return
            if self.peek_joint("-", ">"):
                self._pos += 2
                continue
            if self.peek_punct("<"):
                depth += 1
            elif self.peek_punct(">") and depth > 0:
                depth -= 1
            self._pos += 1

    def consumed_since(self, mark: int) -> tuple[TokenTree, ...]:
        """Trees consumed after position mark."""
        return self._trees[mark : self._pos]

    def fork(self) -> Cursor:
        """Independent copy at the same position."""
        return Cursor(self._trees, self._end, self._pos)

    def commit(self, fork: Cursor) -> None:
        """Adopt the position of a fork of this cursor.

        Raises:
            ValueError: If fork walks different trees or lies behind
        """
        if fork._trees is not self._trees:
            raise ValueError("fork does not belong to this cursor")
        if fork._pos < self._pos:
            raise ValueError("cannot move cursor backwards")
        self._pos = fork._pos
