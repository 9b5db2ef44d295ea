"""Rust type expression grammar.

Recognizes the type forms that appear in function return clauses:

    path        ::std::io::Result<()>, Box<dyn Error + Send>, <T as Tr>::Out
    tuple       (), (A, B), (T)
    array/slice [u8; 4], [T]
    reference   &'a mut T
    pointer     *const T
    never/infer !, _
    bounds      impl Future<Output = ()>, dyn Fn(u8) -> u8 + Send
    fn pointer  unsafe extern "C" fn(i32) -> i32
    macro       ty!(...)

The parser only checks shape; names are never resolved.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from logtest.application.constants import PATH_KEYWORDS, RESERVED_KEYWORDS
from logtest.application.cursor import Cursor
from logtest.domain.exceptions import TypeSyntaxError
from logtest.domain.model.enums import Delimiter, TokenKind
from logtest.domain.model.token import Group, Token

if TYPE_CHECKING:
    from logtest.domain.model.token import TokenTree


def parse_type(cursor: Cursor) -> tuple[TokenTree, ...]:
    """Consume one type expression.

    Args:
        cursor: Cursor at the first token of the type

    Returns:
        The consumed trees

    Raises:
        TypeSyntaxError: If the tokens at the cursor are not a type. The
            cursor may have moved; use a fork to keep the original position.
    """
    mark = cursor.position
    _type(cursor)
    return cursor.consumed_since(mark)


def _fail(cursor: Cursor, expected: str) -> TypeSyntaxError:
    found = cursor.current_text()
    what = f"`{found}`" if found is not None else "end of input"
    return TypeSyntaxError(span=cursor.current_span(), reason=f"expected {expected}, found {what}")


def _type(c: Cursor) -> None:
    tree = c.peek()
    if tree is None:
        raise _fail(c, "type")

    if isinstance(tree, Group):
        if tree.delimiter is Delimiter.PARENTHESIS:
            c.advance()
            _tuple_contents(Cursor.over_group(tree))
            return
        if tree.delimiter is Delimiter.BRACKET:
            c.advance()
            _array_contents(Cursor.over_group(tree))
            return
        raise _fail(c, "type")

    if tree.is_punct("!") or tree.is_ident("_"):
        c.advance()
        return

    if tree.is_punct("&"):
        c.advance()
        if c.peek_kind(TokenKind.LIFETIME):
            c.advance()
        c.eat_ident("mut")
        _type(c)
        return

    if tree.is_punct("*"):
        c.advance()
        if c.eat_ident("const") is None and c.eat_ident("mut") is None:
            raise _fail(c, "`const` or `mut`")
        _type(c)
        return

    if tree.is_punct("<"):
        _qualified_path(c)
        return

    if c.peek_joint(":", ":"):
        _path(c)
        return

    if tree.is_ident("impl") or tree.is_ident("dyn"):
        c.advance()
        _bounds(c)
        return

    if tree.is_ident("fn") or tree.is_ident("unsafe") or tree.is_ident("extern"):
        _fn_pointer(c)
        return

    if tree.is_ident("for"):
        c.advance()
        _lifetime_params(c)
        if c.peek_ident("fn") or c.peek_ident("unsafe") or c.peek_ident("extern"):
            _fn_pointer(c)
        else:
            _bounds(c)
        return

    if tree.is_ident():
        _path(c)
        # Type macro: `name!(...)`.
        if c.peek_punct("!") and c.peek_group(offset=1):
            c.advance()
            c.advance()
        return

    raise _fail(c, "type")


def _tuple_contents(c: Cursor) -> None:
    while not c.at_end:
        _type(c)
        if c.at_end:
            return
        if c.eat_punct(",") is None:
            raise _fail(c, "`,` or `)`")


def _array_contents(c: Cursor) -> None:
    _type(c)
    if c.at_end:
        return
    if c.eat_punct(";") is None:
        raise _fail(c, "`;` or `]`")
    # Length expression is opaque.
    if c.at_end:
        raise _fail(c, "array length")
    while not c.at_end:
        c.advance()


def _segment_ident(c: Cursor) -> None:
    tree = c.peek()
    if not isinstance(tree, Token) or not tree.is_ident():
        raise _fail(c, "identifier")
    if tree.text in RESERVED_KEYWORDS and tree.text not in PATH_KEYWORDS:
        raise _fail(c, "identifier")
    c.advance()


def _path(c: Cursor) -> None:
    c.eat_joint(":", ":")
    _segment(c)
    _path_tail(c)


def _path_tail(c: Cursor) -> None:
    while c.eat_joint(":", ":") is not None:
        if c.peek_punct("<"):
            _generic_args(c)
        else:
            _segment(c)


def _segment(c: Cursor) -> None:
    _segment_ident(c)
    if c.peek_punct("<") and not c.peek_joint("<", "="):
        _generic_args(c)
    elif c.peek_group(Delimiter.PARENTHESIS):
        # `Fn(A, B) -> C` sugar.
        group = c.advance()
        assert isinstance(group, Group)
        _tuple_contents(Cursor.over_group(group))
        if c.eat_joint("-", ">") is not None:
            _type(c)


def _qualified_path(c: Cursor) -> None:
    c.advance()
    _type(c)
    if c.eat_ident("as") is not None:
        _path(c)
    if c.eat_punct(">") is None:
        raise _fail(c, "`>`")
    if not c.peek_joint(":", ":"):
        raise _fail(c, "`::`")
    _path_tail(c)


def _generic_args(c: Cursor) -> None:
    c.advance()
    while c.eat_punct(">") is None:
        _generic_arg(c)
        if c.eat_punct(",") is None and not c.peek_punct(">"):
            raise _fail(c, "`,` or `>`")


def _generic_arg(c: Cursor) -> None:
    if c.peek_kind(TokenKind.LIFETIME) or c.peek_kind(TokenKind.LITERAL):
        c.advance()
        return
    if c.peek_group(Delimiter.BRACE):
        c.advance()
        return
    if c.peek_punct("-") and c.peek_kind(TokenKind.LITERAL, offset=1):
        c.advance()
        c.advance()
        return
    if c.peek_ident():
        # Associated type binding `Output = T` or constraint `Item: Bound`.
        if c.peek_punct("=", offset=1) and not c.peek_punct("=", offset=2):
            c.advance()
            c.advance()
            _type(c)
            return
        if c.peek_punct(":", offset=1) and not c.peek_punct(":", offset=2):
            c.advance()
            c.advance()
            _bounds(c)
            return
    _type(c)


def _bounds(c: Cursor) -> None:
    _bound(c)
    while c.eat_punct("+") is not None:
        if not _starts_bound(c):
            return
        _bound(c)


def _starts_bound(c: Cursor) -> bool:
    return (
        c.peek_kind(TokenKind.LIFETIME)
        or c.peek_ident()
        or c.peek_punct("?")
        or c.peek_joint(":", ":")
        or c.peek_group(Delimiter.PARENTHESIS)
    )


def _bound(c: Cursor) -> None:
    if c.peek_kind(TokenKind.LIFETIME):
        c.advance()
        return
    group = c.eat_group(Delimiter.PARENTHESIS)
    if group is not None:
        inner = Cursor.over_group(group)
        _bound(inner)
        if not inner.at_end:
            raise _fail(inner, "`)`")
        return
    c.eat_punct("?")
    if c.eat_ident("for") is not None:
        _lifetime_params(c)
    if not (c.peek_ident() or c.peek_joint(":", ":")):
        raise _fail(c, "trait bound")
    _path(c)


def _lifetime_params(c: Cursor) -> None:
    if c.eat_punct("<") is None:
        raise _fail(c, "`<`")
    while c.eat_punct(">") is None:
        if not c.peek_kind(TokenKind.LIFETIME):
            raise _fail(c, "lifetime")
        c.advance()
        if c.eat_punct(",") is None and not c.peek_punct(">"):
            raise _fail(c, "`,` or `>`")


def _fn_pointer(c: Cursor) -> None:
    c.eat_ident("unsafe")
    if c.eat_ident("extern") is not None and c.peek_kind(TokenKind.LITERAL):
        c.advance()
    if c.eat_ident("fn") is None:
        raise _fail(c, "`fn`")
    # Parameter list may name its arguments; kept opaque.
    if c.eat_group(Delimiter.PARENTHESIS) is None:
        raise _fail(c, "`(`")
    if c.eat_joint("-", ">") is not None:
        _type(c)
