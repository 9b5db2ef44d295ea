"""Signature parser: function item tokens to FunctionRecord.

One left-to-right pass, no backtracking between stages:

    #[attr]*  vis?  async?  fn  name  (params)  (-> Type)?  { body }

Steps not marked optional are required and fail with
MalformedSignatureError anchored at the token where the input diverged.
The return clause is best-effort: if the type does not parse, the clause
is dropped and the record has no return type.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from logtest.application.constants import RESERVED_KEYWORDS, VISIBILITY_SCOPES
from logtest.application.cursor import Cursor
from logtest.application.type_parser import parse_type
from logtest.domain.exceptions import MalformedSignatureError, TypeSyntaxError
from logtest.domain.model.enums import Delimiter, Visibility
from logtest.domain.model.function_record import FunctionRecord, ReturnType, VisibilityClause
from logtest.domain.model.span import Span
from logtest.domain.model.token import Token, TokenStream

if TYPE_CHECKING:
    from collections.abc import Iterable

    from logtest.domain.model.token import TokenTree

# Anchor for errors on empty input when the caller has no better position.
UNKNOWN_SPAN = Span(file=Path("<input>"), line=1, column=0, end_line=1, end_column=0, start=0, end=0)


def parse(
    tokens: TokenStream | Iterable[TokenTree],
    *,
    call_site: Span | None = None,
) -> FunctionRecord:
    """Parse one function item.

    Args:
        tokens: Token trees of the item (annotation already removed)
        call_site: Span of the annotation, used to anchor errors on empty input

    Returns:
        Structured record of the function

    Raises:
        MalformedSignatureError: Missing `fn`, name, parameter group or body,
            or tokens after the body
    """
    trees = tokens.trees if isinstance(tokens, TokenStream) else tuple(tokens)
    if trees:
        end = trees[-1].span.point_after()
    else:
        end = call_site if call_site is not None else UNKNOWN_SPAN
    cursor = Cursor(trees, end)

    record = parse_item(cursor)
    if not cursor.at_end:
        raise _diverged(cursor, "end of function item")
    return record


def parse_item(cursor: Cursor) -> FunctionRecord:
    """Parse a function item at the cursor, stopping after its body.

    Used directly when the item is embedded in a larger token sequence.

    Raises:
        MalformedSignatureError: Missing `fn`, name, parameter group or body
    """
    _skip_outer_attributes(cursor)
    visibility = _visibility(cursor)
    async_token = cursor.eat_ident("async")
    fn_token = _expect_ident(cursor, "fn", "`fn`")
    name = _name(cursor)
    parameters = cursor.eat_group(Delimiter.PARENTHESIS, Delimiter.BRACKET)
    if parameters is None:
        raise _diverged(cursor, "`(`")
    return_type = _return_type(cursor)
    body = cursor.eat_group(Delimiter.BRACE)
    if body is None:
        raise _diverged(cursor, "`{`")

    return FunctionRecord(
        visibility=visibility,
        async_token=async_token,
        fn_token=fn_token,
        name=name,
        parameters=parameters,
        return_type=return_type,
        body=body,
    )


def _diverged(cursor: Cursor, expected: str) -> MalformedSignatureError:
    return MalformedSignatureError(
        span=cursor.current_span(),
        expected=expected,
        found=cursor.current_text(),
    )


def _skip_outer_attributes(cursor: Cursor) -> None:
    """Drop `#[...]` annotations; they are not part of the record."""
    while cursor.peek_punct("#") and cursor.peek_group(Delimiter.BRACKET, offset=1):
        cursor.advance()
        cursor.advance()


def _visibility(cursor: Cursor) -> VisibilityClause:
    pub = cursor.eat_ident("pub")
    if pub is None:
        return VisibilityClause(kind=Visibility.PRIVATE)

    restriction = cursor.peek()
    if cursor.peek_group(Delimiter.PARENTHESIS) and _is_scope(restriction):
        cursor.advance()
        return VisibilityClause(kind=Visibility.SCOPED, trees=(pub, restriction))

    return VisibilityClause(kind=Visibility.PUBLIC, trees=(pub,))


def _is_scope(tree: TokenTree | None) -> bool:
    """`(crate)`, `(self)`, `(super)`, `(in path)`."""
    if tree is None or isinstance(tree, Token) or not tree.trees:
        return False
    head = tree.trees[0]
    return isinstance(head, Token) and head.is_ident() and head.text in VISIBILITY_SCOPES


def _expect_ident(cursor: Cursor, keyword: str, expected: str) -> Token:
    token = cursor.eat_ident(keyword)
    if token is None:
        raise _diverged(cursor, expected)
    return token


def _name(cursor: Cursor) -> Token:
    tree = cursor.peek()
    if not isinstance(tree, Token) or not tree.is_ident() or tree.text in RESERVED_KEYWORDS:
        raise _diverged(cursor, "identifier")
    cursor.advance()
    return tree


def _return_type(cursor: Cursor) -> ReturnType | None:
    """Best-effort `-> Type`.

    No arrow: absent. Arrow with an unparsable type: the clause up to the
    first brace group outside angle brackets is dropped and the return type
    is absent. Never raises.
    """
    arrow = cursor.eat_joint("-", ">")
    if arrow is None:
        return None

    attempt = cursor.fork()
    try:
        trees = parse_type(attempt)
    except TypeSyntaxError:
        cursor.skip_until_group(Delimiter.BRACE)
        return None

    cursor.commit(attempt)
    return ReturnType(arrow=arrow, trees=trees)
