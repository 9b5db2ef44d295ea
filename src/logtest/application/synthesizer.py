"""Code synthesizer: FunctionRecord to output token stream.

Output shape (fixed order):

    #[test] | #[tokio::test]
    vis async? fn name(params) (-> Type)? {
        let _ = pretty_env_logger::try_init();
        original body...
    }

Generated tokens borrow the span of the record field they stand for, so
compiler errors in the expanded code point at the user's source:

    #[tokio::test]          async token (missing tokio is reported there)
    #[test]                 annotation (call site)
    ->                      return type
    let _ = ...try_init();  body

All other tokens are the record's own tokens, re-emitted unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from logtest.application.constants import ASYNC_TEST_DIRECTIVE, INIT_CALL, SYNC_TEST_DIRECTIVE
from logtest.domain.model.enums import Delimiter, Spacing, TokenKind
from logtest.domain.model.token import Group, Token, TokenStream, iter_leaves

if TYPE_CHECKING:
    from logtest.domain.model.function_record import FunctionRecord
    from logtest.domain.model.span import Span
    from logtest.domain.model.token import TokenTree

BODY_INDENT = "    "


def synthesize(record: FunctionRecord, *, call_site: Span | None = None) -> TokenStream:
    """Build the rewritten function item.

    Args:
        record: Parsed function
        call_site: Span of the annotation; anchors `#[test]`.
            Defaults to the span of the function item.

    Returns:
        Output token stream
    """
    trees: list[TokenTree] = []
    trees.extend(_directive(record, call_site or record.span))
    trees.extend(record.visibility.trees)
    if record.async_token is not None:
        trees.append(record.async_token)
    trees.append(record.fn_token)
    trees.append(record.name)
    trees.append(record.parameters)
    if record.return_type is not None:
        trees.extend(_arrow(record.return_type.span))
        trees.extend(record.return_type.trees)
    trees.append(_body(record))
    return TokenStream(tuple(trees))


def _ident(text: str, span: Span, *, joint: bool = False, trivia: str | None = None) -> Token:
    spacing = Spacing.JOINT if joint else Spacing.ALONE
    return Token(text=text, kind=TokenKind.IDENT, span=span, spacing=spacing, trivia=trivia)


def _punct(char: str, span: Span, *, joint: bool = False) -> Token:
    spacing = Spacing.JOINT if joint else Spacing.ALONE
    return Token(text=char, kind=TokenKind.PUNCT, span=span, spacing=spacing)


def _group(delimiter: Delimiter, span: Span, trees: tuple[TokenTree, ...] = ()) -> Group:
    return Group(
        delimiter=delimiter,
        open=_punct(delimiter.open, span),
        close=_punct(delimiter.close, span),
        trees=trees,
    )


def _path(segments: tuple[str, ...], span: Span, *, glue_last: bool = False) -> list[TokenTree]:
    """`a::b::c` with every token at span."""
    trees: list[TokenTree] = []
    for i, segment in enumerate(segments):
        last = i == len(segments) - 1
        trees.append(_ident(segment, span, joint=glue_last or not last))
        if not last:
            trees.append(_punct(":", span, joint=True))
            trees.append(_punct(":", span, joint=True))
    return trees


def _directive(record: FunctionRecord, call_site: Span) -> tuple[TokenTree, ...]:
    if record.async_token is not None:
        path, anchor = ASYNC_TEST_DIRECTIVE, record.async_token.span
    else:
        path, anchor = SYNC_TEST_DIRECTIVE, call_site
    return (
        _punct("#", anchor, joint=True),
        _group(Delimiter.BRACKET, anchor, tuple(_path(path, anchor))),
    )


def _arrow(span: Span) -> tuple[Token, Token]:
    return _punct("-", span, joint=True), _punct(">", span)


def _body(record: FunctionRecord) -> Group:
    """Original braces around the init statement and the original contents."""
    body = record.body
    span = body.span

    # let _ = pretty_env_logger::try_init();
    init: list[TokenTree] = [
        _ident("let", span, trivia=_statement_layout(record)),
        _ident("_", span),
        _punct("=", span),
        *_path(INIT_CALL, span, glue_last=True),
        _group(Delimiter.PARENTHESIS, span),
        _punct(";", span),
    ]

    return Group(
        delimiter=Delimiter.BRACE,
        open=body.open,
        close=body.close,
        trees=(*init, *body.trees),
    )


def _statement_layout(record: FunctionRecord) -> str | None:
    """Line break and indentation for the inserted statement.

    Follows the first original statement; for an empty body, one level
    deeper than the closing brace. None keeps it on the brace's line.
    """
    body = record.body
    first = next(iter_leaves(body.trees), None)
    if first is not None:
        trivia = first.trivia
        if trivia is not None and "\n" in trivia:
            return _last_line_break(trivia)
        return None

    trivia = body.close.trivia
    if trivia is not None and "\n" in trivia:
        return _last_line_break(trivia) + BODY_INDENT
    return None


def _last_line_break(trivia: str) -> str:
    """Final line terminator of trivia with the indentation after it."""
    head, _, indent = trivia.rpartition("\n")
    newline = "\r\n" if head.endswith("\r") else "\n"
    return newline + indent
