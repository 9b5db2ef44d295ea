"""Tests for domain/model/function_record.py."""

import pytest

from logtest.domain.model.enums import Delimiter, TokenKind, Visibility
from logtest.domain.model.function_record import FunctionRecord, ReturnType, VisibilityClause
from logtest.domain.model.token import Group
from tests.factories import make_token, parse_source


def _group(delimiter: Delimiter, column: int) -> Group:
    return Group(
        delimiter=delimiter,
        open=make_token(delimiter.open, TokenKind.PUNCT, column),
        close=make_token(delimiter.close, TokenKind.PUNCT, column + 1),
    )


def _record(**overrides: object) -> FunctionRecord:
    fields: dict[str, object] = {
        "visibility": VisibilityClause(kind=Visibility.PRIVATE),
        "async_token": None,
        "fn_token": make_token("fn", column=0),
        "name": make_token("check", column=3),
        "parameters": _group(Delimiter.PARENTHESIS, 8),
        "return_type": None,
        "body": _group(Delimiter.BRACE, 11),
    }
    fields.update(overrides)
    return FunctionRecord(**fields)  # type: ignore[arg-type]


class TestVisibilityClause:
    """Tests for VisibilityClause."""

    def test_private_has_no_tokens(self) -> None:
        assert VisibilityClause(kind=Visibility.PRIVATE).trees == ()

    def test_private_with_tokens_raises(self) -> None:
        with pytest.raises(ValueError, match="private visibility"):
            VisibilityClause(kind=Visibility.PRIVATE, trees=(make_token("pub"),))

    def test_public_without_tokens_raises(self) -> None:
        with pytest.raises(ValueError, match="PUBLIC visibility requires tokens"):
            VisibilityClause(kind=Visibility.PUBLIC)


class TestReturnType:
    """Tests for ReturnType."""

    def test_empty_type_raises(self) -> None:
        arrow = (make_token("-", TokenKind.PUNCT, joint=True), make_token(">", TokenKind.PUNCT, 1))
        with pytest.raises(ValueError, match="must not be empty"):
            ReturnType(arrow=arrow, trees=())

    def test_span_excludes_arrow(self) -> None:
        record = parse_source("fn f() -> Result<(), E> {}")
        assert record.return_type is not None
        span = record.return_type.span
        assert (span.start, span.end) == (10, 23)


class TestFunctionRecord:
    """Tests for FunctionRecord."""

    def test_sync_record(self) -> None:
        record = _record()
        assert not record.is_async
        assert record.span.start == 0
        assert record.span.end == 13

    def test_async_record(self) -> None:
        record = _record(async_token=make_token("async"), fn_token=make_token("fn", column=6))
        assert record.is_async

    def test_span_starts_at_visibility(self) -> None:
        record = parse_source("pub(crate) async fn f() {}")
        assert record.span.start == 0

    def test_fn_token_must_be_fn(self) -> None:
        with pytest.raises(ValueError, match="fn_token must be `fn`"):
            _record(fn_token=make_token("struct"))

    def test_name_must_be_ident(self) -> None:
        with pytest.raises(ValueError, match="name must be an identifier"):
            _record(name=make_token("1", TokenKind.LITERAL))

    def test_async_token_must_be_async(self) -> None:
        with pytest.raises(ValueError, match="async_token must be `async`"):
            _record(async_token=make_token("unsafe"))

    def test_brace_parameters_raise(self) -> None:
        with pytest.raises(ValueError, match="parameters must not be brace-delimited"):
            _record(parameters=_group(Delimiter.BRACE, 8))

    def test_body_must_be_brace(self) -> None:
        with pytest.raises(ValueError, match="body must be brace-delimited"):
            _record(body=_group(Delimiter.PARENTHESIS, 11))
