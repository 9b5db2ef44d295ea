"""Tests for domain/exceptions.py."""

from pathlib import Path

import pytest

from logtest.domain.exceptions import (
    LexError,
    LogTestError,
    MalformedSignatureError,
    SourceReadError,
    TypeSyntaxError,
)
from tests.factories import make_span


class TestLogTestError:
    """Tests for LogTestError base exception."""

    def test_is_exception(self) -> None:
        assert issubclass(LogTestError, Exception)

    @pytest.mark.parametrize(
        "exc_type",
        [MalformedSignatureError, LexError, SourceReadError, TypeSyntaxError],
    )
    def test_all_errors_derive_from_base(self, exc_type: type) -> None:
        assert issubclass(exc_type, LogTestError)


class TestMalformedSignatureError:
    """Tests for MalformedSignatureError."""

    def test_is_syntax_error(self) -> None:
        assert issubclass(MalformedSignatureError, SyntaxError)

    def test_attributes(self) -> None:
        span = make_span(column=4, width=6)
        err = MalformedSignatureError(span=span, expected="`fn`", found="struct")
        assert err.span == span
        assert err.expected == "`fn`"
        assert err.found == "struct"

    def test_message_with_found_token(self) -> None:
        err = MalformedSignatureError(span=make_span(), expected="`fn`", found="struct")
        assert err.reason == "expected `fn`, found `struct`"
        assert "expected `fn`, found `struct`" in str(err)

    def test_message_at_end_of_input(self) -> None:
        err = MalformedSignatureError(span=make_span(), expected="`{`", found=None)
        assert err.reason == "expected `{`, found end of input"

    def test_can_catch_as_base(self) -> None:
        with pytest.raises(LogTestError):
            raise MalformedSignatureError(span=make_span(), expected="identifier", found="(")


class TestLexError:
    """Tests for LexError."""

    def test_attributes(self) -> None:
        span = make_span()
        err = LexError(span=span, reason="unterminated block comment")
        assert err.span == span
        assert err.reason == "unterminated block comment"
        assert isinstance(err, SyntaxError)


class TestSourceReadError:
    """Tests for SourceReadError."""

    def test_is_os_error(self) -> None:
        assert issubclass(SourceReadError, OSError)

    def test_message_format(self) -> None:
        err = SourceReadError(path=Path("lib.rs"), reason="file not found")
        assert err.path == Path("lib.rs")
        assert err.reason == "file not found"
        assert "lib.rs" in str(err)
        assert "file not found" in str(err)


class TestTypeSyntaxError:
    """Tests for TypeSyntaxError."""

    def test_attributes(self) -> None:
        err = TypeSyntaxError(span=make_span(), reason="expected type, found `+`")
        assert err.reason == "expected type, found `+`"
        assert isinstance(err, SyntaxError)
