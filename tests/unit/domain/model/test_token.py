"""Tests for domain/model/token.py and domain/model/enums.py."""

import pytest

from logtest.domain.model.enums import Delimiter, Spacing, TokenKind
from logtest.domain.model.token import Group, Token, TokenStream, iter_leaves
from tests.factories import make_span, make_token


def _group(delimiter: Delimiter, column: int = 0, trees: tuple = ()) -> Group:
    return Group(
        delimiter=delimiter,
        open=make_token(delimiter.open, TokenKind.PUNCT, column),
        close=make_token(delimiter.close, TokenKind.PUNCT, column + 10),
        trees=trees,
    )


class TestDelimiter:
    """Tests for Delimiter enum."""

    def test_open_close(self) -> None:
        assert Delimiter.BRACE.open == "{"
        assert Delimiter.BRACE.close == "}"

    @pytest.mark.parametrize(
        ("char", "expected"),
        [("(", Delimiter.PARENTHESIS), ("[", Delimiter.BRACKET), ("{", Delimiter.BRACE)],
    )
    def test_from_open(self, char: str, expected: Delimiter) -> None:
        assert Delimiter.from_open(char) is expected

    def test_from_open_rejects_close(self) -> None:
        with pytest.raises(ValueError, match="not an opening delimiter"):
            Delimiter.from_open(")")


class TestToken:
    """Tests for Token."""

    def test_defaults(self) -> None:
        token = Token(text="fn", kind=TokenKind.IDENT, span=make_span(width=2))
        assert token.spacing is Spacing.ALONE
        assert token.index is None
        assert token.trivia is None
        assert token.is_generated

    def test_lexed_token_is_not_generated(self) -> None:
        assert not make_token("fn", index=0).is_generated

    def test_is_ident(self) -> None:
        token = make_token("async")
        assert token.is_ident()
        assert token.is_ident("async")
        assert not token.is_ident("fn")
        assert not token.is_punct()

    def test_is_punct(self) -> None:
        token = make_token("#", TokenKind.PUNCT)
        assert token.is_punct()
        assert token.is_punct("#")
        assert not token.is_punct("!")
        assert not token.is_ident()

    def test_empty_text_raises(self) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            Token(text="", kind=TokenKind.IDENT, span=make_span())

    def test_multichar_punct_raises(self) -> None:
        with pytest.raises(ValueError, match="one character"):
            Token(text="->", kind=TokenKind.PUNCT, span=make_span(width=2))

    def test_negative_index_raises(self) -> None:
        with pytest.raises(ValueError, match="index must be >= 0"):
            Token(text="x", kind=TokenKind.IDENT, span=make_span(), index=-1)


class TestGroup:
    """Tests for Group."""

    def test_span_covers_delimiters(self) -> None:
        group = _group(Delimiter.PARENTHESIS)
        assert group.span.start == 0
        assert group.span.end == 11

    def test_leaves_include_delimiters(self) -> None:
        inner = _group(Delimiter.PARENTHESIS, column=2)
        outer = _group(Delimiter.BRACE, trees=(make_token("f", column=1), inner))
        assert [t.text for t in outer.leaves()] == ["{", "f", "(", ")", "}"]

    def test_mismatched_open_raises(self) -> None:
        with pytest.raises(ValueError, match="open token"):
            Group(
                delimiter=Delimiter.BRACE,
                open=make_token("(", TokenKind.PUNCT),
                close=make_token("}", TokenKind.PUNCT),
            )

    def test_mismatched_close_raises(self) -> None:
        with pytest.raises(ValueError, match="close token"):
            Group(
                delimiter=Delimiter.BRACKET,
                open=make_token("[", TokenKind.PUNCT),
                close=make_token(")", TokenKind.PUNCT),
            )


class TestTokenStream:
    """Tests for TokenStream and helpers."""

    def test_empty(self) -> None:
        stream = TokenStream()
        assert len(stream) == 0
        assert list(stream) == []

    def test_iter_and_len(self) -> None:
        a, b = make_token("a"), make_token("b", column=2)
        stream = TokenStream((a, b))
        assert len(stream) == 2
        assert list(stream) == [a, b]

    def test_leaves_flatten_groups(self) -> None:
        stream = TokenStream((make_token("f"), _group(Delimiter.PARENTHESIS, column=1)))
        assert [t.text for t in stream.leaves()] == ["f", "(", ")"]

    def test_iter_leaves_matches_stream(self) -> None:
        trees = (make_token("f"), _group(Delimiter.BRACKET, column=1))
        assert list(iter_leaves(trees)) == list(TokenStream(trees).leaves())

