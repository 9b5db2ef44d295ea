"""Rust lexer adapter.

Splits Rust source text into token trees the way the compiler hands them to
an attribute macro: identifiers, single-character punctuation with
joint/alone spacing, literals, lifetimes, and delimited groups.
Whitespace and comments (doc comments included) become the trivia of the
following token, so the printer can reproduce the original layout.

FAIL-FIRST: raises LexError on unterminated literals or comments,
unbalanced delimiters and characters that cannot start a token.
"""

from __future__ import annotations

from bisect import bisect_right
from pathlib import Path

from logtest.domain.exceptions import LexError
from logtest.domain.model.enums import Delimiter, Spacing, TokenKind
from logtest.domain.model.span import Span
from logtest.domain.model.token import Group, Token, TokenStream, TokenTree

DEFAULT_FILE = Path("<input>")

PUNCT_CHARS = frozenset("+-*/%^!&|=<>@.,;:#$?~\\")
OPEN_DELIMITERS = frozenset("([{")
CLOSE_DELIMITERS = {")": Delimiter.PARENTHESIS, "]": Delimiter.BRACKET, "}": Delimiter.BRACE}

# Prefixes that turn a following quote into a literal: b"..", br#"..", c"..", r"..".
_STRING_PREFIXES = ("br", "cr", "b", "c", "r")


def tokenize(source: str, file: Path = DEFAULT_FILE) -> TokenStream:
    """Lex Rust source text into token trees.

    Args:
        source: Rust source text
        file: Path recorded in every span

    Returns:
        Top-level token trees

    Raises:
        LexError: If the text is not lexically valid Rust
    """
    return _Lexer(source, file).run()


class _Lexer:
    """Single-use scanner over one source text."""

    def __init__(self, source: str, file: Path) -> None:
        self._src = source
        self._file = file
        self._pos = 0
        self._index = 0
        self._line_starts = [0]
        self._line_starts.extend(i + 1 for i, ch in enumerate(source) if ch == "\n")

    # -- driver ---------------------------------------------------------------

    def run(self) -> TokenStream:
        root: list[TokenTree] = []
        # Open groups, innermost last: (delimiter, open token, children).
        stack: list[tuple[Delimiter, Token, list[TokenTree]]] = []

        while True:
            trivia = self._skip_trivia()
            if self._pos >= len(self._src):
                break

            start = self._pos
            ch = self._src[start]
            siblings = stack[-1][2] if stack else root

            if ch in OPEN_DELIMITERS:
                self._pos += 1
                token = self._make(start, TokenKind.PUNCT, trivia)
                stack.append((Delimiter.from_open(ch), token, []))
                continue

            if ch in CLOSE_DELIMITERS:
                self._pos += 1
                close = self._make(start, TokenKind.PUNCT, trivia)
                if not stack:
                    raise LexError(span=close.span, reason=f"unexpected closing delimiter `{ch}`")
                delimiter, open_token, children = stack.pop()
                if CLOSE_DELIMITERS[ch] is not delimiter:
                    raise LexError(
                        span=close.span,
                        reason=f"mismatched closing delimiter `{ch}` for `{delimiter.open}` "
                        f"opened at {open_token.span}",
                    )
                group = Group(delimiter=delimiter, open=open_token, close=close, trees=tuple(children))
                (stack[-1][2] if stack else root).append(group)
                continue

            siblings.append(self._leaf(start, trivia))

        if stack:
            delimiter, open_token, _ = stack[-1]
            raise LexError(span=open_token.span, reason=f"unclosed delimiter `{delimiter.open}`")

        return TokenStream(tuple(root))

    def _leaf(self, start: int, trivia: str) -> Token:
        src = self._src
        ch = src[start]

        if ch == "_" or ch.isalpha():
            if self._try_prefixed_literal(start):
                return self._make(start, TokenKind.LITERAL, trivia)
            if src.startswith("r#", start) and self._is_ident_start(start + 2):
                self._pos = start + 2
            self._scan_ident_rest()
            return self._make(start, TokenKind.IDENT, trivia)

        if ch.isdigit():
            self._scan_number()
            return self._make(start, TokenKind.LITERAL, trivia)

        if ch == '"':
            self._scan_string(start)
            self._scan_ident_rest()
            return self._make(start, TokenKind.LITERAL, trivia)

        if ch == "'":
            return self._quote(start, trivia)

        if ch in PUNCT_CHARS:
            self._pos += 1
            joint = self._pos < len(src) and src[self._pos] in PUNCT_CHARS
            return self._make(start, TokenKind.PUNCT, trivia, Spacing.JOINT if joint else Spacing.ALONE)

        self._pos += 1
        raise LexError(span=self._span(start, self._pos), reason=f"unknown start of token: {ch!r}")

    # -- scanners -------------------------------------------------------------

    def _skip_trivia(self) -> str:
        """Skip whitespace and comments, return the skipped text."""
        src = self._src
        begin = self._pos
        while self._pos < len(src):
            ch = src[self._pos]
            if ch.isspace() or ch == "\ufeff":
                self._pos += 1
            elif src.startswith("//", self._pos):
                end = src.find("\n", self._pos)
                self._pos = len(src) if end == -1 else end
            elif src.startswith("/*", self._pos):
                self._skip_block_comment()
            elif self._pos == 0 and src.startswith("#!") and not src.startswith("#![", 0):
                end = src.find("\n")
                self._pos = len(src) if end == -1 else end
            else:
                break
        return src[begin : self._pos]

    def _skip_block_comment(self) -> None:
        src = self._src
        start = self._pos
        depth = 0
        while self._pos < len(src):
            if src.startswith("/*", self._pos):
                depth += 1
                self._pos += 2
            elif src.startswith("*/", self._pos):
                depth -= 1
                self._pos += 2
                if depth == 0:
                    return
            else:
                self._pos += 1
        raise LexError(span=self._span(start, start + 2), reason="unterminated block comment")

    def _is_ident_start(self, pos: int) -> bool:
        return pos < len(self._src) and (self._src[pos] == "_" or self._src[pos].isalpha())

    def _scan_ident_rest(self) -> None:
        src = self._src
        while self._pos < len(src) and (src[self._pos] == "_" or src[self._pos].isalnum()):
            self._pos += 1

    def _try_prefixed_literal(self, start: int) -> bool:
        """Scan b"..", b'..', r"..", r#"..."#, br"..", c".." starting at start.

        Returns:
            True if a literal was scanned, False if the text is an identifier
        """
        src = self._src
        for prefix in _STRING_PREFIXES:
            if not src.startswith(prefix, start):
                continue
            after = start + len(prefix)
            raw = prefix.endswith("r")
            if raw:
                hashes = after
                while hashes < len(src) and src[hashes] == "#":
                    hashes += 1
                if hashes < len(src) and src[hashes] == '"':
                    self._scan_raw_string(start, after, hashes - after)
                    self._scan_ident_rest()
                    return True
                continue
            if after < len(src) and src[after] == '"':
                self._pos = after
                self._scan_string(start)
                self._scan_ident_rest()
                return True
            if prefix == "b" and after < len(src) and src[after] == "'":
                self._pos = after
                self._scan_char(start)
                self._scan_ident_rest()
                return True
        return False

    def _scan_string(self, start: int) -> None:
        """Scan a quoted string, self._pos at the opening quote."""
        src = self._src
        self._pos += 1
        while self._pos < len(src):
            ch = src[self._pos]
            if ch == "\\":
                self._pos += 2
            elif ch == '"':
                self._pos += 1
                return
            else:
                self._pos += 1
        raise LexError(span=self._span(start, start + 1), reason="unterminated double quote string")

    def _scan_raw_string(self, start: int, hashes_at: int, count: int) -> None:
        src = self._src
        terminator = '"' + "#" * count
        body = hashes_at + count + 1
        end = src.find(terminator, body)
        if end == -1:
            raise LexError(span=self._span(start, body), reason="unterminated raw string")
        self._pos = end + len(terminator)

    def _scan_char(self, start: int) -> None:
        """Scan a char literal, self._pos at the opening quote."""
        src = self._src
        self._pos += 1
        if src.startswith("\\u{", self._pos):
            close = src.find("}", self._pos)
            self._pos = len(src) if close == -1 else close + 1
        elif src.startswith("\\", self._pos):
            self._pos += 2
            if src[self._pos - 1 : self._pos] == "x":
                self._pos += 2
        else:
            self._pos += 1
        if self._pos >= len(src) or src[self._pos] != "'":
            raise LexError(span=self._span(start, start + 1), reason="unterminated character literal")
        self._pos += 1

    def _quote(self, start: int, trivia: str) -> Token:
        """Lifetime ('a, 'static) or character literal ('a', '\\n')."""
        src = self._src
        nxt = start + 1
        is_char = nxt < len(src) and (
            src[nxt] == "\\" or (nxt + 1 < len(src) and src[nxt + 1] == "'")
        )
        if is_char:
            self._pos = start
            self._scan_char(start)
            return self._make(start, TokenKind.LITERAL, trivia)
        if self._is_ident_start(nxt):
            self._pos = nxt
            self._scan_ident_rest()
            return self._make(start, TokenKind.LIFETIME, trivia)
        raise LexError(span=self._span(start, start + 1), reason="unterminated character literal")

    def _scan_number(self) -> None:
        src = self._src
        start = self._pos
        hex_like = src.startswith(("0x", "0X", "0b", "0o"), start)
        self._scan_ident_rest()
        if not hex_like:
            self._scan_exponent_sign(start)
            # Fraction: `1.5` but not `1..2` or `1.max(2)`.
            if (
                self._pos + 1 < len(src)
                and src[self._pos] == "."
                and src[self._pos + 1].isdigit()
            ):
                self._pos += 1
                self._scan_ident_rest()
                self._scan_exponent_sign(start)

    def _scan_exponent_sign(self, start: int) -> None:
        """Continue `1e` into `1e-5` / `1e+5`, leaving `2usize-1` alone."""
        src = self._src
        mantissa = src[start : self._pos - 1].replace("_", "").replace(".", "")
        if (
            mantissa.isdigit()
            and self._pos + 1 < len(src)
            and src[self._pos - 1] in "eE"
            and src[self._pos] in "+-"
            and src[self._pos + 1].isdigit()
        ):
            self._pos += 1
            self._scan_ident_rest()

    # -- token construction ---------------------------------------------------

    def _make(
        self,
        start: int,
        kind: TokenKind,
        trivia: str,
        spacing: Spacing = Spacing.ALONE,
    ) -> Token:
        token = Token(
            text=self._src[start : self._pos],
            kind=kind,
            span=self._span(start, self._pos),
            spacing=spacing,
            index=self._index,
            trivia=trivia,
        )
        self._index += 1
        return token

    def _span(self, start: int, end: int) -> Span:
        line, column = self._position(start)
        end_line, end_column = self._position(end)
        return Span(
            file=self._file,
            line=line,
            column=column,
            end_line=end_line,
            end_column=end_column,
            start=start,
            end=end,
        )

    def _position(self, offset: int) -> tuple[int, int]:
        """1-based line and 0-based column of a character offset."""
        line = bisect_right(self._line_starts, offset)
        return line, offset - self._line_starts[line - 1]
