"""Token tree printer adapter.

Turns token trees back into Rust source text.

Layout rules, first match wins:
    1. Token directly follows its source predecessor -> original trivia.
    2. Lexed token whose trivia holds a line break or a comment -> original trivia.
    3. Generated token with explicit trivia -> that trivia.
    4. Otherwise the compact spacing below.

So a rewritten function keeps its user's formatting everywhere except at
the seams where generated tokens were inserted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from logtest.domain.model.enums import Spacing
from logtest.domain.model.token import iter_leaves

if TYPE_CHECKING:
    from collections.abc import Iterable

    from logtest.domain.model.token import Token, TokenTree

# No space before these.
_TIGHT_BEFORE = frozenset({";", ",", ")", "]", "."})
# No space after these.
_TIGHT_AFTER = frozenset({"(", "[", "."})


def render(trees: Iterable[TokenTree]) -> str:
    """Render token trees as source text.

    The first token's own trivia is not emitted: the output starts at the
    first token.

    Args:
        trees: Token trees to render

    Returns:
        Rust source text
    """
    parts: list[str] = []
    prev: Token | None = None
    for token in iter_leaves(trees):
        if prev is not None:
            parts.append(separator(prev, token))
        parts.append(token.text)
        prev = token
    return "".join(parts)


def separator(prev: Token, cur: Token) -> str:
    """Text to emit between two consecutive output tokens."""
    if not cur.is_generated:
        if prev.index is not None and cur.index == prev.index + 1:
            return cur.trivia or ""
        if cur.trivia is not None and _keeps_layout(cur.trivia):
            return cur.trivia
    elif cur.trivia is not None:
        return cur.trivia

    if prev.spacing is Spacing.JOINT:
        return ""
    if cur.text in _TIGHT_BEFORE or prev.text in _TIGHT_AFTER:
        return ""
    return " "


def _keeps_layout(trivia: str) -> bool:
    return "\n" in trivia or "/*" in trivia or "//" in trivia
