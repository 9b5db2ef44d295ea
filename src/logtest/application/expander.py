"""Expander: the `#[logtest]` entry point and the source-level driver.

expand() is what a compiler would call for one annotated function.
expand_source() plays the compiler's part for a whole `.rs` file: it finds
every annotated function, expands it and splices the result back, leaving
all other text byte-identical.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from logtest.application.cursor import Cursor
from logtest.application.signature_parser import parse, parse_item
from logtest.application.synthesizer import synthesize
from logtest.domain.exceptions import LexError, MalformedSignatureError, SourceReadError
from logtest.domain.model.configuration import ExpansionConfig
from logtest.domain.model.diagnostic import Diagnostic, ExpandedItem, ExpansionResult
from logtest.domain.model.enums import Delimiter
from logtest.domain.model.token import Group, Token, TokenStream
from logtest.infrastructure.adapters.lexer import DEFAULT_FILE, tokenize
from logtest.infrastructure.adapters.printer import render

if TYPE_CHECKING:
    from logtest.domain.model.span import Span
    from logtest.domain.model.token import TokenTree

logger = logging.getLogger(__name__)


def expand(
    attr: TokenStream | str,
    item: TokenStream | str,
    *,
    call_site: Span | None = None,
) -> TokenStream:
    """Expand one annotated function.

    Args:
        attr: Annotation arguments; accepted and ignored
        item: The function item, as tokens or Rust source text
        call_site: Span of the annotation; anchors `#[test]`

    Returns:
        Rewritten function item

    Raises:
        MalformedSignatureError: If the item is not a function with a body
        LexError: If item is text that cannot be tokenized
    """
    if isinstance(attr, str):
        attr = tokenize(attr)
    if isinstance(item, str):
        item = tokenize(item)
    if len(attr):
        logger.debug("ignoring annotation arguments: %s", render(attr))

    record = parse(item, call_site=call_site)
    return synthesize(record, call_site=call_site)


def expand_source(
    source: str,
    path: Path = DEFAULT_FILE,
    config: ExpansionConfig | None = None,
) -> ExpansionResult:
    """Expand every annotated function in a Rust source text.

    Items that fail to parse are left untouched and reported as
    diagnostics. A lexer error leaves the whole text untouched.

    Args:
        source: Rust source text
        path: File name recorded in spans and the result
        config: Expansion configuration (defaults if None)

    Returns:
        Expansion result with the rewritten text
    """
    config = config or ExpansionConfig()

    try:
        stream = tokenize(source, path)
    except LexError as e:
        logger.debug("lexing %s failed: %s", path, e.reason)
        diagnostic = Diagnostic(message=e.reason, span=e.span)
        return ExpansionResult(path=path, original=source, expanded=source, diagnostics=(diagnostic,))

    expansion = _Expansion(config.attribute)
    if stream.trees:
        expansion.walk(stream.trees, stream.trees[-1].span.point_after())

    expanded_source = source
    for start, end, text in reversed(expansion.edits):
        expanded_source = expanded_source[:start] + text + expanded_source[end:]

    return ExpansionResult(
        path=path,
        original=source,
        expanded=expanded_source,
        items=tuple(expansion.items),
        diagnostics=tuple(expansion.diagnostics),
    )


def expand_file(path: Path, config: ExpansionConfig | None = None) -> ExpansionResult:
    """Read and expand one Rust source file.

    FAIL-FIRST: raises SourceReadError on file errors.

    Args:
        path: Path to .rs file
        config: Expansion configuration (defaults if None)

    Returns:
        Expansion result; the file itself is not modified

    Raises:
        SourceReadError: If the file cannot be read or decoded
    """
    try:
        source = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise SourceReadError(path=path, reason="file not found") from e
    except IsADirectoryError as e:
        raise SourceReadError(path=path, reason="is a directory") from e
    except PermissionError as e:
        raise SourceReadError(path=path, reason="permission denied") from e
    except UnicodeDecodeError as e:
        raise SourceReadError(path=path, reason=f"encoding error: {e}") from e

    result = expand_source(source, path, config)
    logger.info("%s: %d expanded, %d error(s)", path, len(result.items), len(result.diagnostics))
    return result


class _Expansion:
    """Accumulates edits, items and diagnostics for one source text.

    Edits are collected in source order and never overlap: once an item is
    expanded its tokens are skipped, so annotations inside its body are
    left alone.
    """

    def __init__(self, attribute: str) -> None:
        self._attribute = attribute
        self.edits: list[tuple[int, int, str]] = []
        self.items: list[ExpandedItem] = []
        self.diagnostics: list[Diagnostic] = []

    def walk(self, trees: tuple[TokenTree, ...], end: Span) -> None:
        """Expand annotations in trees and, recursively, in their groups.

        Args:
            trees: Sibling token trees
            end: Span reported when an item runs off the end of trees
        """
        i = 0
        while i < len(trees):
            tree = trees[i]
            marker = trees[i + 1] if i + 1 < len(trees) else None
            if (
                isinstance(tree, Token)
                and tree.is_punct("#")
                and isinstance(marker, Group)
                and _is_marker(marker, self._attribute)
            ):
                i = self._expand_at(trees, i, end)
                continue
            if isinstance(tree, Group):
                self.walk(tree.trees, tree.close.span)
            i += 1

    def _expand_at(self, trees: tuple[TokenTree, ...], at: int, end: Span) -> int:
        """Expand the item annotated at trees[at], return the index to resume at."""
        hash_token = trees[at]
        marker = trees[at + 1]
        call_site = hash_token.span.join(marker.span)
        if isinstance(marker, Group) and marker.trees and isinstance(marker.trees[-1], Group):
            logger.debug("ignoring arguments of annotation at %s", call_site)

        cursor = Cursor(trees, end, at + 2)
        try:
            record = parse_item(cursor)
        except MalformedSignatureError as e:
            logger.debug("cannot expand annotation at %s: %s", call_site, e.reason)
            self.diagnostics.append(
                Diagnostic(message=e.reason, span=e.span, label=f"expected {e.expected}")
            )
            return at + 2

        span = call_site.join(record.body.span)
        self.edits.append((span.start, span.end, render(synthesize(record, call_site=call_site))))
        self.items.append(ExpandedItem(name=record.name.text, is_async=record.is_async, span=span))
        logger.debug("expanded %s at %s (async=%s)", record.name.text, span, record.is_async)
        return cursor.position


def _is_marker(group: Group, attribute: str) -> bool:
    """`[logtest]`, `[logtest(...)]`, `[::some::path::logtest]`."""
    if group.delimiter is not Delimiter.BRACKET:
        return False
    trees = group.trees
    if trees and isinstance(trees[-1], Group) and trees[-1].delimiter is Delimiter.PARENTHESIS:
        trees = trees[:-1]
    if not trees:
        return False

    last = trees[-1]
    if not isinstance(last, Token) or not last.is_ident(attribute):
        return False

    # Path prefix: optional leading `::`, then `ident ::` pairs.
    prefix = list(trees[:-1])
    if len(prefix) % 3 == 2:
        prefix = [None, *prefix]
    for i in range(0, len(prefix), 3):
        head, first, second = prefix[i : i + 3]
        if head is not None and not (isinstance(head, Token) and head.is_ident()):
            return False
        if not all(isinstance(t, Token) and t.is_punct(":") for t in (first, second)):
            return False
    return len(prefix) % 3 == 0
