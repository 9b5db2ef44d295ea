"""Rust source adapters: text to token trees and back."""

from logtest.infrastructure.adapters.lexer import tokenize
from logtest.infrastructure.adapters.printer import render

__all__ = ["render", "tokenize"]
