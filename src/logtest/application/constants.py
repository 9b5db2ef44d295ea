"""Rust keywords and the fixed paths emitted by the synthesizer."""

# Strict and reserved keywords: never a plain identifier.
RESERVED_KEYWORDS = frozenset(
    {
        "as",
        "async",
        "await",
        "break",
        "const",
        "continue",
        "crate",
        "dyn",
        "else",
        "enum",
        "extern",
        "false",
        "fn",
        "for",
        "if",
        "impl",
        "in",
        "let",
        "loop",
        "match",
        "mod",
        "move",
        "mut",
        "pub",
        "ref",
        "return",
        "self",
        "Self",
        "static",
        "struct",
        "super",
        "trait",
        "true",
        "type",
        "unsafe",
        "use",
        "where",
        "while",
        "abstract",
        "become",
        "box",
        "do",
        "final",
        "macro",
        "override",
        "priv",
        "try",
        "typeof",
        "unsized",
        "virtual",
        "yield",
        "_",
    },
)

# Keywords allowed as path segments.
PATH_KEYWORDS = frozenset({"self", "Self", "super", "crate"})

# Restrictions accepted inside `pub(...)`.
VISIBILITY_SCOPES = frozenset({"crate", "self", "super", "in"})

# `#[test]`
SYNC_TEST_DIRECTIVE = ("test",)

# `#[tokio::test]`
ASYNC_TEST_DIRECTIVE = ("tokio", "test")

# `let _ = pretty_env_logger::try_init();`
INIT_CALL = ("pretty_env_logger", "try_init")
