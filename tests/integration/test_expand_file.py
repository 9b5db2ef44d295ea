"""Integration tests: expanding a realistic Rust test module end to end."""

import io
from pathlib import Path

import logtest
from logtest.domain.exceptions import LogTestError
from logtest.presentation.cli import EXIT_FAILED, EXIT_OK, main

INIT = "let _ = pretty_env_logger::try_init();"

SOURCE = '''\
//! Integration tests for the cache.

use std::time::Duration;

use mycrate::Cache;

fn helper() -> Cache {
    Cache::new(Duration::from_secs(1))
}

#[cfg(test)]
mod tests {
    use super::*;

    /// Inserting then reading returns the value.
    #[logtest]
    fn insert_then_get() {
        let cache = helper();
        cache.insert("k", 1);
        assert_eq!(cache.get("k"), Some(&1));
    }

    #[logtest]
    #[ignore]
    pub(crate) async fn expires() -> Result<(), Box<dyn std::error::Error>> {
        let cache = helper();
        tokio::time::sleep(Duration::from_millis(1_100)).await;
        assert!(cache.get("k").is_none());
        Ok(())
    }

    #[logtest]
    fn empty() {}

    #[logtest]
    const NOT_A_FUNCTION: u8 = 1;
}
'''

EXPECTED = f'''\
//! Integration tests for the cache.

use std::time::Duration;

use mycrate::Cache;

fn helper() -> Cache {{
    Cache::new(Duration::from_secs(1))
}}

#[cfg(test)]
mod tests {{
    use super::*;

    /// Inserting then reading returns the value.
    #[test]
    fn insert_then_get() {{
        {INIT}
        let cache = helper();
        cache.insert("k", 1);
        assert_eq!(cache.get("k"), Some(&1));
    }}

    #[tokio::test]
    pub(crate) async fn expires() -> Result<(), Box<dyn std::error::Error>> {{
        {INIT}
        let cache = helper();
        tokio::time::sleep(Duration::from_millis(1_100)).await;
        assert!(cache.get("k").is_none());
        Ok(())
    }}

    #[test]
    fn empty() {{ {INIT} }}

    #[logtest]
    const NOT_A_FUNCTION: u8 = 1;
}}
'''


class TestExpandRealisticModule:
    """Expand a module mixing annotated and plain items."""

    def test_expand_source(self) -> None:
        result = logtest.expand_source(SOURCE, Path("tests/cache.rs"))
        assert result.expanded == EXPECTED
        assert [(i.name, i.is_async) for i in result.items] == [
            ("insert_then_get", False),
            ("expires", True),
            ("empty", False),
        ]
        (diagnostic,) = result.diagnostics
        assert diagnostic.message == "expected `fn`, found `const`"
        assert diagnostic.span.file == Path("tests/cache.rs")

    def test_cli_in_place(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.rs"
        path.write_text(SOURCE, encoding="utf-8")
        code = main(["--in-place", str(path)], stdout=io.StringIO(), stderr=io.StringIO())
        assert code == EXIT_FAILED
        assert path.read_text(encoding="utf-8") == EXPECTED

    def test_expanded_output_is_stable(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.rs"
        path.write_text(EXPECTED.replace("#[logtest]\n    const", "const"), encoding="utf-8")
        code = main(["--check", str(path)], stdout=io.StringIO(), stderr=io.StringIO())
        assert code == EXIT_OK


class TestPublicApi:
    """The package root re-exports the entry points."""

    def test_expand_entry_point(self) -> None:
        out = logtest.expand("", "fn f() { g(); }")
        assert logtest.__version__ == "0.1.0"
        assert len(out) == 6

    def test_errors_share_base(self) -> None:
        assert issubclass(logtest.MalformedSignatureError, LogTestError)

