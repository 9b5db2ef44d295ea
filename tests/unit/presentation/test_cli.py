"""Tests for presentation/cli.py."""

import io
import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from logtest.presentation.cli import EXIT_FAILED, EXIT_OK, EXIT_USAGE, build_parser, main

INIT = "let _ = pretty_env_logger::try_init();"
ANNOTATED = "#[logtest]\nfn a() {\n    g();\n}\n"
EXPANDED = f"#[test]\nfn a() {{\n    {INIT}\n    g();\n}}\n"


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    yield
    package_logger = logging.getLogger("logtest")
    package_logger.handlers.clear()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def _run(*argv: str) -> tuple[int, str, str]:
    out, err = io.StringIO(), io.StringIO()
    code = main(list(argv), stdout=out, stderr=err)
    return code, out.getvalue(), err.getvalue()


class TestBuildParser:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        args = build_parser().parse_args(["lib.rs"])
        assert args.files == [Path("lib.rs")]
        assert args.attribute == "logtest"
        assert args.format == "console"
        assert not args.in_place
        assert not args.check
        assert args.verbose == 0

    def test_in_place_and_check_exclusive(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--in-place", "--check", "lib.rs"])
        assert exc_info.value.code == EXIT_USAGE

    def test_files_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "logtest-expand 0.1.0" in capsys.readouterr().out


class TestMainPrint:
    """Default mode prints expanded sources."""

    def test_prints_expanded_source(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "lib.rs", ANNOTATED)
        code, out, err = _run(str(path))
        assert code == EXIT_OK
        assert out == EXPANDED
        assert "ok: expanded 1 function(s), 1 of 1 file(s) changed" in err
        assert path.read_text(encoding="utf-8") == ANNOTATED

    def test_prints_unchanged_source(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "lib.rs", "fn main() {}\n")
        code, out, _ = _run(str(path))
        assert code == EXIT_OK
        assert out == "fn main() {}\n"

    def test_diagnostics_fail(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "lib.rs", "#[logtest]\nstruct S;\n")
        code, out, err = _run(str(path))
        assert code == EXIT_FAILED
        assert out == "#[logtest]\nstruct S;\n"
        assert "error: expected `fn`, found `struct`" in err
        assert "1 error(s)" in err

    def test_custom_attribute(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "lib.rs", "#[traced]\nfn a() {}\n")
        code, out, _ = _run("--attribute", "traced", str(path))
        assert code == EXIT_OK
        assert out.startswith("#[test]\nfn a()")

    def test_verbose_lists_items(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "lib.rs", ANNOTATED)
        code, _, err = _run("-v", str(path))
        assert code == EXIT_OK
        assert "expanded a (sync)" in err


class TestMainModes:
    """--in-place and --check."""

    def test_in_place_rewrites(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "lib.rs", ANNOTATED)
        code, out, _ = _run("--in-place", str(path))
        assert code == EXIT_OK
        assert out == ""
        assert path.read_text(encoding="utf-8") == EXPANDED

    def test_in_place_skips_unchanged(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "lib.rs", "fn main() {}\n")
        before = path.stat().st_mtime_ns
        code, _, _ = _run("--in-place", str(path))
        assert code == EXIT_OK
        assert path.stat().st_mtime_ns == before

    def test_check_fails_on_change(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "lib.rs", ANNOTATED)
        code, out, err = _run("--check", str(path))
        assert code == EXIT_FAILED
        assert out == ""
        assert "would be rewritten" in " ".join(err.split())
        assert path.read_text(encoding="utf-8") == ANNOTATED

    def test_check_passes_without_annotations(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "lib.rs", "fn main() {}\n")
        code, _, _ = _run("--check", str(path))
        assert code == EXIT_OK


class TestMainJson:
    """--format json."""

    def test_json_report_on_stdout(self, tmp_path: Path) -> None:
        first = _write(tmp_path, "a.rs", ANNOTATED)
        second = _write(tmp_path, "b.rs", "fn main() {}\n")
        code, out, _ = _run("--format", "json", str(first), str(second))
        assert code == EXIT_OK
        data = json.loads(out)
        assert data["summary"] == {"files": 2, "changed_files": 1, "expanded": 1, "errors": 0}
        assert [f["path"] for f in data["files"]] == [str(first), str(second)]

    def test_json_with_diagnostics(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "lib.rs", "#[logtest]\nfn ();\n")
        code, out, _ = _run("--format", "json", str(path))
        assert code == EXIT_FAILED
        assert json.loads(out)["ok"] is False


class TestMainUsageErrors:
    """Exit code 2."""

    def test_missing_file(self, tmp_path: Path) -> None:
        code, out, err = _run(str(tmp_path / "missing.rs"))
        assert code == EXIT_USAGE
        assert out == ""
        assert "file not found" in " ".join(err.split())

    def test_invalid_attribute(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "lib.rs", ANNOTATED)
        code, _, err = _run("--attribute", "log-test", str(path))
        assert code == EXIT_USAGE
        assert "invalid --attribute" in " ".join(err.split())
