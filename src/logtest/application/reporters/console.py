"""Console reporter: ExpansionResult → rich formatted string."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text

from logtest.application.reporters._base import BaseReporter, count_items

if TYPE_CHECKING:
    from collections.abc import Sequence

    from logtest.domain.model.diagnostic import Diagnostic, ExpansionResult


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    All fields have defaults. Immutable (frozen dataclass).

    Attributes:
        color: Emit ANSI styles.
        show_items: List every expanded function, not only errors.
        width: Console width in columns.
    """

    color: bool = True
    show_items: bool = False
    width: int = 120

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.width <= 0:
            raise ValueError(f"width must be > 0, got {self.width}")


class ConsoleReporter(BaseReporter):
    """Console reporter: rustc-style diagnostics plus a summary line.

    Output is str, not print(). Caller decides destination.
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ConsoleConfig()

    def report(self, results: Sequence[ExpansionResult]) -> str:
        """Format expansion results as rich formatted string.

        Args:
            results: One result per processed file.

        Returns:
            Formatted string, styled when color is enabled.
        """
        output = StringIO()
        console = Console(
            file=output,
            force_terminal=self._config.color,
            color_system="auto" if self._config.color else None,
            width=self._config.width,
            highlight=False,
        )

        for result in results:
            if self._config.show_items:
                self._render_items(console, result)
            for diagnostic in result.diagnostics:
                self._render_diagnostic(console, result, diagnostic)

        self._render_summary(console, results)
        return output.getvalue()

    def _render_items(self, console: Console, result: ExpansionResult) -> None:
        for item in result.items:
            line = Text()
            line.append("expanded", style="bold green")
            line.append(f" {item.name} ")
            line.append("(async)" if item.is_async else "(sync)", style="dim")
            line.append(f" at {item.span}")
            console.print(line)

    def _render_diagnostic(
        self,
        console: Console,
        result: ExpansionResult,
        diagnostic: Diagnostic,
    ) -> None:
        """Render one diagnostic the way rustc does.

        error: expected `fn`, found `struct`
          --> src/lib.rs:3:5
           |
         3 | pub struct Foo {}
           |     ^^^^^^ expected `fn`
        """
        span = diagnostic.span
        lines = result.original.splitlines()
        source_line = lines[span.line - 1] if span.line <= len(lines) else ""
        gutter = " " * len(str(span.line))

        header = Text()
        header.append("error", style="bold red")
        header.append(": ", style="bold")
        header.append(diagnostic.message, style="bold")
        console.print(header)

        arrow = Text()
        arrow.append(f"{gutter}--> ", style="bold blue")
        arrow.append(str(span))
        console.print(arrow)
        console.print(Text(f"{gutter} |", style="bold blue"))

        code = Text()
        code.append(f"{span.line} | ", style="bold blue")
        code.append(source_line)
        console.print(code)

        if span.is_multiline:
            width = max(len(source_line) - span.column, 1)
        else:
            width = max(span.end_column - span.column, 1)
        marker = Text()
        marker.append(f"{gutter} | ", style="bold blue")
        marker.append(" " * span.column + "^" * width, style="bold red")
        if diagnostic.label:
            marker.append(f" {diagnostic.label}", style="bold red")
        console.print(marker)
        console.print()

    def _render_summary(self, console: Console, results: Sequence[ExpansionResult]) -> None:
        items, errors = count_items(results)
        changed = sum(1 for r in results if r.changed)

        summary = Text()
        if errors:
            summary.append(f"{errors} error(s)", style="bold red")
        else:
            summary.append("ok", style="bold green")
        summary.append(
            f": expanded {items} function(s), {changed} of {len(results)} file(s) changed"
        )
        console.print(summary)
