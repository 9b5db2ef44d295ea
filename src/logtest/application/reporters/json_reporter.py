"""JSON reporter for machine-readable output.

Stdlib-only reporter for JSON output.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from logtest.application.reporters._base import BaseReporter, count_items

if TYPE_CHECKING:
    from collections.abc import Sequence

    from logtest.domain.model.diagnostic import Diagnostic, ExpandedItem, ExpansionResult
    from logtest.domain.model.span import Span


class JSONReporter(BaseReporter):
    """JSON reporter for machine-readable output.

    Outputs expansion results as JSON for CI integration
    or parsing by other tools.
    """

    def __init__(self, *, indent: int | None = 2) -> None:
        """Initialize reporter.

        Args:
            indent: JSON indentation (default: 2, None for compact)
        """
        self._indent = indent

    def report(self, results: Sequence[ExpansionResult]) -> str:
        """Format expansion results as a JSON document.

        Args:
            results: One result per processed file

        Returns:
            JSON text, newline-terminated
        """
        return json.dumps(self._results_to_dict(results), indent=self._indent) + "\n"

    def _results_to_dict(self, results: Sequence[ExpansionResult]) -> dict[str, object]:
        items, errors = count_items(results)
        return {
            "ok": errors == 0,
            "summary": {
                "files": len(results),
                "changed_files": sum(1 for r in results if r.changed),
                "expanded": items,
                "errors": errors,
            },
            "files": [self._result_to_dict(r) for r in results],
        }

    def _result_to_dict(self, result: ExpansionResult) -> dict[str, object]:
        return {
            "path": str(result.path),
            "changed": result.changed,
            "items": [self._item_to_dict(i) for i in result.items],
            "diagnostics": [self._diagnostic_to_dict(d) for d in result.diagnostics],
        }

    def _item_to_dict(self, item: ExpandedItem) -> dict[str, object]:
        return {
            "name": item.name,
            "is_async": item.is_async,
            "span": _span_to_dict(item.span),
        }

    def _diagnostic_to_dict(self, diagnostic: Diagnostic) -> dict[str, object]:
        return {
            "level": "error",
            "message": diagnostic.message,
            "label": diagnostic.label,
            "span": _span_to_dict(diagnostic.span),
        }


def _span_to_dict(span: Span) -> dict[str, object]:
    """Span with 1-based columns, as editors and rustc show them."""
    return {
        "file": str(span.file),
        "line": span.line,
        "column": span.column + 1,
        "end_line": span.end_line,
        "end_column": span.end_column + 1,
    }
