"""Base reporter class for output formatting.

Provides default implementation of ReporterProtocol.
Concrete reporters inherit from this.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from logtest.domain.model.diagnostic import ExpansionResult


class BaseReporter(ABC):
    """Base class for reporters implementing ReporterProtocol.

    Output is str, not print(). Caller decides destination.

    Example:
        class CountReporter(BaseReporter):
            def report(self, results: Sequence[ExpansionResult]) -> str:
                return f"files: {len(results)}"
    """

    @abstractmethod
    def report(self, results: Sequence[ExpansionResult]) -> str:
        """Format expansion results.

        Args:
            results: One result per processed file

        Returns:
            Formatted string representation.
        """


def count_items(results: Sequence[ExpansionResult]) -> tuple[int, int]:
    """Total (expanded items, diagnostics) over all results."""
    items = sum(len(r.items) for r in results)
    errors = sum(len(r.diagnostics) for r in results)
    return items, errors
