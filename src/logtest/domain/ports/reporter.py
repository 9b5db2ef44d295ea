"""Reporter protocol for output formatting.

Users extend logtest by implementing this Protocol.
NOT rich-specific - users can adapt to any output format.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from logtest.domain.model.diagnostic import ExpansionResult


class ReporterProtocol(Protocol):
    """Contract for reporters.

    Output is str, not print(). Caller decides destination.
    logtest provides ConsoleReporter and JSONReporter.
    """

    def report(self, results: Sequence[ExpansionResult]) -> str:
        """Format expansion results.

        Args:
            results: One result per processed file, in processing order

        Returns:
            Formatted string representation.
        """
        ...
