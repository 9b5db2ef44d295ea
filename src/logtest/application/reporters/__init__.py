"""Reporters for expansion results.

ConsoleReporter renders rustc-style diagnostics with rich.
JSONReporter is stdlib-only, for tools and CI.
"""

from logtest.application.reporters._base import BaseReporter
from logtest.application.reporters.console import ConsoleConfig, ConsoleReporter
from logtest.application.reporters.json_reporter import JSONReporter

__all__ = [
    "BaseReporter",
    "ConsoleConfig",
    "ConsoleReporter",
    "JSONReporter",
]
