"""Domain ports (interfaces)."""

from logtest.domain.ports.reporter import ReporterProtocol

__all__ = ["ReporterProtocol"]
