"""
Exception hierarchy for the depth exporter.

Every failure is fatal to the current run. Each exception carries the name of
the operation that failed so the operator sees what to fix before re-running.
"""

from typing import Optional


class ExporterError(Exception):
    operation: str = "export"

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        if operation is not None:
            self.operation = operation


class EventStoreConnectionError(ExporterError):
    operation = "connect"


class EventStoreQueryError(ExporterError):
    operation = "query"


class ReportWriteError(ExporterError):
    operation = "write_report"
