from .postgres_event_store import PostgresEventStore
from .csv_report_writer import CsvReportWriter

__all__ = [
    "PostgresEventStore",
    "CsvReportWriter",
]
