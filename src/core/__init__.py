from .interfaces import IEventStore, IReportWriter
from .errors import ExporterError, EventStoreConnectionError, EventStoreQueryError, ReportWriteError
from .liveness import LivenessPolicy, is_live
from .live_orders import LiveOrderTable, apply_mutations
from .depth import aggregate_depth, build_depth_report, canonical_price, sort_levels
from .bucket import BucketProcessor, BucketStats, TimeBucket, floor_to_bucket
from .exporter import DepthExporter, ExporterState

__all__ = [
    "IEventStore",
    "IReportWriter",
    "ExporterError",
    "EventStoreConnectionError",
    "EventStoreQueryError",
    "ReportWriteError",
    "LivenessPolicy",
    "is_live",
    "LiveOrderTable",
    "apply_mutations",
    "aggregate_depth",
    "build_depth_report",
    "sort_levels",
    "canonical_price",
    "BucketProcessor",
    "BucketStats",
    "TimeBucket",
    "floor_to_bucket",
    "DepthExporter",
    "ExporterState",
]
