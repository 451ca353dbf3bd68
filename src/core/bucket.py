"""
Time buckets and the per-bucket processing step.

A bucket is the half-open interval [start, end). A mutation stamped exactly
at ``end`` belongs to the next bucket.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from models import DepthSnapshot, LiveOrdersSnapshot

from .depth import aggregate_depth, build_depth_report
from .interfaces import IEventStore, IReportWriter
from .live_orders import LiveOrderTable, apply_mutations
from .liveness import LivenessPolicy

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def floor_to_bucket(ts: datetime, width: timedelta) -> datetime:
    """Round ``ts`` down to a multiple of ``width`` counted from the Unix epoch."""
    epoch = _EPOCH if ts.tzinfo is not None else _EPOCH.replace(tzinfo=None)
    return epoch + ((ts - epoch) // width) * width


@dataclass(frozen=True)
class TimeBucket:
    start: datetime
    end: datetime

    @classmethod
    def starting_at(cls, start: datetime, width: timedelta) -> "TimeBucket":
        return cls(start=start, end=start + width)

    @property
    def width(self) -> timedelta:
        return self.end - self.start

    def next(self) -> "TimeBucket":
        return TimeBucket(start=self.end, end=self.end + self.width)


@dataclass
class BucketStats:
    bucket_end: datetime
    mutations: int
    live_orders: int
    markets: int


class BucketProcessor:
    """Replays one bucket of mutations into the live order table and reports the book."""

    def __init__(
        self,
        store: IEventStore,
        writer: IReportWriter,
        live_orders: LiveOrderTable,
        logger,
        policy: LivenessPolicy = LivenessPolicy.STRICT,
    ):
        self._store = store
        self._writer = writer
        self._live_orders = live_orders
        self._logger = logger
        self._policy = policy

    async def process(self, bucket: TimeBucket) -> BucketStats:
        mutations = await self._store.fetch_mutations(bucket.start, bucket.end)
        applied = apply_mutations(self._live_orders, mutations, self._policy)

        depth = build_depth_report(aggregate_depth(self._live_orders))
        self._writer.write_depth(DepthSnapshot(timestamp=bucket.end, markets=depth))

        live = sorted(self._live_orders.orders(), key=lambda o: (o.market_id, o.order_id))
        self._writer.write_live_orders(LiveOrdersSnapshot(timestamp=bucket.end, orders=live))

        stats = BucketStats(
            bucket_end=bucket.end,
            mutations=applied,
            live_orders=len(self._live_orders),
            markets=len(depth),
        )
        self._logger.info(
            "bucket_processed",
            bucket_end=bucket.end.isoformat(),
            mutations=stats.mutations,
            live_orders=stats.live_orders,
            markets=stats.markets,
        )
        return stats
