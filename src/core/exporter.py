from datetime import timedelta
from enum import Enum
from typing import Optional

from .bucket import BucketProcessor, BucketStats, TimeBucket
from .interfaces import IEventStore, IReportWriter
from .live_orders import LiveOrderTable
from .liveness import LivenessPolicy


class ExporterState(str, Enum):
    RUNNING = "running"
    DONE = "done"


class DepthExporter:
    """
    Walks the event log bucket by bucket from the first known block to the
    last complete bucket.

    The live order table lives for the whole run and is handed to the bucket
    processor by reference. Nothing is checkpointed: every run replays from
    the first bucket.
    """

    def __init__(
        self,
        store: IEventStore,
        writer: IReportWriter,
        logger,
        bucket_minutes: int = 1,
        policy: LivenessPolicy = LivenessPolicy.STRICT,
        live_orders: Optional[LiveOrderTable] = None,
    ):
        if bucket_minutes < 1:
            raise ValueError(f"bucket_minutes must be at least 1, got {bucket_minutes}")
        self._store = store
        self._logger = logger
        self._width = timedelta(minutes=bucket_minutes)
        self._live_orders = live_orders if live_orders is not None else LiveOrderTable()
        self._processor = BucketProcessor(store, writer, self._live_orders, logger, policy)
        self._state = ExporterState.RUNNING
        self._buckets_processed = 0
        self._policy = policy

    @property
    def state(self) -> ExporterState:
        return self._state

    @property
    def live_orders(self) -> LiveOrderTable:
        return self._live_orders

    @property
    def buckets_processed(self) -> int:
        return self._buckets_processed

    async def run(self) -> int:
        self._logger.info(
            "exporter_starting",
            bucket_minutes=int(self._width.total_seconds() // 60),
            liveness_policy=self._policy.value,
        )

        start = await self._store.first_bucket_start(self._width)
        if start is None:
            self._logger.info("no_events")
            self._state = ExporterState.DONE
            return self._buckets_processed

        bucket = TimeBucket.starting_at(start, self._width)
        while self._state == ExporterState.RUNNING:
            await self.step(bucket)
            bucket = bucket.next()

        return self._buckets_processed

    async def step(self, bucket: TimeBucket) -> Optional[BucketStats]:
        """Process ``bucket`` if it is complete, otherwise move to DONE."""
        latest = await self._store.last_event_time()
        if latest is None or bucket.end > latest:
            # The last bucket is still filling up
            self._state = ExporterState.DONE
            self._logger.info("done", buckets=self._buckets_processed, live_orders=len(self._live_orders))
            return None

        stats = await self._processor.process(bucket)
        self._buckets_processed += 1
        return stats
