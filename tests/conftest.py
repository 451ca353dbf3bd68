"""
Shared fixtures for the depth exporter test suite.
"""

import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path
from typing import Optional
from unittest.mock import MagicMock

import pytest

# Ensure src/ is on the Python path so that absolute imports like
# ``from models import ...`` resolve correctly.
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.interfaces import IEventStore, IReportWriter
from core.bucket import floor_to_bucket
from models import (
    DepthSnapshot,
    LiveOrdersSnapshot,
    OrderMutation,
    OrderSide,
    OrderStatus,
    OrderType,
    TimeInForce,
)

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_order(
    order_id: str = "a1",
    market_id: str = "m1",
    side: OrderSide = OrderSide.BUY,
    price="100",
    remaining: int = 10,
    status: OrderStatus = OrderStatus.ACTIVE,
    order_type: OrderType = OrderType.LIMIT,
    time_in_force: TimeInForce = TimeInForce.GTC,
    vega_time: Optional[datetime] = None,
    seq_num: int = 0,
    party_id: Optional[str] = None,
) -> OrderMutation:
    return OrderMutation(
        order_id=order_id,
        market_id=market_id,
        party_id=party_id,
        side=side,
        price=Decimal(str(price)),
        remaining=remaining,
        status=status,
        order_type=order_type,
        time_in_force=time_in_force,
        vega_time=vega_time or T0,
        seq_num=seq_num,
    )


class FakeEventStore(IEventStore):
    """In-memory event log honouring the [start, end) query contract."""

    def __init__(self, mutations=None, block_times=None):
        self.mutations: list[OrderMutation] = list(mutations or [])
        self.block_times: list[datetime] = list(block_times or [])
        self.queries: list[tuple[datetime, datetime]] = []

    async def start(self) -> None:
        pass

    async def stop(self) -> None:
        pass

    async def first_bucket_start(self, width: timedelta) -> Optional[datetime]:
        if not self.block_times:
            return None
        return floor_to_bucket(min(self.block_times), width)

    async def last_event_time(self) -> Optional[datetime]:
        if not self.block_times:
            return None
        return max(self.block_times)

    async def fetch_mutations(self, start: datetime, end: datetime) -> list[OrderMutation]:
        self.queries.append((start, end))
        window = [m for m in self.mutations if start <= m.vega_time < end]
        return sorted(window, key=lambda m: (m.vega_time, m.seq_num))


class RecordingWriter(IReportWriter):
    def __init__(self):
        self.depth: list[DepthSnapshot] = []
        self.live_orders: list[LiveOrdersSnapshot] = []

    def write_depth(self, snapshot: DepthSnapshot) -> None:
        self.depth.append(snapshot)

    def write_live_orders(self, snapshot: LiveOrdersSnapshot) -> None:
        self.live_orders.append(snapshot)


@pytest.fixture
def mock_logger():
    logger = MagicMock()
    logger.info = MagicMock()
    logger.debug = MagicMock()
    logger.error = MagicMock()
    logger.warning = MagicMock()
    return logger


@pytest.fixture
def writer() -> RecordingWriter:
    return RecordingWriter()
