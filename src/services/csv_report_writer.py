"""
CSV output for depth and live-order snapshots.

One depth file per market per bucket, one live-orders file per bucket:

    depth-{market_id}-{YYYY-MM-DD-HH-MM}.csv
        market_id,timestamp,side,price,volume
    live-orders-{YYYY-MM-DD-HH-MM}.csv
        market_id,timestamp,party_id,order_id,side,price,remaining

Timestamps are the bucket end in RFC 3339 UTC (``2024-01-01T00:01:00Z``).
Prices are written in plain positional notation, never exponent form.
"""

import csv
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from core.errors import ReportWriteError
from core.interfaces import IReportWriter
from models import DepthSnapshot, LiveOrdersSnapshot

DEPTH_FIELDS = ["market_id", "timestamp", "side", "price", "volume"]
LIVE_ORDER_FIELDS = ["market_id", "timestamp", "party_id", "order_id", "side", "price", "remaining"]


def format_timestamp(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_file_stamp(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).strftime("%Y-%m-%d-%H-%M")


def format_price(price: Decimal) -> str:
    return format(price, "f")


class CsvReportWriter(IReportWriter):
    def __init__(self, output_dir: str, logger):
        self._output_dir = Path(output_dir)
        self._logger = logger

    def depth_path(self, market_id: str, ts: datetime) -> Path:
        return self._output_dir / f"depth-{market_id}-{format_file_stamp(ts)}.csv"

    def live_orders_path(self, ts: datetime) -> Path:
        return self._output_dir / f"live-orders-{format_file_stamp(ts)}.csv"

    def write_depth(self, snapshot: DepthSnapshot) -> None:
        timestamp = format_timestamp(snapshot.timestamp)
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
            for market_id, levels in snapshot.markets.items():
                filepath = self.depth_path(market_id, snapshot.timestamp)
                with open(filepath, "w", newline="") as csvfile:
                    writer = csv.writer(csvfile)
                    writer.writerow(DEPTH_FIELDS)
                    for level in levels:
                        writer.writerow([
                            market_id,
                            timestamp,
                            level.side.value,
                            format_price(level.price),
                            level.volume,
                        ])
        except OSError as e:
            raise ReportWriteError(f"failed writing depth report: {e}", operation="write_depth") from e

        self._logger.debug(
            "depth_csv_written",
            timestamp=timestamp,
            markets=len(snapshot.markets),
            levels=snapshot.level_count,
        )

    def write_live_orders(self, snapshot: LiveOrdersSnapshot) -> None:
        timestamp = format_timestamp(snapshot.timestamp)
        filepath = self.live_orders_path(snapshot.timestamp)
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
            with open(filepath, "w", newline="") as csvfile:
                writer = csv.writer(csvfile)
                writer.writerow(LIVE_ORDER_FIELDS)
                for order in snapshot.orders:
                    writer.writerow([
                        order.market_id,
                        timestamp,
                        order.party_id or "",
                        order.order_id,
                        order.side.value,
                        format_price(order.price),
                        order.remaining,
                    ])
        except OSError as e:
            raise ReportWriteError(
                f"failed writing live orders report: {e}", operation="write_live_orders"
            ) from e

        self._logger.debug("live_orders_csv_written", filepath=str(filepath), orders=len(snapshot.orders))
