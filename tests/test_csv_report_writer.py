import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import csv
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.errors import ReportWriteError
from models import DepthLevel, DepthSnapshot, LiveOrdersSnapshot, OrderSide
from services.csv_report_writer import (
    CsvReportWriter, format_file_stamp, format_price, format_timestamp,
)
from conftest import make_order

BUCKET_END = datetime(2024, 1, 1, 0, 1, tzinfo=timezone.utc)


def _read(path):
    with open(path, newline="") as f:
        return list(csv.reader(f))


def test_format_timestamp_is_rfc3339_utc():
    assert format_timestamp(BUCKET_END) == "2024-01-01T00:01:00Z"


def test_format_timestamp_converts_offsets_to_utc():
    from datetime import timedelta
    ts = datetime(2024, 1, 1, 2, 1, tzinfo=timezone(timedelta(hours=2)))
    assert format_timestamp(ts) == "2024-01-01T00:01:00Z"


def test_format_file_stamp():
    assert format_file_stamp(BUCKET_END) == "2024-01-01-00-01"


@pytest.mark.parametrize("price, expected", [
    (Decimal("100"), "100"),
    (Decimal("101.250"), "101.250"),
    (Decimal("1E+3"), "1000"),
    (Decimal("1E-7"), "0.0000001"),
])
def test_format_price_never_uses_exponent(price, expected):
    assert format_price(price) == expected


def test_write_depth_one_file_per_market(tmp_path, mock_logger):
    writer = CsvReportWriter(str(tmp_path), mock_logger)
    snapshot = DepthSnapshot(
        timestamp=BUCKET_END,
        markets={
            "aa11": [
                DepthLevel(price=Decimal("101.25"), side=OrderSide.SELL, volume=7),
                DepthLevel(price=Decimal("100.5"), side=OrderSide.BUY, volume=5),
            ],
            "bb22": [DepthLevel(price=Decimal("0.0001"), side=OrderSide.BUY, volume=0)],
        },
    )

    writer.write_depth(snapshot)

    rows = _read(tmp_path / "depth-aa11-2024-01-01-00-01.csv")
    assert rows == [
        ["market_id", "timestamp", "side", "price", "volume"],
        ["aa11", "2024-01-01T00:01:00Z", "sell", "101.25", "7"],
        ["aa11", "2024-01-01T00:01:00Z", "buy", "100.5", "5"],
    ]
    rows = _read(tmp_path / "depth-bb22-2024-01-01-00-01.csv")
    assert rows[1] == ["bb22", "2024-01-01T00:01:00Z", "buy", "0.0001", "0"]


def test_write_depth_without_markets_writes_nothing(tmp_path, mock_logger):
    writer = CsvReportWriter(str(tmp_path), mock_logger)
    writer.write_depth(DepthSnapshot(timestamp=BUCKET_END, markets={}))
    assert list(tmp_path.iterdir()) == []


def test_write_live_orders(tmp_path, mock_logger):
    writer = CsvReportWriter(str(tmp_path / "out"), mock_logger)
    snapshot = LiveOrdersSnapshot(
        timestamp=BUCKET_END,
        orders=[
            make_order(order_id="01ff", market_id="aa11", party_id="cc33", price="100.5", remaining=5),
            make_order(order_id="02ff", market_id="aa11", side=OrderSide.SELL, price="101", remaining=0),
        ],
    )

    writer.write_live_orders(snapshot)

    rows = _read(tmp_path / "out" / "live-orders-2024-01-01-00-01.csv")
    assert rows == [
        ["market_id", "timestamp", "party_id", "order_id", "side", "price", "remaining"],
        ["aa11", "2024-01-01T00:01:00Z", "cc33", "01ff", "buy", "100.5", "5"],
        ["aa11", "2024-01-01T00:01:00Z", "", "02ff", "sell", "101", "0"],
    ]


def test_write_live_orders_empty_still_writes_header(tmp_path, mock_logger):
    writer = CsvReportWriter(str(tmp_path), mock_logger)
    writer.write_live_orders(LiveOrdersSnapshot(timestamp=BUCKET_END, orders=[]))
    assert _read(writer.live_orders_path(BUCKET_END)) == [
        ["market_id", "timestamp", "party_id", "order_id", "side", "price", "remaining"],
    ]


def test_write_failure_raises_report_write_error(tmp_path, mock_logger):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x")
    writer = CsvReportWriter(str(blocker), mock_logger)

    with pytest.raises(ReportWriteError) as exc_info:
        writer.write_live_orders(LiveOrdersSnapshot(timestamp=BUCKET_END, orders=[]))
    assert exc_info.value.operation == "write_live_orders"

    with pytest.raises(ReportWriteError) as exc_info:
        writer.write_depth(DepthSnapshot(
            timestamp=BUCKET_END,
            markets={"aa11": [DepthLevel(price=Decimal("1"), side=OrderSide.BUY, volume=1)]},
        ))
    assert exc_info.value.operation == "write_depth"
