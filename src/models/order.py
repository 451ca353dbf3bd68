from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class OrderSide(str, Enum):
    UNSPECIFIED = "unspecified"
    BUY = "buy"
    SELL = "sell"


class OrderType(str, Enum):
    UNSPECIFIED = "unspecified"
    LIMIT = "limit"
    MARKET = "market"
    NETWORK = "network"


class OrderStatus(str, Enum):
    UNSPECIFIED = "unspecified"
    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"
    STOPPED = "stopped"
    FILLED = "filled"
    REJECTED = "rejected"
    PARTIALLY_FILLED = "partially_filled"
    PARKED = "parked"


class TimeInForce(str, Enum):
    UNSPECIFIED = "unspecified"
    GTC = "gtc"  # Good 'til cancelled
    GTT = "gtt"  # Good 'til time
    IOC = "ioc"  # Immediate or cancel
    FOK = "fok"  # Fill or kill
    GFA = "gfa"  # Good for auction
    GFN = "gfn"  # Good for normal trading


# Integer codes as stored in the orders table
SIDE_CODES = {0: OrderSide.UNSPECIFIED, 1: OrderSide.BUY, 2: OrderSide.SELL}

ORDER_TYPE_CODES = {
    0: OrderType.UNSPECIFIED,
    1: OrderType.LIMIT,
    2: OrderType.MARKET,
    3: OrderType.NETWORK,
}

ORDER_STATUS_CODES = {
    0: OrderStatus.UNSPECIFIED,
    1: OrderStatus.ACTIVE,
    2: OrderStatus.EXPIRED,
    3: OrderStatus.CANCELLED,
    4: OrderStatus.STOPPED,
    5: OrderStatus.FILLED,
    6: OrderStatus.REJECTED,
    7: OrderStatus.PARTIALLY_FILLED,
    8: OrderStatus.PARKED,
}

TIME_IN_FORCE_CODES = {
    0: TimeInForce.UNSPECIFIED,
    1: TimeInForce.GTC,
    2: TimeInForce.GTT,
    3: TimeInForce.IOC,
    4: TimeInForce.FOK,
    5: TimeInForce.GFA,
    6: TimeInForce.GFN,
}


class OrderMutation(BaseModel):
    """One version of an order, as recorded in the event log."""

    order_id: str
    market_id: str
    party_id: Optional[str] = None
    side: OrderSide
    price: Decimal
    remaining: int
    time_in_force: TimeInForce = TimeInForce.GTC
    order_type: OrderType = OrderType.LIMIT
    status: OrderStatus
    vega_time: Optional[datetime] = None  # Block time the mutation occurred in
    seq_num: Optional[int] = None
