from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from .order import OrderMutation, OrderSide


@dataclass(frozen=True)
class PriceLevel:
    """Aggregation key within one market."""
    price: Decimal
    side: OrderSide


# market_id -> price level -> summed remaining volume
DepthAggregation = dict[str, dict[PriceLevel, int]]


class DepthLevel(BaseModel):
    price: Decimal
    side: OrderSide
    volume: int


class DepthSnapshot(BaseModel):
    timestamp: datetime  # Bucket end
    markets: dict[str, list[DepthLevel]]

    @property
    def level_count(self) -> int:
        return sum(len(levels) for levels in self.markets.values())


class LiveOrdersSnapshot(BaseModel):
    timestamp: datetime  # Bucket end
    orders: list[OrderMutation]
