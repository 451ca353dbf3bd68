from decimal import Context, Decimal
from typing import Iterable

from models import DepthAggregation, DepthLevel, OrderMutation, OrderSide, PriceLevel

# Tie-break for levels sharing a price
_SIDE_RANK = {OrderSide.BUY: 0, OrderSide.SELL: 1, OrderSide.UNSPECIFIED: 2}


def canonical_price(price: Decimal) -> Decimal:
    """Strip trailing zeros so equal prices key and print the same (1.50 -> 1.5)."""
    # Precision equal to the digit count never rounds
    return price.normalize(Context(prec=max(len(price.as_tuple().digits), 1)))


def aggregate_depth(orders: Iterable[OrderMutation]) -> DepthAggregation:
    """
    Sum remaining volume per market and (price, side).

    Rebuilt from the full set of live orders each time. Zero-remaining orders
    still produce a (zero-volume) level.
    """
    volume: DepthAggregation = {}
    for order in orders:
        levels = volume.setdefault(order.market_id, {})
        level = PriceLevel(price=canonical_price(order.price), side=order.side)
        levels[level] = levels.get(level, 0) + order.remaining
    return volume


def sort_levels(levels: dict[PriceLevel, int]) -> list[DepthLevel]:
    """Highest price first; buy before sell at the same price."""
    ordered = sorted(levels.items(), key=lambda item: (-item[0].price, _SIDE_RANK[item[0].side]))
    return [
        DepthLevel(price=level.price, side=level.side, volume=vol)
        for level, vol in ordered
    ]


def build_depth_report(aggregation: DepthAggregation) -> dict[str, list[DepthLevel]]:
    return {market_id: sort_levels(levels) for market_id, levels in aggregation.items()}
