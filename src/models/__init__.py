from .order import OrderMutation, OrderSide, OrderStatus, OrderType, TimeInForce
from .depth import DepthAggregation, DepthLevel, DepthSnapshot, LiveOrdersSnapshot, PriceLevel

__all__ = [
    "OrderMutation",
    "OrderSide",
    "OrderStatus",
    "OrderType",
    "TimeInForce",
    "DepthAggregation",
    "DepthLevel",
    "DepthSnapshot",
    "LiveOrdersSnapshot",
    "PriceLevel",
]
