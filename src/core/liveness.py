from enum import Enum

from models import OrderMutation, OrderStatus, OrderType, TimeInForce


class LivenessPolicy(str, Enum):
    """
    Rule deciding whether an order rests in the book after a mutation.

    STRICT is the correct reading of "resting order": market orders and
    IOC/FOK orders can never rest, whatever their status says. MINIMAL only
    looks at the status and is kept for comparison with older exports.
    """
    MINIMAL = "minimal"
    STRICT = "strict"


_RESTING_STATUSES = frozenset({OrderStatus.ACTIVE, OrderStatus.PARKED})
_NON_RESTING_TIFS = frozenset({TimeInForce.IOC, TimeInForce.FOK})


def is_live(order: OrderMutation, policy: LivenessPolicy = LivenessPolicy.STRICT) -> bool:
    if policy == LivenessPolicy.MINIMAL:
        return order.status == OrderStatus.ACTIVE

    if order.status not in _RESTING_STATUSES:
        return False
    if order.order_type != OrderType.LIMIT:
        return False
    if order.time_in_force in _NON_RESTING_TIFS:
        return False
    return True
