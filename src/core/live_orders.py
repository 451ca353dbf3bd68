from typing import Iterable, Iterator

from models import OrderMutation

from .liveness import LivenessPolicy, is_live


class LiveOrderTable:
    """
    Materialized view of the book: order id -> latest live mutation.

    Entries only leave the table when a non-live mutation for the same order
    is applied; nothing expires with time.
    """

    def __init__(self):
        self._orders: dict[str, OrderMutation] = {}

    def upsert(self, order: OrderMutation) -> None:
        self._orders[order.order_id] = order

    def remove(self, order_id: str) -> None:
        self._orders.pop(order_id, None)

    def orders(self) -> list[OrderMutation]:
        return list(self._orders.values())

    def __contains__(self, order_id: str) -> bool:
        return order_id in self._orders

    def __iter__(self) -> Iterator[OrderMutation]:
        return iter(self._orders.values())

    def __len__(self) -> int:
        return len(self._orders)


def apply_mutations(
    table: LiveOrderTable,
    mutations: Iterable[OrderMutation],
    policy: LivenessPolicy = LivenessPolicy.STRICT,
) -> int:
    """Apply mutations in delivery order; returns how many were applied."""
    applied = 0
    for mutation in mutations:
        if is_live(mutation, policy):
            table.upsert(mutation)
        else:
            table.remove(mutation.order_id)
        applied += 1
    return applied
