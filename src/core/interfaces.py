from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Optional

from models import DepthSnapshot, LiveOrdersSnapshot, OrderMutation


class IEventStore(ABC):
    @abstractmethod
    async def start(self) -> None:
        pass

    @abstractmethod
    async def stop(self) -> None:
        pass

    @abstractmethod
    async def first_bucket_start(self, width: timedelta) -> Optional[datetime]:
        """Earliest known event time floored to ``width``, or None when empty."""
        pass

    @abstractmethod
    async def last_event_time(self) -> Optional[datetime]:
        pass

    @abstractmethod
    async def fetch_mutations(self, start: datetime, end: datetime) -> list[OrderMutation]:
        """Mutations with start <= occurrence time < end, ordered by (time, seq_num)."""
        pass


class IReportWriter(ABC):
    @abstractmethod
    def write_depth(self, snapshot: DepthSnapshot) -> None:
        pass

    @abstractmethod
    def write_live_orders(self, snapshot: LiveOrdersSnapshot) -> None:
        pass
