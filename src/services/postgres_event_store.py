import asyncio
from datetime import datetime, timedelta
from typing import Any, Mapping, Optional

import asyncpg

from core.bucket import floor_to_bucket
from core.errors import EventStoreConnectionError, EventStoreQueryError
from core.interfaces import IEventStore
from models import OrderMutation
from models.order import ORDER_STATUS_CODES, ORDER_TYPE_CODES, SIDE_CODES, TIME_IN_FORCE_CODES


# command_timeout raises asyncio.TimeoutError, which is not an OSError before 3.11
_QUERY_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, asyncio.TimeoutError, OSError)


class PostgresEventStore(IEventStore):
    FIRST_BLOCK_QUERY = "SELECT vega_time FROM blocks ORDER BY vega_time LIMIT 1"
    LAST_BLOCK_QUERY = "SELECT vega_time FROM blocks ORDER BY vega_time DESC LIMIT 1"
    MUTATIONS_QUERY = """
        SELECT id, market_id, party_id, side, price, remaining,
               time_in_force, type, status, vega_time, seq_num
          FROM orders
         WHERE vega_time >= $1 AND vega_time < $2
      ORDER BY vega_time, seq_num
    """

    def __init__(self, dsn: str, logger, command_timeout: Optional[float] = None):
        self._dsn = dsn
        self._logger = logger
        self._command_timeout = command_timeout
        self._pool: Optional[asyncpg.Pool] = None

    async def start(self) -> None:
        try:
            self._pool = await asyncpg.create_pool(
                dsn=self._dsn,
                min_size=1,
                max_size=2,
                command_timeout=self._command_timeout,
            )
        except Exception as e:
            self._logger.error(
                "event_store_connect_failed",
                error=str(e),
                dsn_host=self._dsn.split("@")[-1].split("/")[0] if "@" in self._dsn else "unknown",
            )
            raise EventStoreConnectionError(f"Could not connect to PostgreSQL database: {e}") from e
        self._logger.info("event_store_started")

    async def stop(self) -> None:
        if self._pool:
            await self._pool.close()
            self._pool = None
            self._logger.info("event_store_stopped")

    async def first_bucket_start(self, width: timedelta) -> Optional[datetime]:
        first = await self._fetch_time(self.FIRST_BLOCK_QUERY, "first_bucket_start")
        if first is None:
            return None
        return floor_to_bucket(first, width)

    async def last_event_time(self) -> Optional[datetime]:
        return await self._fetch_time(self.LAST_BLOCK_QUERY, "last_event_time")

    async def fetch_mutations(self, start: datetime, end: datetime) -> list[OrderMutation]:
        pool = self._require_pool("fetch_mutations")
        try:
            async with pool.acquire() as conn:
                rows = await conn.fetch(self.MUTATIONS_QUERY, start, end)
        except _QUERY_ERRORS as e:
            raise EventStoreQueryError(f"failed to query orders: {e}", operation="fetch_mutations") from e

        try:
            return [self.decode_row(row) for row in rows]
        except (KeyError, ValueError) as e:
            raise EventStoreQueryError(f"failed to decode order row: {e}", operation="fetch_mutations") from e

    @staticmethod
    def decode_row(row: Mapping[str, Any]) -> OrderMutation:
        return OrderMutation(
            order_id=_hex_id(row["id"]),
            market_id=_hex_id(row["market_id"]),
            party_id=_hex_id(row["party_id"]) if row.get("party_id") is not None else None,
            side=SIDE_CODES[row["side"]],
            price=row["price"],
            remaining=row["remaining"],
            time_in_force=TIME_IN_FORCE_CODES[row["time_in_force"]],
            order_type=ORDER_TYPE_CODES[row["type"]],
            status=ORDER_STATUS_CODES[row["status"]],
            vega_time=row.get("vega_time"),
            seq_num=row.get("seq_num"),
        )

    async def _fetch_time(self, query: str, operation: str) -> Optional[datetime]:
        pool = self._require_pool(operation)
        try:
            async with pool.acquire() as conn:
                return await conn.fetchval(query)
        except _QUERY_ERRORS as e:
            raise EventStoreQueryError(f"failed to query blocks: {e}", operation=operation) from e

    def _require_pool(self, operation: str) -> asyncpg.Pool:
        if not self._pool:
            raise EventStoreQueryError("event store not started", operation=operation)
        return self._pool


def _hex_id(value) -> str:
    # ids are bytea in the node schema; text ids are passed through
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    return str(value).lower()
