import asyncio
import sys

from pydantic import ValidationError

from config import Config
from core.errors import ExporterError
from core.exporter import DepthExporter
from services.csv_report_writer import CsvReportWriter
from services.postgres_event_store import PostgresEventStore
from utils.logger import LoggerFactory


async def main() -> int:
    try:
        config = Config()
    except ValidationError as e:
        logger = LoggerFactory().create("depth-exporter")
        logger.error("exporter_failed", operation="load_config", error=str(e))
        return 1

    logger_factory = LoggerFactory(config.log_level)
    logger = logger_factory.create("depth-exporter")

    logger.info(
        "application_starting",
        bucket_minutes=config.bucket_minutes,
        liveness_policy=config.liveness_policy.value,
        output_dir=config.output_dir,
    )

    store = PostgresEventStore(
        config.postgres_dsn,
        logger_factory.create("event_store"),
        command_timeout=config.query_timeout_seconds,
    )
    writer = CsvReportWriter(config.output_dir, logger_factory.create("report_writer"))
    exporter = DepthExporter(
        store,
        writer,
        logger,
        bucket_minutes=config.bucket_minutes,
        policy=config.liveness_policy,
    )

    try:
        await store.start()
        buckets = await exporter.run()
    except ExporterError as e:
        logger.error("exporter_failed", operation=e.operation, error=str(e))
        return 1
    finally:
        await store.stop()

    logger.info("application_stopped", buckets=buckets)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
