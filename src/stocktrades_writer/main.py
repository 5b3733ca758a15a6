"""Main entry point for the Stock Trades Writer."""

import argparse
import asyncio
import logging
import os
import signal
import sys
from typing import List, Optional

from .clients.kinesis_client import KinesisStreamClient
from .config.aws_config import AWSClientManager, validate_region
from .config.settings import WriterSettings, load_settings
from .exceptions import ConfigurationError
from .generator import TradeGenerator
from .metrics import WriterMetrics
from .utils.logging import setup_logging
from .writer import StockTradesWriter

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = _ArgumentParser(
        prog="stocktrades-writer",
        description="Continuously sends simulated stock trades to a Kinesis stream."
    )
    parser.add_argument("stream_name", metavar="stream-name", help="Name of the Kinesis stream")
    parser.add_argument("region", help="AWS region of the stream, e.g. us-east-1")
    return parser.parse_args(argv)


def build_writer(settings: WriterSettings, stream_name: str) -> StockTradesWriter:
    """Wire up the writer and its collaborators from settings."""
    aws_client_manager = AWSClientManager(settings.aws)
    generator = TradeGenerator(
        seed=settings.generator.seed,
        max_price_deviation=settings.generator.max_price_deviation,
        max_quantity=settings.generator.max_quantity
    )
    return StockTradesWriter(
        stream_name=stream_name,
        stream_client=KinesisStreamClient(aws_client_manager),
        generator=generator,
        put_interval_seconds=settings.producer.put_interval_seconds,
        metrics=WriterMetrics(settings.metrics)
    )


async def run_writer(writer: StockTradesWriter):
    """Run the writer until SIGINT/SIGTERM."""
    loop = asyncio.get_event_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, writer.request_shutdown)

    try:
        await writer.run()
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(sig)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point. Returns the process exit status."""
    args = parse_args(argv)

    config_file = os.getenv('CONFIG_FILE')
    try:
        settings = load_settings(config_file)
    except (FileNotFoundError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    try:
        validate_region(args.region)
    except ConfigurationError as e:
        print(e, file=sys.stderr)
        return 1

    settings.aws = settings.aws.model_copy(update={'region': args.region})
    setup_logging(settings.logging, settings.service_name)

    if config_file:
        logger.info(f"Loaded configuration from: {config_file}")
    logger.info(f"Starting {settings.service_name} for stream {args.stream_name} in {args.region}")

    writer = build_writer(settings, args.stream_name)
    writer.metrics.start()

    try:
        asyncio.run(run_writer(writer))
    except ConfigurationError as e:
        print(e, file=sys.stderr)
        return 1

    logger.info("Writer shutdown complete")
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
