"""Continuously sends simulated stock trades to Kinesis."""

import asyncio
import logging
import time
from enum import Enum
from typing import Any, Dict, Optional

from .clients.kinesis_client import KinesisStreamClient
from .exceptions import StreamNotActiveError
from .generator import TradeGenerator
from .metrics import WriterMetrics
from .models import TradeEvent
from .serializer import TradeSerializer
from .utils.logging import log_with_context

logger = logging.getLogger(__name__)

ACTIVE_STATUS = "ACTIVE"


class WriterState(str, Enum):
    STARTING = "STARTING"
    VALIDATING = "VALIDATING"
    RUNNING = "RUNNING"
    STOPPED = "STOPPED"
    FAILED = "FAILED"


class ShutdownRequested(Exception):
    """Raised internally when shutdown wins the race against an in-flight put."""


class StockTradesWriter:
    """
    Puts one random stock trade onto a Kinesis stream per cycle.

    A cycle generates a trade, serializes it, puts it with the ticker symbol
    as partition key, waits for the result and then sleeps for a fixed
    interval. A failed put is logged and the record dropped; the next cycle
    goes ahead regardless. Only a missing or inactive stream at startup is
    fatal.

    Shutdown is requested through request_shutdown() (or by cancelling the
    task running run()). Both the put wait and the sleep observe it.
    """

    def __init__(
        self,
        stream_name: str,
        stream_client: KinesisStreamClient,
        generator: Optional[TradeGenerator] = None,
        serializer: Optional[TradeSerializer] = None,
        put_interval_seconds: float = 0.1,
        metrics: Optional[WriterMetrics] = None
    ):
        self.stream_name = stream_name
        self.stream_client = stream_client
        self.generator = generator or TradeGenerator()
        self.serializer = serializer or TradeSerializer()
        self.put_interval_seconds = put_interval_seconds
        self.metrics = metrics or WriterMetrics()

        self.state = WriterState.STARTING
        self._shutdown_event = asyncio.Event()

        self.stats = {
            'cycles': 0,
            'records_sent': 0,
            'records_failed': 0,
            'records_skipped': 0
        }

        logger.info(
            f"Initialized StockTradesWriter for stream {stream_name} "
            f"with put_interval={put_interval_seconds}s"
        )

    async def validate_stream(self):
        """
        Check that the stream exists and is active.

        Raises:
            StreamDescribeError: If the stream cannot be described
            StreamNotActiveError: If the stream is not ACTIVE
        """
        self.state = WriterState.VALIDATING
        try:
            status = await self.stream_client.describe_stream_status(self.stream_name)
            if status != ACTIVE_STATUS:
                raise StreamNotActiveError(self.stream_name, status)
        except Exception:
            self.state = WriterState.FAILED
            raise

        self.state = WriterState.RUNNING
        logger.info(f"Stream {self.stream_name} is {ACTIVE_STATUS}")

    def request_shutdown(self):
        """Ask the loop to stop at its next suspension point."""
        if not self._shutdown_event.is_set():
            logger.info("Shutdown requested")
        self._shutdown_event.set()

    @property
    def shutdown_requested(self) -> bool:
        return self._shutdown_event.is_set()

    async def run(self):
        """Validate the stream, then put trades until shutdown is requested."""
        await self.validate_stream()
        logger.info(f"Sending stock trades to {self.stream_name}")

        try:
            while not self.shutdown_requested:
                trade = self.generator.next_trade()
                await self.send_stock_trade(trade)
                self.stats['cycles'] += 1

                if self.shutdown_requested:
                    break
                await self._sleep_interval()
        except asyncio.CancelledError:
            logger.info("Interrupted, assuming shutdown.")
        finally:
            self.state = WriterState.STOPPED
            log_with_context(
                logger, logging.INFO, "StockTradesWriter stopped",
                **self.get_stats()
            )

    async def send_stock_trade(self, trade: TradeEvent) -> bool:
        """
        Put a single trade onto the stream and wait for the outcome.

        Returns:
            True if Kinesis acknowledged the record
        """
        data = self.serializer.serialize(trade)
        if not data:
            logger.warning("Could not get JSON bytes for stock trade")
            self.stats['records_skipped'] += 1
            self.metrics.record_outcome('skipped')
            return False

        logger.info(f"Putting trade: {trade}")
        # Ticker symbol as partition key keeps every trade of a symbol on one shard
        start_time = time.monotonic()
        try:
            await self._wait_for_put(
                self.stream_client.put_record(self.stream_name, trade.ticker_symbol, data)
            )
        except (asyncio.CancelledError, ShutdownRequested):
            logger.info("Interrupted, assuming shutdown.")
            self._shutdown_event.set()
            return False
        except Exception:
            # Any failed put is dropped; the next cycle goes ahead regardless
            self.metrics.observe_put_duration(time.monotonic() - start_time)
            logger.error(
                "Exception while sending data to Kinesis. Will try again next cycle.",
                exc_info=True
            )
            self.stats['records_failed'] += 1
            self.metrics.record_outcome('failed')
            return False

        self.metrics.observe_put_duration(time.monotonic() - start_time)
        self.stats['records_sent'] += 1
        self.metrics.record_outcome('sent')
        return True

    async def _wait_for_put(self, put_coro):
        """Await a put, giving up as soon as shutdown is requested."""
        put_task = asyncio.ensure_future(put_coro)
        shutdown_task = asyncio.ensure_future(self._shutdown_event.wait())

        try:
            done, _ = await asyncio.wait(
                {put_task, shutdown_task},
                return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for task in (put_task, shutdown_task):
                if not task.done():
                    task.cancel()

        if put_task not in done:
            raise ShutdownRequested()
        return put_task.result()

    async def _sleep_interval(self):
        try:
            await asyncio.wait_for(self._shutdown_event.wait(), timeout=self.put_interval_seconds)
        except asyncio.TimeoutError:
            pass

    def get_stats(self) -> Dict[str, Any]:
        """Get writer statistics."""
        return {
            'stream_name': self.stream_name,
            'state': self.state.value,
            **self.stats
        }
