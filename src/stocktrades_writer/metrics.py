"""Prometheus metrics for the publish loop."""

import logging
from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, start_http_server

from .config.settings import MetricsConfig

logger = logging.getLogger(__name__)


class WriterMetrics:
    """
    Counters for the outcome of each cycle and a histogram of put_record latency.

    Metrics live in their own registry so several writers (or tests) can
    coexist in one process.
    """

    def __init__(self, config: Optional[MetricsConfig] = None, registry: Optional[CollectorRegistry] = None):
        self.config = config or MetricsConfig()
        self.registry = registry or CollectorRegistry()

        self.records_total = Counter(
            'stocktrades_records_total',
            'Trades handled by the writer, by outcome',
            ['outcome'],
            registry=self.registry
        )

        self.put_record_duration = Histogram(
            'stocktrades_put_record_duration_seconds',
            'Time spent waiting for put_record acknowledgements',
            registry=self.registry
        )

    def start(self):
        """Start the HTTP exporter if enabled."""
        if not self.config.enable_prometheus:
            return

        try:
            start_http_server(self.config.prometheus_port, registry=self.registry)
            logger.info(f"Prometheus metrics server started on port {self.config.prometheus_port}")
        except OSError as e:
            logger.error(f"Failed to start Prometheus server: {e}")

    def record_outcome(self, outcome: str):
        self.records_total.labels(outcome=outcome).inc()

    def observe_put_duration(self, seconds: float):
        self.put_record_duration.observe(seconds)
