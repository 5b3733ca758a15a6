"""Structured logging setup for the writer."""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from ..config.settings import LoggingConfig

CONTEXT_PREFIX = "ctx_"
NOISY_LOGGERS = ('boto3', 'botocore', 'urllib3')


def record_context(record: logging.LogRecord) -> Dict[str, Any]:
    """Fields attached through log_with_context(), without their prefix."""
    return {
        key[len(CONTEXT_PREFIX):]: value
        for key, value in record.__dict__.items()
        if key.startswith(CONTEXT_PREFIX)
    }


def _utc_timestamp(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line.

    Writer statistics and other context passed via log_with_context() are
    grouped under "context" so log pipelines can index them as one object.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': _utc_timestamp(record).isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
            'level': record.levelname,
            'service': getattr(record, 'service', None),
            'logger': record.name,
            'message': record.getMessage()
        }

        context = record_context(record)
        if context:
            log_data['context'] = context

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Console formatter: ``timestamp [LEVEL] logger: message key=value ...``."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname
        if self.use_colors and level in self.COLORS:
            level = f"{self.COLORS[level]}{level}{self.RESET}"

        parts = [
            _utc_timestamp(record).strftime('%Y-%m-%d %H:%M:%S'),
            f"[{level}]",
            f"{record.name}:",
            record.getMessage()
        ]
        parts.extend(f"{key}={value}" for key, value in record_context(record).items())
        formatted = " ".join(parts)

        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)

        return formatted


class ServiceContextFilter(logging.Filter):
    """Stamps every record with the service name."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def filter(self, record):
        record.service = self.service_name
        return True


def _create_handler(output: str) -> logging.Handler:
    if output.lower() == 'stdout':
        return logging.StreamHandler(sys.stdout)
    if output.lower() == 'stderr':
        return logging.StreamHandler(sys.stderr)
    return logging.FileHandler(output)


def setup_logging(config: LoggingConfig, service_name: str = "stocktrades-writer") -> None:
    """
    Route all logging through a single handler on the root logger.

    Args:
        config: Logging configuration
        service_name: Stamped on every record as ``service``
    """
    handler = _create_handler(config.output)
    handler.setFormatter(JSONFormatter() if config.format == 'json' else TextFormatter())
    handler.addFilter(ServiceContextFilter(service_name))

    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    log_with_context(
        logging.getLogger(__name__), logging.INFO, "Logging configured",
        level=config.level, format=config.format, output=config.output
    )


def log_with_context(logger: logging.Logger, level: int, message: str, **context):
    """Log a message with additional context fields."""
    extra = {f"{CONTEXT_PREFIX}{key}": value for key, value in context.items()}
    logger.log(level, message, extra=extra)
