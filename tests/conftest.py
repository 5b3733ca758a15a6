"""Pytest configuration and shared fixtures."""

import pytest
import random
from decimal import Decimal
from unittest.mock import Mock, AsyncMock

from botocore.exceptions import ClientError

from stocktrades_writer.clients.kinesis_client import KinesisStreamClient
from stocktrades_writer.config.aws_config import AWSClientManager
from stocktrades_writer.config.settings import (
    WriterSettings, AWSConfig, ProducerConfig, GeneratorConfig, LoggingConfig
)
from stocktrades_writer.generator import TradeGenerator
from stocktrades_writer.models import TradeEvent, TradeType


@pytest.fixture
def test_config() -> WriterSettings:
    """Create test configuration."""
    return WriterSettings(
        service_name="test-writer",
        aws=AWSConfig(
            region="us-east-1",
            endpoint_url="http://localhost:4566"
        ),
        producer=ProducerConfig(put_interval_seconds=0.001),
        generator=GeneratorConfig(seed=42),
        logging=LoggingConfig(level="DEBUG", format="text")
    )


@pytest.fixture
def mock_kinesis_client():
    """Mock boto3 Kinesis client."""
    client = Mock()
    client.describe_stream_summary = Mock(return_value={
        'StreamDescriptionSummary': {
            'StreamName': 'trades',
            'StreamStatus': 'ACTIVE',
            'OpenShardCount': 1
        }
    })
    client.put_record = Mock(return_value={
        'ShardId': 'shardId-000000000000',
        'SequenceNumber': '49546986683135544286507457936321625675700192471156785154'
    })
    return client


@pytest.fixture
def mock_aws_client_manager(mock_kinesis_client):
    """Mock AWS client manager."""
    manager = Mock(spec=AWSClientManager)
    manager.kinesis_client = mock_kinesis_client
    return manager


@pytest.fixture
def mock_stream_client():
    """Mock async stream client for the writer."""
    client = Mock(spec=KinesisStreamClient)
    client.describe_stream_status = AsyncMock(return_value="ACTIVE")
    client.put_record = AsyncMock(return_value={
        'shard_id': 'shardId-000000000000',
        'sequence_number': '1'
    })
    return client


@pytest.fixture
def seeded_generator() -> TradeGenerator:
    """Generator with a fixed seed."""
    return TradeGenerator(rng=random.Random(1234))


@pytest.fixture
def sample_trade() -> TradeEvent:
    """Sample trade for testing."""
    return TradeEvent(
        id=1,
        ticker_symbol="AMZN",
        trade_type=TradeType.BUY,
        price=Decimal("101.23"),
        quantity=87
    )


@pytest.fixture
def throttling_error() -> ClientError:
    """Kinesis throttling error."""
    return ClientError(
        error_response={'Error': {
            'Code': 'ProvisionedThroughputExceededException',
            'Message': 'Rate exceeded for shard shardId-000000000000'
        }},
        operation_name='PutRecord'
    )
