"""AWS-specific configuration and client setup."""

import boto3
from botocore.config import Config
import logging

from .settings import AWSConfig
from ..exceptions import InvalidRegionError

logger = logging.getLogger(__name__)


def known_regions(service_name: str = 'kinesis') -> set:
    """Regions botocore knows for a service, across every AWS partition."""
    session = boto3.session.Session()
    regions = set()
    for partition in session.get_available_partitions():
        regions.update(session.get_available_regions(service_name, partition_name=partition))
    return regions


def validate_region(region: str, service_name: str = 'kinesis') -> str:
    """
    Check that a region name is one botocore recognises.

    Raises:
        InvalidRegionError: If the region is unknown
    """
    if not region or region not in known_regions(service_name):
        raise InvalidRegionError(region)
    return region


class AWSClientManager:
    """Manages the Kinesis client instance with proper configuration."""

    def __init__(self, aws_config: AWSConfig):
        self.config = aws_config
        self._kinesis_client = None

        self._boto_config = Config(
            region_name=aws_config.region,
            retries={
                'max_attempts': aws_config.max_attempts,
                'mode': 'standard'
            },
            connect_timeout=aws_config.connect_timeout,
            read_timeout=aws_config.read_timeout
        )

    @property
    def kinesis_client(self):
        """Get or create Kinesis client."""
        if self._kinesis_client is None:
            if self.config.endpoint_url:
                # LocalStack configuration for local development
                self._kinesis_client = boto3.client(
                    'kinesis',
                    endpoint_url=self.config.endpoint_url,
                    aws_access_key_id=self.config.access_key_id or 'test',
                    aws_secret_access_key=self.config.secret_access_key or 'test',
                    region_name=self.config.region,
                    config=self._boto_config
                )
                logger.info(f"Created LocalStack Kinesis client: {self.config.endpoint_url}")
            else:
                self._kinesis_client = boto3.client(
                    'kinesis',
                    aws_access_key_id=self.config.access_key_id,
                    aws_secret_access_key=self.config.secret_access_key,
                    config=self._boto_config
                )
                logger.info(f"Created AWS Kinesis client in region: {self.config.region}")

        return self._kinesis_client
