"""AWS Kinesis Data Streams client for the trade writer."""

import asyncio
import logging
from typing import Any, Dict

from botocore.exceptions import BotoCoreError, ClientError

from ..config.aws_config import AWSClientManager
from ..exceptions import PublishError, StreamDescribeError

logger = logging.getLogger(__name__)


class KinesisStreamClient:
    """
    Async facade over the blocking boto3 Kinesis client.

    Every call runs in the default executor so the event loop stays free to
    notice shutdown requests while a request is in flight. One call is
    awaited at a time; the client does no batching or retrying of its own
    beyond what botocore is configured to do.
    """

    def __init__(self, aws_client_manager: AWSClientManager):
        self.aws_client_manager = aws_client_manager

    async def describe_stream_status(self, stream_name: str) -> str:
        """
        Return the stream's status, e.g. ACTIVE, CREATING, DELETING, UPDATING.

        Raises:
            StreamDescribeError: If the stream cannot be described
        """
        kinesis_client = self.aws_client_manager.kinesis_client

        try:
            response = await asyncio.get_event_loop().run_in_executor(
                None,
                lambda: kinesis_client.describe_stream_summary(StreamName=stream_name)
            )
            status = response['StreamDescriptionSummary']['StreamStatus']
        except Exception as e:
            raise StreamDescribeError(stream_name, e) from e

        logger.debug(f"Stream {stream_name} status: {status}")
        return status

    async def put_record(self, stream_name: str, partition_key: str, data: bytes) -> Dict[str, Any]:
        """
        Put a single record and wait for the acknowledgement.

        Returns:
            Shard id and sequence number assigned by Kinesis

        Raises:
            PublishError: If Kinesis rejected or failed the record
        """
        kinesis_client = self.aws_client_manager.kinesis_client

        try:
            response = await asyncio.get_event_loop().run_in_executor(
                None,
                lambda: kinesis_client.put_record(
                    StreamName=stream_name,
                    Data=data,
                    PartitionKey=partition_key
                )
            )
        except (ClientError, BotoCoreError) as e:
            raise PublishError(stream_name, partition_key, e) from e

        return {
            'shard_id': response.get('ShardId'),
            'sequence_number': response.get('SequenceNumber')
        }
