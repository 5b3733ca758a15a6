"""Exception types raised by the stock trades writer."""


class WriterError(Exception):
    """Base class for all writer errors."""


class ConfigurationError(WriterError):
    """Fatal problem with how the writer was started. Never retried."""


class InvalidRegionError(ConfigurationError):
    """The region name is not known to botocore."""

    def __init__(self, region: str):
        self.region = region
        super().__init__(f"{region} is not a valid AWS region.")


class StreamDescribeError(ConfigurationError):
    """The stream could not be described (missing, unreachable, forbidden)."""

    def __init__(self, stream_name: str, cause: Exception):
        self.stream_name = stream_name
        self.cause = cause
        super().__init__(f"Error found while describing the stream {stream_name}: {cause}")


class StreamNotActiveError(ConfigurationError):
    """The stream exists but is not ready to accept records."""

    def __init__(self, stream_name: str, status: str):
        self.stream_name = stream_name
        self.status = status
        super().__init__(
            f"Stream {stream_name} is not active (status: {status}). "
            f"Please wait a few moments and try again."
        )


class PublishError(WriterError):
    """A single put_record call was rejected or could not be completed."""

    def __init__(self, stream_name: str, partition_key: str, cause: Exception):
        self.stream_name = stream_name
        self.partition_key = partition_key
        self.cause = cause
        super().__init__(
            f"Failed to put record to {stream_name} "
            f"(partition key {partition_key}): {cause}"
        )
