from .kinesis_client import KinesisStreamClient

__all__ = ["KinesisStreamClient"]
