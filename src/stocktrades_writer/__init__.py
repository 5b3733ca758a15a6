"""
Stock Trades Writer - synthetic stock trade producer for Kinesis Data Streams.

This package continuously generates random stock trades and puts them, one
record at a time, onto a Kinesis stream so downstream stream processors have
a steady load of realistic-looking records to work on.
"""

__version__ = "1.0.0"
__author__ = "Stock Trades Pipeline Team"
