"""Configuration for the stock trades writer."""

from .settings import WriterSettings, load_settings

__all__ = ["WriterSettings", "load_settings"]
