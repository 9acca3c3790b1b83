"""CLI commands module."""

from . import config, read

__all__ = ["read", "config"]
