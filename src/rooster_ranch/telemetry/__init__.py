"""Logging setup for the ranch service."""

from .logging import configure_logging

__all__ = ["configure_logging"]
