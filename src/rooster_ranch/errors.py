"""Failure types raised below the command boundary.

Business-logic failures (not enough RC, nothing to sell, duplicate farm) are
reported through return values. The exceptions here cover I/O and host
resources; each one is caught and logged by the component that triggered it.
"""


class RanchError(Exception):
    """Base class for Rooster Ranch failures."""


class StorageFailure(RanchError):
    """Raised when a persisted document cannot be read or written."""


class MalformedRecord(RanchError):
    """Raised when a single persisted entry cannot be decoded."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"{key}: {reason}")
        self.key = key
        self.reason = reason


class ResourceUnavailable(RanchError):
    """Raised when a structure file or target world is missing on the host."""
