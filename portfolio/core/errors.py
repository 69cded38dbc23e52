# File: portfolio/core/errors.py

"""
Error types raised by the project store.

Every storage and submission operation either succeeds or raises one of
these. The HTTP layer maps them to status codes in routes_project.py.
"""

from typing import Optional


class PortfolioError(Exception):
    """Base class for all project store errors."""


class ValidationError(PortfolioError):
    """A required submission field is missing or empty."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"Missing required field: {field}")


class PayloadError(PortfolioError):
    """The inline image payload is malformed or empty."""


class PayloadTooLarge(PayloadError):
    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            f"Image size ({size / 1024 / 1024:.1f}MB) exceeds maximum ({limit / 1024 / 1024:.1f}MB)"
        )


class DuplicateIdError(PortfolioError):
    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"Project id already exists: {record_id}")


class StorageIOError(PortfolioError):
    """Creating, reading or writing a storage path failed."""


class CollectionCorruptError(StorageIOError):
    """The collection file exists but does not hold a valid project list."""
