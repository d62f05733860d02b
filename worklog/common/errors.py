"""Typed errors raised by the billing core and its boundary modules."""
from typing import Optional


class WorklogError(Exception):
    """Base exception for all worklog errors."""

    code: str = "WORKLOG_ERROR"


class ConfigurationError(WorklogError, ValueError):
    """Invoice-day schedule or payment terms are missing or malformed."""

    code: str = "CONFIGURATION_ERROR"


class NotFound(WorklogError, LookupError):
    """No tasks exist for the requested client or billing period."""

    code: str = "NOT_FOUND"

    def __init__(self, message: str, client: Optional[str] = None, billing_date: Optional[str] = None):
        self.client = client
        self.billing_date = billing_date
        super().__init__(message)


class StorageError(WorklogError):
    """Task file exists but cannot be decoded."""

    code: str = "STORAGE_ERROR"
