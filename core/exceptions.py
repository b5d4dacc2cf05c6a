"""Application-wide exception classes."""

from __future__ import annotations


class ApplicationError(Exception):
    """Base exception for all application errors."""
    pass


class ConfigurationError(ApplicationError):
    """Raised when configuration is invalid or incomplete."""
    pass


class DatabaseError(ApplicationError):
    """Base exception for database-related errors."""
    pass


class StoreUnavailableError(DatabaseError):
    """Raised when the store cannot be reached or a query fails."""
    pass


class DuplicateRecordError(DatabaseError):
    """Raised when an insert violates a uniqueness constraint."""
    pass


class LotteryError(ApplicationError):
    """Base exception for lottery operations."""
    pass


class EmptyCandidateSetError(LotteryError):
    """Raised when a selection is attempted over zero candidates."""
    pass
