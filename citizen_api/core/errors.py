"""Error taxonomy shared by the storage core and the domain services."""
from __future__ import annotations


class StoreError(Exception):
    """Base class for every error raised by the record keeper."""

    code = "error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UninitializedError(StoreError):
    """Raised when a command reaches the store before bootstrap finished."""

    code = "uninitialized"
    status_code = 503


class NotFoundError(StoreError):
    code = "not_found"
    status_code = 404


class ConstraintViolationError(StoreError):
    """Unique, foreign-key, check or not-null failure reported by the engine."""

    code = "constraint_violation"
    status_code = 409


class ValidationFailureError(StoreError):
    code = "validation_failed"
    status_code = 400


class PersistenceError(StoreError):
    """Snapshot could not be read or written."""

    code = "io_failure"
    status_code = 500
