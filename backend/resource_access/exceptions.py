"""
Error taxonomy for the resource access layer.

Signing failures are not wrapped: botocore exceptions reach the caller as-is.
"""
from typing import Iterable, List


class StorageError(Exception):
    """Base class for storage layer errors."""


class StorageConfigurationError(StorageError):
    """Required connection parameters are missing at client construction."""
    
    def __init__(self, missing: Iterable[str]):
        self.missing: List[str] = list(missing)
        super().__init__(
            "Object storage not configured. "
            f"Set {', '.join(self.missing)}."
        )


class InvalidResourceError(StorageError, ValueError):
    """A resource descriptor lacks a field the operation requires."""
    
    def __init__(self, operation: str, fields: Iterable[str]):
        self.operation = operation
        self.fields: List[str] = list(fields)
        super().__init__(
            f"Invalid resource for {operation}: missing or empty {', '.join(self.fields)}"
        )
