"""
Errors raised by storage implementations.

A read miss is never an error (get returns ``None``, lists return ``[]``);
only a mutation against a missing target raises ``NotFoundError``.
"""
from typing import Any, Optional


class StorageError(Exception):
    """Base exception for all storage errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(StorageError):
    """Raised when an update or domain mutation targets a missing record."""

    def __init__(self, entity: str, identity: Any):
        self.entity = entity
        self.identity = identity
        super().__init__(
            message=f"{entity} {identity} not found",
            details={"entity": entity, "id": identity},
        )


class BackendFailure(StorageError):
    """Raised when the storage medium rejects an operation."""

    def __init__(self, operation: str, reason: Optional[str] = None):
        message = f"Storage operation '{operation}' failed"
        if reason:
            message += f": {reason}"
        self.operation = operation
        self.reason = reason
        super().__init__(
            message=message, details={"operation": operation, "reason": reason}
        )
