"""
Storage abstraction for the congregation admin API.

This module provides one interface for all persistence, with an in-memory
implementation and a composite one that routes the durable families
(programs, program days, prayer requests) to SQL handlers.
"""
from .base import Storage
from .errors import StorageError, NotFoundError, BackendFailure
from .memory import InMemoryStorage
from .composite import CompositeStorage

__all__ = [
    "Storage",
    "StorageError",
    "NotFoundError",
    "BackendFailure",
    "InMemoryStorage",
    "CompositeStorage",
]
