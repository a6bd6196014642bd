"""
FastAPI dependencies for dependency injection.
"""
from typing import Optional

from .storage import Storage, InMemoryStorage, CompositeStorage
from .config import get_settings, Settings


# Global storage instance (built on first use or set on app startup)
_storage: Optional[Storage] = None


def build_storage(settings: Settings) -> Storage:
    """Build the storage implementation selected by ``settings.storage_type``."""
    fallback = InMemoryStorage(seed=settings.seed_sample_data)
    if settings.storage_type != "sql":
        return fallback

    from .storage.sql import SQLProgramStore, SQLProgramDayStore, SQLPrayerRequestStore

    return CompositeStorage(
        fallback,
        programs=SQLProgramStore(),
        program_days=SQLProgramDayStore(),
        prayer_requests=SQLPrayerRequestStore(),
    )


def get_storage() -> Storage:
    """Get the storage instance."""
    global _storage
    if _storage is None:
        _storage = build_storage(get_settings())
    return _storage


def set_storage(storage: Optional[Storage]) -> None:
    """Set the storage instance (for testing or switching implementations)."""
    global _storage
    _storage = storage
