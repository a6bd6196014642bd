"""
Database module for the congregation admin API.

Provides SQLAlchemy models and async database connection.
"""
from .models import Base, ProgramModel, ProgramDayModel, PrayerRequestModel
from .connection import get_db_engine, get_db_session_context, init_db, close_db

__all__ = [
    "Base",
    "ProgramModel",
    "ProgramDayModel",
    "PrayerRequestModel",
    "get_db_engine",
    "get_db_session_context",
    "init_db",
    "close_db",
]
