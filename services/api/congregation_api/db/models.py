"""
SQLAlchemy ORM models for the durable entity families.

These map to the database tables and mirror the Pydantic models in models.py.
Only programs, their days and prayer requests are persisted; every other
family lives in the in-memory store.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    JSON,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class ProgramModel(Base):
    """Programs table."""
    __tablename__ = "programs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    name: Mapped[str] = mapped_column(Text)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    icon: Mapped[str] = mapped_column(String(10), default="📖")
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    color: Mapped[str] = mapped_column(String(20), default="#3478F6")
    category: Mapped[str] = mapped_column(String(80), default="christian-formation")
    version: Mapped[str] = mapped_column(String(20), default="1.0.0")

    # Derived: count of program_days rows for this program
    total_days: Mapped[int] = mapped_column(Integer, default=0)

    duration: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    level: Mapped[str] = mapped_column(String(30), default="basic")
    published: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    # Relationships
    days: Mapped[list["ProgramDayModel"]] = relationship(
        "ProgramDayModel",
        back_populates="program",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProgramDayModel.day_number",
    )


class ProgramDayModel(Base):
    """One day of a program."""
    __tablename__ = "program_days"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    program_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("programs.id", ondelete="CASCADE"), index=True
    )
    day_number: Mapped[int] = mapped_column(Integer)
    title: Mapped[str] = mapped_column(Text)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    scripture_reference: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    scripture_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    reflection: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    activity_title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    activity_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    audio_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    video_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    fasting_instructions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Reading list stored as JSON
    readings: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    # Relationships
    program: Mapped["ProgramModel"] = relationship("ProgramModel", back_populates="days")


class PrayerRequestModel(Base):
    """Prayer requests table."""
    __tablename__ = "prayer_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    request: Mapped[str] = mapped_column(Text)
    author: Mapped[str] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(30), default="pending", index=True)
    prayer_count: Mapped[int] = mapped_column(Integer, default=0)
    private: Mapped[bool] = mapped_column(Boolean, default=False)
    category: Mapped[str] = mapped_column(String(80), default="general")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
