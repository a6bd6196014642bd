"""
SQL-based handlers for the durable entity families, using SQLAlchemy.

Works with both SQLite (dev) and PostgreSQL (production). Each handler covers
one family and is plugged into ``CompositeStorage``; the external contract is
identical to the in-memory store.
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

from sqlalchemy import select, update, delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..models import (
    PrayerRequest, PrayerRequestCreate, PrayerRequestUpdate, PrayerStatus,
    Program, ProgramCreate, ProgramUpdate, ProgramWithDays,
    ProgramDay, ProgramDayCreate, ProgramDayUpdate,
)
from ..db.models import ProgramModel, ProgramDayModel, PrayerRequestModel
from ..db.connection import get_db_session_context
from .base import ProgramStore, ProgramDayStore, PrayerRequestStore
from .errors import BackendFailure, NotFoundError


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


@asynccontextmanager
async def _db(operation: str) -> AsyncGenerator[AsyncSession, None]:
    """Session for one storage operation; medium errors become BackendFailure."""
    try:
        async with get_db_session_context() as db:
            yield db
    except SQLAlchemyError as exc:
        raise BackendFailure(operation, str(exc.__cause__ or exc)) from exc


# ============================================================================
# Helper methods
# ============================================================================

def _program_model_to_pydantic(model: ProgramModel) -> Program:
    """Convert SQLAlchemy ProgramModel to Pydantic Program."""
    return Program(
        id=model.id,
        slug=model.slug,
        name=model.name,
        description=model.description,
        icon=model.icon,
        image_url=model.image_url,
        color=model.color,
        category=model.category,
        version=model.version,
        total_days=model.total_days,
        duration=model.duration,
        level=model.level,
        published=model.published,
        created_at=_utc(model.created_at),
        updated_at=_utc(model.updated_at),
    )


def _program_day_model_to_pydantic(model: ProgramDayModel) -> ProgramDay:
    """Convert SQLAlchemy ProgramDayModel to Pydantic ProgramDay."""
    return ProgramDay(
        id=model.id,
        program_id=model.program_id,
        day_number=model.day_number,
        title=model.title,
        description=model.description,
        scripture_reference=model.scripture_reference,
        scripture_text=model.scripture_text,
        reflection=model.reflection,
        activity_title=model.activity_title,
        activity_description=model.activity_description,
        audio_url=model.audio_url,
        video_url=model.video_url,
        fasting_instructions=model.fasting_instructions,
        readings=model.readings,
        created_at=_utc(model.created_at),
        updated_at=_utc(model.updated_at),
    )


def _prayer_request_model_to_pydantic(model: PrayerRequestModel) -> PrayerRequest:
    """Convert SQLAlchemy PrayerRequestModel to Pydantic PrayerRequest."""
    return PrayerRequest(
        id=model.id,
        request=model.request,
        author=model.author,
        status=model.status,
        prayer_count=model.prayer_count,
        private=model.private,
        category=model.category,
        created_at=_utc(model.created_at),
        updated_at=_utc(model.updated_at),
    )


def _recount_total_days(program_id: int, now: datetime):
    """UPDATE programs SET total_days = (SELECT COUNT(*) ...) for one program."""
    day_count = (
        select(func.count(ProgramDayModel.id))
        .where(ProgramDayModel.program_id == program_id)
        .scalar_subquery()
    )
    return (
        update(ProgramModel)
        .where(ProgramModel.id == program_id)
        .values(total_days=day_count, updated_at=now)
        .execution_options(synchronize_session=False)
    )


# ============================================================================
# Programs
# ============================================================================

class SQLProgramStore(ProgramStore):
    """Programs persisted in the ``programs`` table."""

    async def list_programs(self, published: Optional[bool] = None) -> list[Program]:
        query = select(ProgramModel).order_by(ProgramModel.created_at, ProgramModel.id)
        if published is not None:
            query = query.where(ProgramModel.published == published)
        async with _db("list_programs") as db:
            result = await db.execute(query)
            return [_program_model_to_pydantic(m) for m in result.scalars().all()]

    async def list_programs_with_days(
        self, published: Optional[bool] = None
    ) -> list[ProgramWithDays]:
        query = (
            select(ProgramModel)
            .options(selectinload(ProgramModel.days))
            .order_by(ProgramModel.created_at, ProgramModel.id)
        )
        if published is not None:
            query = query.where(ProgramModel.published == published)
        async with _db("list_programs_with_days") as db:
            result = await db.execute(query)
            programs = []
            for model in result.scalars().all():
                days = sorted(model.days, key=lambda d: (d.day_number, d.id))
                programs.append(ProgramWithDays(
                    **_program_model_to_pydantic(model).model_dump(by_alias=False),
                    days=[_program_day_model_to_pydantic(d) for d in days],
                ))
            return programs

    async def get_program(self, program_id: int) -> Optional[Program]:
        async with _db("get_program") as db:
            result = await db.execute(
                select(ProgramModel).where(ProgramModel.id == program_id)
            )
            model = result.scalar_one_or_none()
            if model:
                return _program_model_to_pydantic(model)
            return None

    async def get_program_by_slug(self, slug: str) -> Optional[Program]:
        async with _db("get_program_by_slug") as db:
            result = await db.execute(
                select(ProgramModel).where(ProgramModel.slug == slug)
            )
            model = result.scalar_one_or_none()
            if model:
                return _program_model_to_pydantic(model)
            return None

    async def create_program(self, data: ProgramCreate) -> Program:
        now = _now()
        async with _db("create_program") as db:
            model = ProgramModel(
                **data.model_dump(by_alias=False),
                total_days=0,
                created_at=now,
                updated_at=now,
            )
            db.add(model)
            await db.flush()
            return _program_model_to_pydantic(model)

    async def update_program(self, program_id: int, data: ProgramUpdate) -> Program:
        async with _db("update_program") as db:
            result = await db.execute(
                select(ProgramModel).where(ProgramModel.id == program_id)
            )
            model = result.scalar_one_or_none()
            if not model:
                raise NotFoundError("Program", program_id)
            for field, value in data.changes().items():
                setattr(model, field, value)
            model.updated_at = _now()
            await db.flush()
            return _program_model_to_pydantic(model)

    async def delete_program(self, program_id: int) -> None:
        # program_days rows go with it through ON DELETE CASCADE
        async with _db("delete_program") as db:
            await db.execute(delete(ProgramModel).where(ProgramModel.id == program_id))

    async def toggle_program_published(self, program_id: int) -> Program:
        current = await self.get_program(program_id)
        if not current:
            raise NotFoundError("Program", program_id)
        return await self.update_program(
            program_id, ProgramUpdate(published=not current.published)
        )


# ============================================================================
# Program days
# ============================================================================

class SQLProgramDayStore(ProgramDayStore):
    """Program days persisted in ``program_days``; keeps ``programs.total_days`` in step."""

    async def list_program_days(self, program_id: int) -> list[ProgramDay]:
        async with _db("list_program_days") as db:
            result = await db.execute(
                select(ProgramDayModel)
                .where(ProgramDayModel.program_id == program_id)
                .order_by(ProgramDayModel.day_number, ProgramDayModel.id)
            )
            return [_program_day_model_to_pydantic(m) for m in result.scalars().all()]

    async def get_program_day(self, day_id: int) -> Optional[ProgramDay]:
        async with _db("get_program_day") as db:
            result = await db.execute(
                select(ProgramDayModel).where(ProgramDayModel.id == day_id)
            )
            model = result.scalar_one_or_none()
            if model:
                return _program_day_model_to_pydantic(model)
            return None

    async def create_program_day(self, data: ProgramDayCreate) -> ProgramDay:
        now = _now()
        async with _db("create_program_day") as db:
            exists = await db.execute(
                select(ProgramModel.id).where(ProgramModel.id == data.program_id)
            )
            if exists.scalar_one_or_none() is None:
                raise NotFoundError("Program", data.program_id)

            model = ProgramDayModel(
                **data.model_dump(by_alias=False), created_at=now, updated_at=now
            )
            db.add(model)
            await db.flush()

            # Second statement: full recount of the parent's days
            await db.execute(_recount_total_days(data.program_id, now))
            return _program_day_model_to_pydantic(model)

    async def update_program_day(self, day_id: int, data: ProgramDayUpdate) -> ProgramDay:
        async with _db("update_program_day") as db:
            result = await db.execute(
                select(ProgramDayModel).where(ProgramDayModel.id == day_id)
            )
            model = result.scalar_one_or_none()
            if not model:
                raise NotFoundError("ProgramDay", day_id)
            for field, value in data.changes().items():
                setattr(model, field, value)
            model.updated_at = _now()
            await db.flush()
            return _program_day_model_to_pydantic(model)

    async def delete_program_day(self, day_id: int) -> None:
        async with _db("delete_program_day") as db:
            result = await db.execute(
                select(ProgramDayModel.program_id).where(ProgramDayModel.id == day_id)
            )
            program_id = result.scalar_one_or_none()
            if program_id is None:
                return

            await db.execute(delete(ProgramDayModel).where(ProgramDayModel.id == day_id))
            await db.execute(_recount_total_days(program_id, _now()))


# ============================================================================
# Prayer requests
# ============================================================================

class SQLPrayerRequestStore(PrayerRequestStore):
    """Prayer requests persisted in ``prayer_requests``."""

    async def list_prayer_requests(
        self, status: Optional[PrayerStatus] = None
    ) -> list[PrayerRequest]:
        query = select(PrayerRequestModel).order_by(
            PrayerRequestModel.created_at.desc(), PrayerRequestModel.id.desc()
        )
        if status:
            query = query.where(PrayerRequestModel.status == status)
        async with _db("list_prayer_requests") as db:
            result = await db.execute(query)
            return [_prayer_request_model_to_pydantic(m) for m in result.scalars().all()]

    async def get_prayer_request(self, request_id: int) -> Optional[PrayerRequest]:
        async with _db("get_prayer_request") as db:
            result = await db.execute(
                select(PrayerRequestModel).where(PrayerRequestModel.id == request_id)
            )
            model = result.scalar_one_or_none()
            if model:
                return _prayer_request_model_to_pydantic(model)
            return None

    async def create_prayer_request(self, data: PrayerRequestCreate) -> PrayerRequest:
        now = _now()
        async with _db("create_prayer_request") as db:
            model = PrayerRequestModel(
                **data.model_dump(by_alias=False),
                prayer_count=0,
                created_at=now,
                updated_at=now,
            )
            db.add(model)
            await db.flush()
            return _prayer_request_model_to_pydantic(model)

    async def update_prayer_request(
        self, request_id: int, data: PrayerRequestUpdate
    ) -> PrayerRequest:
        async with _db("update_prayer_request") as db:
            result = await db.execute(
                select(PrayerRequestModel).where(PrayerRequestModel.id == request_id)
            )
            model = result.scalar_one_or_none()
            if not model:
                raise NotFoundError("PrayerRequest", request_id)
            for field, value in data.changes().items():
                setattr(model, field, value)
            model.updated_at = _now()
            await db.flush()
            return _prayer_request_model_to_pydantic(model)

    async def delete_prayer_request(self, request_id: int) -> None:
        async with _db("delete_prayer_request") as db:
            await db.execute(
                delete(PrayerRequestModel).where(PrayerRequestModel.id == request_id)
            )

    async def increment_prayer_count(self, request_id: int) -> PrayerRequest:
        async with _db("increment_prayer_count") as db:
            # Single arithmetic UPDATE, no read-modify-write
            result = await db.execute(
                update(PrayerRequestModel)
                .where(PrayerRequestModel.id == request_id)
                .values(
                    prayer_count=PrayerRequestModel.prayer_count + 1,
                    updated_at=_now(),
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError("PrayerRequest", request_id)

            refreshed = await db.execute(
                select(PrayerRequestModel).where(PrayerRequestModel.id == request_id)
            )
            return _prayer_request_model_to_pydantic(refreshed.scalar_one())
