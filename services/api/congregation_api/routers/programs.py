"""
Program and program-day API endpoints.
"""
from typing import Annotated, Union

from fastapi import APIRouter, Depends, Query, status

from ..models import (
    ErrorResponse,
    Program,
    ProgramCreate,
    ProgramUpdate,
    ProgramWithDays,
    ProgramDay,
    ProgramDayCreate,
    ProgramDayFields,
    ProgramDayUpdate,
)
from ..storage import Storage
from ..dependencies import get_storage
from .responses import not_found

router = APIRouter(tags=["programs"])


# ============================================================================
# Programs
# ============================================================================


@router.get("/programs", response_model=None)
async def list_programs(
    storage: Annotated[Storage, Depends(get_storage)],
    include_unpublished: Annotated[bool, Query(alias="all")] = False,
    with_days: Annotated[bool, Query(alias="withDays")] = False,
) -> Union[list[ProgramWithDays], list[Program]]:
    """List programs. Only published ones unless ``all=true``."""
    published = None if include_unpublished else True
    if with_days:
        return await storage.list_programs_with_days(published)
    return await storage.list_programs(published)


@router.post(
    "/programs",
    response_model=Program,
    status_code=status.HTTP_201_CREATED,
    responses={500: {"model": ErrorResponse}},
)
async def create_program(
    request: ProgramCreate,
    storage: Annotated[Storage, Depends(get_storage)],
) -> Program:
    return await storage.create_program(request)


@router.get(
    "/programs/{program_id}",
    response_model=Program,
    responses={404: {"model": ErrorResponse}},
)
async def get_program(
    program_id: int,
    storage: Annotated[Storage, Depends(get_storage)],
) -> Program:
    program = await storage.get_program(program_id)
    if not program:
        raise not_found("Program", program_id)
    return program


@router.put(
    "/programs/{program_id}",
    response_model=Program,
    responses={404: {"model": ErrorResponse}},
)
async def update_program(
    program_id: int,
    request: ProgramUpdate,
    storage: Annotated[Storage, Depends(get_storage)],
) -> Program:
    return await storage.update_program(program_id, request)


@router.delete("/programs/{program_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_program(
    program_id: int,
    storage: Annotated[Storage, Depends(get_storage)],
) -> None:
    """Delete a program together with its days."""
    await storage.delete_program(program_id)


@router.patch(
    "/programs/{program_id}/toggle-published",
    response_model=Program,
    responses={404: {"model": ErrorResponse}},
)
async def toggle_program_published(
    program_id: int,
    storage: Annotated[Storage, Depends(get_storage)],
) -> Program:
    return await storage.toggle_program_published(program_id)


# ============================================================================
# Program days
# ============================================================================


@router.get("/programs/{program_id}/days", response_model=list[ProgramDay])
async def list_program_days(
    program_id: int,
    storage: Annotated[Storage, Depends(get_storage)],
) -> list[ProgramDay]:
    return await storage.list_program_days(program_id)


@router.post(
    "/programs/{program_id}/days",
    response_model=ProgramDay,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def create_program_day(
    program_id: int,
    request: ProgramDayFields,
    storage: Annotated[Storage, Depends(get_storage)],
) -> ProgramDay:
    """Add a day to a program. The program's totalDays is recounted."""
    return await storage.create_program_day(
        ProgramDayCreate(program_id=program_id, **request.model_dump(by_alias=False))
    )


@router.get(
    "/days/{day_id}",
    response_model=ProgramDay,
    responses={404: {"model": ErrorResponse}},
)
async def get_program_day(
    day_id: int,
    storage: Annotated[Storage, Depends(get_storage)],
) -> ProgramDay:
    day = await storage.get_program_day(day_id)
    if not day:
        raise not_found("ProgramDay", day_id)
    return day


@router.put(
    "/days/{day_id}",
    response_model=ProgramDay,
    responses={404: {"model": ErrorResponse}},
)
async def update_program_day(
    day_id: int,
    request: ProgramDayUpdate,
    storage: Annotated[Storage, Depends(get_storage)],
) -> ProgramDay:
    return await storage.update_program_day(day_id, request)


@router.delete("/days/{day_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_program_day(
    day_id: int,
    storage: Annotated[Storage, Depends(get_storage)],
) -> None:
    await storage.delete_program_day(day_id)
