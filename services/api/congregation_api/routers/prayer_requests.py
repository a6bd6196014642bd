"""
Prayer request API endpoints.
"""
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from ..models import (
    ErrorResponse,
    PrayerRequest,
    PrayerRequestCreate,
    PrayerRequestUpdate,
    PrayerStatus,
)
from ..storage import Storage
from ..dependencies import get_storage
from .responses import not_found

router = APIRouter(prefix="/prayer-requests", tags=["prayer-requests"])


@router.get("", response_model=list[PrayerRequest])
async def list_prayer_requests(
    storage: Annotated[Storage, Depends(get_storage)],
    status_filter: Annotated[Optional[PrayerStatus], Query(alias="status")] = None,
) -> list[PrayerRequest]:
    """List prayer requests, newest first."""
    return await storage.list_prayer_requests(status_filter)


@router.post(
    "",
    response_model=PrayerRequest,
    status_code=status.HTTP_201_CREATED,
)
async def create_prayer_request(
    request: PrayerRequestCreate,
    storage: Annotated[Storage, Depends(get_storage)],
) -> PrayerRequest:
    return await storage.create_prayer_request(request)


@router.get(
    "/{request_id}",
    response_model=PrayerRequest,
    responses={404: {"model": ErrorResponse}},
)
async def get_prayer_request(
    request_id: int,
    storage: Annotated[Storage, Depends(get_storage)],
) -> PrayerRequest:
    prayer_request = await storage.get_prayer_request(request_id)
    if not prayer_request:
        raise not_found("PrayerRequest", request_id)
    return prayer_request


@router.put(
    "/{request_id}",
    response_model=PrayerRequest,
    responses={404: {"model": ErrorResponse}},
)
async def update_prayer_request(
    request_id: int,
    request: PrayerRequestUpdate,
    storage: Annotated[Storage, Depends(get_storage)],
) -> PrayerRequest:
    """Update a prayer request. ``prayerCount`` is not writable here."""
    return await storage.update_prayer_request(request_id, request)


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_prayer_request(
    request_id: int,
    storage: Annotated[Storage, Depends(get_storage)],
) -> None:
    await storage.delete_prayer_request(request_id)


@router.post(
    "/{request_id}/pray",
    response_model=PrayerRequest,
    responses={404: {"model": ErrorResponse}},
)
async def pray_for_request(
    request_id: int,
    storage: Annotated[Storage, Depends(get_storage)],
) -> PrayerRequest:
    """Record one more prayer for the request."""
    return await storage.increment_prayer_count(request_id)
