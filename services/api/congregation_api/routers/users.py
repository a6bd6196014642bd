"""
Admin console user endpoints. Passwords are never returned.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, status

from ..models import ErrorResponse, UserCreate, UserPublic
from ..storage import Storage
from ..dependencies import get_storage
from .responses import not_found

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserPublic])
async def list_users(
    storage: Annotated[Storage, Depends(get_storage)],
):
    return await storage.list_users()


@router.post(
    "",
    response_model=UserPublic,
    status_code=status.HTTP_201_CREATED,
    responses={500: {"model": ErrorResponse}},
)
async def create_user(
    request: UserCreate,
    storage: Annotated[Storage, Depends(get_storage)],
):
    return await storage.create_user(request)


@router.get(
    "/{user_id}",
    response_model=UserPublic,
    responses={404: {"model": ErrorResponse}},
)
async def get_user(
    user_id: int,
    storage: Annotated[Storage, Depends(get_storage)],
):
    user = await storage.get_user(user_id)
    if not user:
        raise not_found("User", user_id)
    return user
