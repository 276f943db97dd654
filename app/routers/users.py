# =============================================================================
# app/routers/users.py - User CRUD Endpoints
# =============================================================================
# Binds the collection path (list/create) and the item path
# (read/update/delete). Business rules live in UserService; failures are
# raised as UserAPIException and rendered by the exception handlers.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Body, Path, status

from app.dependencies import UserServiceDep
from core.models.user import UserCreate, UserDeleteResponse, UserPatch, UserResponse

router = APIRouter()

UserIdPath = Annotated[str, Path(description="User identifier (24-character hex)")]


# =============================================================================
# Collection Endpoints
# =============================================================================

@router.get("", response_model=list[UserResponse])
async def list_users(service: UserServiceDep):
    """
    List all users.

    Returns users in storage order. No pagination or filtering.
    """
    return await service.list_users()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserCreate, service: UserServiceDep):
    """
    Create a new user.

    The email is stored lowercase and must not belong to another user.
    """
    return await service.create_user(payload)


# =============================================================================
# Item Endpoints
# =============================================================================

@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: UserIdPath, service: UserServiceDep):
    """
    Get a single user.
    """
    return await service.get_user(user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UserIdPath,
    service: UserServiceDep,
    patch: Annotated[UserPatch | None, Body()] = None,
):
    """
    Update a user's name and/or email.

    Omitted fields keep their current values. The password cannot be
    changed through this endpoint. A request without a body
    saves the stored values unchanged.
    """
    return await service.update_user(user_id, patch or UserPatch())


@router.delete("/{user_id}", response_model=UserDeleteResponse)
async def delete_user(user_id: UserIdPath, service: UserServiceDep):
    """
    Permanently delete a user.
    """
    return await service.delete_user(user_id)
