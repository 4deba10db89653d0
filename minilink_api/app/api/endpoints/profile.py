"""
Profile endpoints for the authenticated user.
"""

from fastapi import APIRouter, Depends

from minilink_api.app.core.security import get_current_user
from minilink_api.app.schemas.user import ProfileRead, ProfileUpdate, UserRead
from minilink_api.app.services.user_service import UserService


router = APIRouter()


@router.get("/view", response_model=ProfileRead)
async def view_profile(current_user: UserRead = Depends(get_current_user)) -> ProfileRead:
    """Return the caller's profile, including the ids of the posts they own."""
    return await UserService.get_profile(current_user.id)


@router.patch("/edit", response_model=ProfileRead)
async def edit_profile(
    data: ProfileUpdate,
    current_user: UserRead = Depends(get_current_user),
) -> ProfileRead:
    """Update name, bio or avatar URL.  Only provided fields change."""
    return await UserService.update_profile(current_user.id, data)
