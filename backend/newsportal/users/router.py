from fastapi import APIRouter

from ..database import SessionDep
from ..models import MessageResponse
from ..users.models import User as UserModel

from .schema import PasswordChange, ProfileUpdate, UserResponse
from . import service as user_service
from ..auth.dependencies import CurrentUser

router = APIRouter(prefix="/users", tags=["users"])


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    db: SessionDep,
    profile_data: ProfileUpdate,
    current_user: UserModel = CurrentUser,
):
    user = await user_service.update_profile(db, db_user=current_user, profile_in=profile_data)
    return {"success": True, "message": "Profile updated successfully!", "user": user}


@router.put("/change-password", response_model=MessageResponse)
async def change_password(
    db: SessionDep,
    password_data: PasswordChange,
    current_user: UserModel = CurrentUser,
):
    await user_service.change_password(db, db_user=current_user, data=password_data)
    return {"success": True, "message": "Password changed successfully!"}


@router.get("/{user_id}", response_model=UserResponse)
async def get_user_profile(user_id: str, db: SessionDep):
    """Public profile lookup; no authentication required."""
    user = await user_service.get_public_profile(user_id, db)
    return {"success": True, "user": user}
