import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from merchnexus.db.session import get_db
from merchnexus.schemas import UserOut, UserProfileUpdate
from merchnexus.services.auth_service import AuthService
from merchnexus.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserOut)
async def get_profile(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(AuthService.get_current_user_id),
):
    user = await UserService.get(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
    return user


@router.patch("/me", response_model=UserOut)
async def update_profile(
    user_update: UserProfileUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(AuthService.get_current_user_id),
):
    return await UserService.update(db, user_id, user_update)
