from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.api.deps import get_current_user
from app.schemas.user import UserResponse, UserUpdate
from app.schemas.common import ResponseModel
from app.models.user import User
from app.services.auth_service import update_user

router = APIRouter()


@router.get("/profile", response_model=ResponseModel)
def get_profile(current_user: User = Depends(get_current_user)):
    """Get the profile of the authenticated user"""
    return ResponseModel(success=True, data=UserResponse.model_validate(current_user))


@router.put("/{user_id}", response_model=ResponseModel)
def update_profile(
    user_id: int,
    user_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update a user; allowed for the user themselves and for admins"""
    user = update_user(db, current_user, user_id, user_data)
    return ResponseModel(
        success=True,
        data=UserResponse.model_validate(user),
        message="Profile updated successfully"
    )
