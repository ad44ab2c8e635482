from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.user import UserCreate, UserLogin, UserResponse, TokenResponse
from app.schemas.common import ResponseModel
from app.services.auth_service import register_user, authenticate_user, create_token

router = APIRouter()


@router.post("/register", response_model=ResponseModel, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user"""
    user = register_user(db, user_data)
    return ResponseModel(
        success=True,
        data=UserResponse.model_validate(user),
        message="Registration successful"
    )


@router.post("/login", response_model=ResponseModel)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login with username and password"""
    user = authenticate_user(db, username=credentials.username, password=credentials.password)
    return ResponseModel(
        success=True,
        data=TokenResponse(user=UserResponse.model_validate(user), token=create_token(user)),
        message="Login successful"
    )
