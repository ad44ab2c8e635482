from pydantic import BaseModel, EmailStr, Field, AliasChoices
from typing import Optional
from datetime import datetime
from app.models.user import UserRole

POSTAL_CODE_PATTERN = r'^\d{5}$'


class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=30)
    password: str = Field(..., min_length=6)
    email: EmailStr
    name: str = Field(..., min_length=2, validation_alias=AliasChoices("name", "nombre"))
    address: str = Field(..., min_length=5, validation_alias=AliasChoices("address", "direccion"))
    city: str = Field(..., min_length=2, validation_alias=AliasChoices("city", "ciudad"))
    postal_code: str = Field(..., pattern=POSTAL_CODE_PATTERN, validation_alias=AliasChoices("postal_code", "cp"))


class UserLogin(BaseModel):
    username: str = Field(..., min_length=3, max_length=30)
    password: str = Field(..., min_length=6)


class UserUpdate(BaseModel):
    # Partial update: only fields that are sent are written
    password: Optional[str] = Field(None, min_length=6)
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, min_length=2, validation_alias=AliasChoices("name", "nombre"))
    address: Optional[str] = Field(None, min_length=5, validation_alias=AliasChoices("address", "direccion"))
    city: Optional[str] = Field(None, min_length=2, validation_alias=AliasChoices("city", "ciudad"))
    postal_code: Optional[str] = Field(
        None, pattern=POSTAL_CODE_PATTERN, validation_alias=AliasChoices("postal_code", "cp")
    )


class UserResponse(BaseModel):
    """Public view of a user; never carries the password hash"""
    id: int
    username: str
    name: str
    email: str
    address: str
    city: str
    postal_code: str
    role: UserRole
    created_at: datetime

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    user: UserResponse
    token: str
    token_type: str = "bearer"
