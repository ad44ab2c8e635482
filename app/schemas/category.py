from pydantic import BaseModel, Field, AliasChoices, field_validator
from typing import List, Optional, Union
from datetime import datetime

# Parent reference sent by clients to ask for a root category
ROOT_PARENT_TOKEN = "none"
# Older clients send "sin"
ROOT_PARENT_TOKENS = (ROOT_PARENT_TOKEN, "sin")

ParentRef = Union[int, str]


def normalize_parent_ref(value):
    """Turn a raw parent reference into an int id or ROOT_PARENT_TOKEN"""
    if isinstance(value, bool):
        raise ValueError("Parent must be a category id or 'none'")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        token = value.strip().lower()
        if token in ROOT_PARENT_TOKENS:
            return ROOT_PARENT_TOKEN
        if token.isdigit():
            return int(token)
    raise ValueError("Parent must be a category id or 'none'")


def _clean_name(v):
    if v is None:
        return v
    if not v.strip():
        raise ValueError('Name cannot be blank')
    return v.strip()


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    parent: ParentRef = Field(..., validation_alias=AliasChoices("parent", "parent_id", "padre"))

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _clean_name(v)

    @field_validator('parent', mode='before')
    @classmethod
    def validate_parent(cls, v):
        return normalize_parent_ref(v)


class CategoryUpdate(BaseModel):
    # Partial update: a missing field keeps its stored value
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    parent: Optional[ParentRef] = Field(None, validation_alias=AliasChoices("parent", "parent_id", "padre"))

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _clean_name(v)

    @field_validator('parent', mode='before')
    @classmethod
    def validate_parent(cls, v):
        if v is None:
            return v
        return normalize_parent_ref(v)

class CategoryResponse(BaseModel):
    id: int
    name: str
    parent_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class CategoryChild(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class CategoryDetail(CategoryResponse):
    children: List[CategoryChild] = []
    product_count: int = 0
