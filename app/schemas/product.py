from pydantic import BaseModel, Field, AliasChoices
from typing import List, Optional
from datetime import datetime
from decimal import Decimal


class ProductBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=100, validation_alias=AliasChoices("name", "nombre"))
    description: Optional[str] = Field(None, validation_alias=AliasChoices("description", "descripcion"))
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, validation_alias=AliasChoices("price", "precio"))
    category_id: int = Field(..., validation_alias=AliasChoices("category_id", "categoria"))
    image: Optional[str] = Field(None, max_length=255, validation_alias=AliasChoices("image", "imagen"))
    image_folder: Optional[str] = Field(
        None,
        max_length=100,
        pattern=r'^[a-zA-Z0-9_-]+$',
        validation_alias=AliasChoices("image_folder", "carpetaimg")
    )


class ProductCreate(ProductBase):
    pass


class ProductUpdate(ProductBase):
    pass


class ProductColorCreate(BaseModel):
    color: str = Field(..., min_length=1, max_length=50)
    image: str = Field(..., min_length=1, max_length=255, validation_alias=AliasChoices("image", "imagen"))


class ProductColorResponse(BaseModel):
    id: int
    product_id: int
    color: str
    image: str

    class Config:
        from_attributes = True


class ProductCategory(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class ProductResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    category_id: int
    image: Optional[str] = None
    image_folder: Optional[str] = None
    category: Optional[ProductCategory] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProductDetail(ProductResponse):
    colors: List[ProductColorResponse] = []
