from pydantic import BaseModel, Field, AliasChoices
from typing import List, Optional
import datetime as dt
from decimal import Decimal


class OrderLineCreate(BaseModel):
    product_id: int = Field(..., validation_alias=AliasChoices("product_id", "idprod"))
    color: str = Field(..., min_length=1, max_length=50)
    quantity: int = Field(..., gt=0, validation_alias=AliasChoices("quantity", "cant"))
    name: Optional[str] = Field(None, max_length=100, validation_alias=AliasChoices("name", "nombre"))


class OrderCreate(BaseModel):
    user_id: int = Field(..., validation_alias=AliasChoices("user_id", "iduser"))
    date: Optional[dt.date] = Field(None, validation_alias=AliasChoices("date", "fecha"))
    total: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    # Emptiness is checked by the order service so it fails the same way for every caller
    lines: List[OrderLineCreate] = Field(..., validation_alias=AliasChoices("lines", "lineas"))


class OrderLineResponse(BaseModel):
    id: int
    order_id: int
    product_id: int
    color: str
    quantity: int
    name: Optional[str] = None

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    id: int
    user_id: int
    date: dt.date
    total: Decimal
    lines: List[OrderLineResponse] = Field(default_factory=list)
    created_at: dt.datetime

    class Config:
        from_attributes = True


class ProductSummary(BaseModel):
    id: int
    name: str
    price: Decimal
    image: Optional[str] = None

    class Config:
        from_attributes = True


class UserSummary(BaseModel):
    id: int
    username: str
    name: str
    email: str

    class Config:
        from_attributes = True


class OrderLineDetail(OrderLineResponse):
    product: Optional[ProductSummary] = None


class OrderDetail(OrderResponse):
    lines: List[OrderLineDetail] = Field(default_factory=list)
    user: Optional[UserSummary] = None
