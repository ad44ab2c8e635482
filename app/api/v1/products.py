from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.orm import Session
from typing import List
from app.database import get_db
from app.api.deps import require_admin
from app.schemas.product import (
    ProductCreate, ProductUpdate, ProductResponse, ProductDetail,
    ProductColorCreate, ProductColorResponse
)
from app.schemas.common import ResponseModel
from app.models.user import User
from app.services import product_service

router = APIRouter()


@router.get("", response_model=ResponseModel)
def get_products(db: Session = Depends(get_db)):
    """Get all products with their category"""
    products = product_service.list_products(db)
    return ResponseModel(
        success=True,
        data=[ProductResponse.model_validate(p) for p in products]
    )


@router.get("/search", response_model=ResponseModel)
def search_products(
    q: str = Query(..., min_length=1, description="Text to look for in name or description"),
    db: Session = Depends(get_db)
):
    """Search products by name or description"""
    products = product_service.search_products(db, q)
    return ResponseModel(
        success=True,
        data=[ProductResponse.model_validate(p) for p in products]
    )


@router.get("/category/{category_id}", response_model=ResponseModel)
def get_category_products(category_id: int, db: Session = Depends(get_db)):
    """Get products by category"""
    products = product_service.list_products_by_category(db, category_id)
    return ResponseModel(
        success=True,
        data=[ProductResponse.model_validate(p) for p in products]
    )


@router.get("/{product_id}", response_model=ResponseModel)
def get_product(product_id: int, db: Session = Depends(get_db)):
    """Get product details with its colors"""
    product = product_service.get_product(db, product_id)
    return ResponseModel(success=True, data=ProductDetail.model_validate(product))


@router.get("/{product_id}/colors", response_model=ResponseModel)
def get_product_colors(product_id: int, db: Session = Depends(get_db)):
    """Get the colors a product is available in"""
    colors = product_service.list_colors(db, product_id)
    return ResponseModel(
        success=True,
        data=[ProductColorResponse.model_validate(c) for c in colors]
    )


@router.post("", response_model=ResponseModel, status_code=status.HTTP_201_CREATED)
def create_product(
    product_data: ProductCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    product = product_service.create_product(db, product_data)
    return ResponseModel(
        success=True,
        data=ProductDetail.model_validate(product),
        message="Product created successfully"
    )


@router.put("/{product_id}", response_model=ResponseModel)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    product = product_service.update_product(db, product_id, product_data)
    return ResponseModel(
        success=True,
        data=ProductDetail.model_validate(product),
        message="Product updated successfully"
    )


@router.delete("/{product_id}", response_model=ResponseModel)
def delete_product(
    product_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    product_service.delete_product(db, product_id)
    return ResponseModel(success=True, data=None, message="Product deleted successfully")


@router.post("/{product_id}/colors", response_model=ResponseModel, status_code=status.HTTP_201_CREATED)
def add_product_color(
    product_id: int,
    color_data: ProductColorCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    color = product_service.add_color(db, product_id, color_data)
    return ResponseModel(
        success=True,
        data=ProductColorResponse.model_validate(color),
        message="Color added successfully"
    )


@router.post("/{product_id}/images", response_model=ResponseModel, status_code=status.HTTP_201_CREATED)
def upload_product_images(
    product_id: int,
    images: List[UploadFile] = File(...),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Upload up to MAX_UPLOAD_FILES images for a product"""
    urls = product_service.upload_images(db, product_id, images)
    return ResponseModel(
        success=True,
        data={"urls": urls, "count": len(urls)},
        message="Images uploaded successfully"
    )
