from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.api.deps import require_admin
from app.schemas.category import CategoryCreate, CategoryUpdate, CategoryResponse, CategoryChild, CategoryDetail
from app.schemas.common import ResponseModel
from app.models.user import User
from app.services import category_service

router = APIRouter()


@router.get("", response_model=ResponseModel)
def get_categories(db: Session = Depends(get_db)):
    """Get all categories ordered by name"""
    categories = category_service.list_categories(db)
    return ResponseModel(
        success=True,
        data=[CategoryResponse.model_validate(c) for c in categories]
    )


@router.get("/{category_id}", response_model=ResponseModel)
def get_category(category_id: int, db: Session = Depends(get_db)):
    """Get a category with its subcategories and product count"""
    result = category_service.get_category(db, category_id)
    category_data = CategoryDetail(
        **CategoryResponse.model_validate(result["category"]).model_dump(),
        children=[CategoryChild.model_validate(c) for c in result["children"]],
        product_count=result["product_count"]
    )
    return ResponseModel(success=True, data=category_data)


@router.post("", response_model=ResponseModel, status_code=status.HTTP_201_CREATED)
def create_category(
    category_data: CategoryCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Create a category; send parent "none" for a top-level category"""
    category = category_service.create_category(db, category_data.name, category_data.parent)
    return ResponseModel(
        success=True,
        data=CategoryResponse.model_validate(category),
        message="Category created successfully"
    )


@router.put("/{category_id}", response_model=ResponseModel)
def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Rename and/or move a category"""
    category = category_service.update_category(db, category_id, category_data.name, category_data.parent)
    return ResponseModel(
        success=True,
        data=CategoryResponse.model_validate(category),
        message="Category updated successfully"
    )


@router.delete("/{category_id}", response_model=ResponseModel)
def delete_category(
    category_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Delete a category without subcategories or products"""
    category_service.delete_category(db, category_id)
    return ResponseModel(
        success=True,
        data=None,
        message="Category deleted successfully"
    )
