"""
Category tree management.

Categories form a forest stored in one self-referencing table. A root
category is its own parent (``parent_id == id``); there is no NULL parent.
"""
import logging
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.database import commit_or_fail
from app.exceptions import (
    NotFoundError, ConflictError, CycleViolationError, ValidationFailedError, StorageFailureError
)
from app.models.category import Category, ROOT_PLACEHOLDER
from app.models.product import Product
from app.schemas.category import ParentRef, normalize_parent_ref, ROOT_PARENT_TOKEN

logger = logging.getLogger(__name__)


def resolve_parent(parent: ParentRef) -> Optional[int]:
    """Return the parent id, or None when the reference asks for a root"""
    try:
        ref = normalize_parent_ref(parent)
    except ValueError as e:
        raise ValidationFailedError(str(e), details={"parent": parent})
    return None if ref == ROOT_PARENT_TOKEN else ref


def _clean_name(name: Optional[str]) -> str:
    if name is None or not name.strip():
        raise ValidationFailedError("Category name is required")
    return name.strip()


def _require_category(db: Session, category_id: int, message: str = "Category not found") -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise NotFoundError(message, details={"id": category_id})
    return category


def get_children(db: Session, category_id: int) -> List[Category]:
    """Direct children of a category; a root's link to itself is not a child"""
    return db.query(Category).filter(
        Category.parent_id == category_id,
        Category.id != category_id
    ).order_by(Category.name).all()


def count_products(db: Session, category_id: int) -> int:
    return db.query(func.count(Product.id)).filter(Product.category_id == category_id).scalar() or 0


def list_categories(db: Session) -> List[Category]:
    """All categories, alphabetically"""
    return db.query(Category).order_by(Category.name, Category.id).all()


def get_category(db: Session, category_id: int) -> dict:
    """Category with its direct children and the number of products filed under it"""
    category = _require_category(db, category_id)
    return {
        "category": category,
        "children": get_children(db, category_id),
        "product_count": count_products(db, category_id),
    }


def create_category(db: Session, name: str, parent: ParentRef) -> Category:
    """
    Create a category under ``parent`` or as a new root.

    The id of a new row is only known after insert, so a root is written with
    a placeholder parent and pointed at itself before the single commit.
    """
    name = _clean_name(name)
    parent_id = resolve_parent(parent)

    if parent_id is not None:
        _require_category(db, parent_id, message="Parent category not found")

    category = Category(
        name=name,
        parent_id=parent_id if parent_id is not None else ROOT_PLACEHOLDER
    )
    try:
        db.add(category)
        db.flush()
        if parent_id is None:
            category.parent_id = category.id
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating category {name!r}: {str(e)}", exc_info=True)
        raise StorageFailureError("Could not create category") from e

    commit_or_fail(db, "create category")
    db.refresh(category)

    logger.info(f"Category {category.id} created (parent {category.parent_id})")
    return category


def update_category(db: Session, category_id: int, name: Optional[str] = None,
                    parent: Optional[ParentRef] = None) -> Category:
    """
    Rename and/or reparent a category in one write.

    A field passed as None keeps its stored value. Only the direct children
    of the category are checked against a new parent; a deeper descendant is
    not detected.
    """
    category = _require_category(db, category_id)
    if name is not None:
        name = _clean_name(name)

    parent_id = category.parent_id
    if parent is not None:
        parent_id = resolve_parent(parent)
        if parent_id is None:
            parent_id = category_id

        if parent_id != category_id:
            _require_category(db, parent_id, message="Parent category not found")

            child_ids = {child.id for child in get_children(db, category_id)}
            if parent_id in child_ids:
                raise CycleViolationError(
                    "A category cannot take one of its own subcategories as parent",
                    details={"id": category_id, "parent": parent_id}
                )

    if name is not None:
        category.name = name
    category.parent_id = parent_id
    commit_or_fail(db, "update category")
    db.refresh(category)

    logger.info(f"Category {category_id} updated (parent {parent_id})")
    return category


def delete_category(db: Session, category_id: int) -> None:
    """Delete a category that has no subcategories and no products"""
    category = _require_category(db, category_id)

    children_count = db.query(func.count(Category.id)).filter(
        Category.parent_id == category_id,
        Category.id != category_id
    ).scalar() or 0
    if children_count > 0:
        raise ConflictError(
            "Cannot delete category with subcategories. Please delete or move them first.",
            details={"children": children_count}
        )

    products_count = count_products(db, category_id)
    if products_count > 0:
        raise ConflictError(
            "Cannot delete category with products. Please remove or reassign them first.",
            details={"products": products_count}
        )

    db.delete(category)
    commit_or_fail(db, "delete category")
    logger.info(f"Category {category_id} deleted")
