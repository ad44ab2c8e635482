import logging
from typing import List
from fastapi import UploadFile
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload
from app.database import commit_or_fail
from app.exceptions import NotFoundError, ConflictError, ValidationFailedError
from app.models.category import Category
from app.models.order import OrderLine
from app.models.product import Product
from app.models.product_color import ProductColor
from app.schemas.product import ProductCreate, ProductUpdate, ProductColorCreate
from app.utils.uploads import save_uploaded_images, DEFAULT_FOLDER

logger = logging.getLogger(__name__)


def _require_product(db: Session, product_id: int) -> Product:
    product = db.query(Product).options(
        selectinload(Product.category),
        selectinload(Product.colors)
    ).filter(Product.id == product_id).first()
    if not product:
        raise NotFoundError("Product not found", details={"id": product_id})
    return product


def _require_category(db: Session, category_id: int) -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise NotFoundError("Category not found", details={"id": category_id})
    return category


def list_products(db: Session) -> List[Product]:
    return db.query(Product).options(selectinload(Product.category)).order_by(Product.name, Product.id).all()


def get_product(db: Session, product_id: int) -> Product:
    return _require_product(db, product_id)


def list_products_by_category(db: Session, category_id: int) -> List[Product]:
    _require_category(db, category_id)
    return db.query(Product).options(selectinload(Product.category)).filter(
        Product.category_id == category_id
    ).order_by(Product.name, Product.id).all()


def search_products(db: Session, term: str) -> List[Product]:
    """Case-insensitive match on name or description"""
    term = (term or "").strip()
    if not term:
        raise ValidationFailedError("Search term is required")

    pattern = f"%{term}%"
    return db.query(Product).options(selectinload(Product.category)).filter(
        or_(
            Product.name.ilike(pattern),
            Product.description.ilike(pattern)
        )
    ).order_by(Product.name, Product.id).all()


def create_product(db: Session, product_data: ProductCreate) -> Product:
    _require_category(db, product_data.category_id)

    product = Product(**product_data.model_dump())
    db.add(product)
    commit_or_fail(db, "create product")

    logger.info(f"Product {product.id} created in category {product.category_id}")
    return _require_product(db, product.id)


def update_product(db: Session, product_id: int, product_data: ProductUpdate) -> Product:
    product = _require_product(db, product_id)
    _require_category(db, product_data.category_id)

    for key, value in product_data.model_dump().items():
        setattr(product, key, value)

    commit_or_fail(db, "update product")
    logger.info(f"Product {product_id} updated")
    return _require_product(db, product_id)


def delete_product(db: Session, product_id: int) -> None:
    product = _require_product(db, product_id)

    lines_count = db.query(func.count(OrderLine.id)).filter(OrderLine.product_id == product_id).scalar() or 0
    if lines_count > 0:
        raise ConflictError(
            "Cannot delete a product that appears in existing orders",
            details={"order_lines": lines_count}
        )

    db.delete(product)
    commit_or_fail(db, "delete product")
    logger.info(f"Product {product_id} deleted")


def list_colors(db: Session, product_id: int) -> List[ProductColor]:
    return _require_product(db, product_id).colors


def add_color(db: Session, product_id: int, color_data: ProductColorCreate) -> ProductColor:
    """Add a color variant; a product cannot list the same color twice"""
    _require_product(db, product_id)

    existing = db.query(ProductColor).filter(
        ProductColor.product_id == product_id,
        func.lower(ProductColor.color) == color_data.color.lower()
    ).first()
    if existing:
        raise ConflictError("This color already exists for the product", details={"color": color_data.color})

    color = ProductColor(product_id=product_id, color=color_data.color, image=color_data.image)
    db.add(color)
    commit_or_fail(db, "add product color")
    db.refresh(color)

    logger.info(f"Color {color.color!r} added to product {product_id}")
    return color


def upload_images(db: Session, product_id: int, files: List[UploadFile]) -> List[str]:
    """Store images in the product's folder; the first one becomes the main image if none is set"""
    product = _require_product(db, product_id)

    urls = save_uploaded_images(files, "products", product.image_folder or DEFAULT_FOLDER)

    if not product.image:
        product.image = urls[0].rsplit("/", 1)[-1]
        commit_or_fail(db, "set product image")

    logger.info(f"{len(urls)} images uploaded for product {product_id}")
    return urls
