from sqlalchemy import Column, String, Integer, Numeric, Text, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from app.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    image = Column(String(255), nullable=True)  # Main image file name
    image_folder = Column(String(100), nullable=True)  # Sub-folder under uploads/products
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Constraints
    __table_args__ = (
        CheckConstraint('price >= 0', name='check_product_price_non_negative'),
    )

    # Relationships
    category = relationship("Category", back_populates="products")
    colors = relationship("ProductColor", back_populates="product", cascade="all, delete-orphan", order_by="ProductColor.color")
    order_lines = relationship("OrderLine", back_populates="product")
