from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from app.database import Base

# Parent value held by a root category between its insert and the self-reference patch
ROOT_PLACEHOLDER = -1


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, index=True)
    # Roots point at themselves; kept as a plain integer so a root can be
    # inserted with ROOT_PLACEHOLDER and patched once its id is known
    parent_id = Column(Integer, nullable=False, default=ROOT_PLACEHOLDER, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    products = relationship("Product", back_populates="category")

    @property
    def is_root(self) -> bool:
        return self.parent_id == self.id
