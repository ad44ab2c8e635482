from app.models.user import User, UserRole
from app.models.category import Category
from app.models.product import Product
from app.models.product_color import ProductColor
from app.models.order import Order, OrderLine

__all__ = [
    "User",
    "UserRole",
    "Category",
    "Product",
    "ProductColor",
    "Order",
    "OrderLine"
]
