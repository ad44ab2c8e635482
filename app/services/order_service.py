import logging
from datetime import date
from typing import List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from app.exceptions import NotFoundError, ValidationFailedError, StorageFailureError
from app.models.order import Order, OrderLine
from app.models.product import Product
from app.models.user import User
from app.schemas.order import OrderCreate

logger = logging.getLogger(__name__)


def _product_names(db: Session, product_ids: List[int]) -> dict:
    rows = db.query(Product.id, Product.name).filter(Product.id.in_(product_ids)).all()
    return {row.id: row.name for row in rows}


def create_order(db: Session, order_data: OrderCreate) -> Order:
    """
    Write an order and all of its lines as one unit.

    The caller must already have checked that the requester owns
    ``order_data.user_id``. Any failure while writing rolls back the order
    row together with every line.
    """
    if not order_data.lines:
        raise ValidationFailedError("An order must contain at least one product")

    try:
        names = _product_names(db, [line.product_id for line in order_data.lines])

        order = Order(
            user_id=order_data.user_id,
            date=order_data.date or date.today(),
            total=order_data.total
        )
        db.add(order)
        db.flush()

        db.add_all([
            OrderLine(
                order_id=order.id,
                product_id=line.product_id,
                color=line.color,
                quantity=line.quantity,
                name=line.name or names.get(line.product_id)
            )
            for line in order_data.lines
        ])
        db.flush()

        # Read back inside the same transaction
        order_id = order.id
        order = db.query(Order).options(selectinload(Order.lines)).filter(Order.id == order_id).one()
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating order for user {order_data.user_id}: {str(e)}", exc_info=True)
        raise StorageFailureError("Could not create order", details={"user_id": order_data.user_id}) from e

    logger.info(f"Order {order_id} created for user {order_data.user_id} with {len(order_data.lines)} lines")
    return order


def get_order(db: Session, order_id: int) -> Order:
    """Order with its lines, the products they reference and the owning user"""
    order = db.query(Order).options(
        selectinload(Order.lines).selectinload(OrderLine.product),
        selectinload(Order.user)
    ).filter(Order.id == order_id).first()

    if not order:
        raise NotFoundError("Order not found", details={"id": order_id})
    return order


def list_user_orders(db: Session, user_id: int) -> List[Order]:
    """Every order placed by a user, most recent first"""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found", details={"id": user_id})

    return db.query(Order).options(selectinload(Order.lines)).filter(
        Order.user_id == user_id
    ).order_by(Order.date.desc(), Order.id.desc()).all()
