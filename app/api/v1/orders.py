from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.api.deps import get_current_user
from app.exceptions import UnauthorizedError
from app.schemas.order import OrderCreate, OrderResponse, OrderDetail
from app.schemas.common import ResponseModel
from app.models.user import User
from app.services import order_service
from app.services.auth_service import ensure_owner_or_admin

router = APIRouter()


@router.post("", response_model=ResponseModel, status_code=status.HTTP_201_CREATED)
def create_order(
    order_data: OrderCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create an order with its lines"""
    if order_data.user_id != current_user.id:
        raise UnauthorizedError(
            "Not allowed to create orders for another user",
            details={"user_id": order_data.user_id}
        )

    order = order_service.create_order(db, order_data)
    return ResponseModel(
        success=True,
        data=OrderResponse.model_validate(order),
        message="Order created successfully"
    )


@router.get("/user/{user_id}", response_model=ResponseModel)
def get_user_orders(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a user's orders, most recent first"""
    ensure_owner_or_admin(current_user, user_id, message="Not allowed to view these orders")

    orders = order_service.list_user_orders(db, user_id)
    return ResponseModel(
        success=True,
        data=[OrderResponse.model_validate(o) for o in orders]
    )


@router.get("/{order_id}", response_model=ResponseModel)
def get_order(
    order_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get order details with products and customer"""
    order = order_service.get_order(db, order_id)
    ensure_owner_or_admin(current_user, order.user_id, message="Not allowed to view this order")

    return ResponseModel(
        success=True,
        data=OrderDetail.model_validate(order)
    )
