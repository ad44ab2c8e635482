"""
Tests for order creation and lookup
"""
from datetime import date
from decimal import Decimal

import pytest
from app.exceptions import NotFoundError, ValidationFailedError, StorageFailureError
from app.models.order import Order, OrderLine
from app.schemas.order import OrderCreate, OrderLineCreate
from app.services import order_service
from tests.conftest import make_user, make_category, make_product


@pytest.fixture
def catalog(db):
    jewelry = make_category(db, "Jewelry")
    barbell = make_product(db, jewelry, name="Titanium barbell", price="19.99")
    ring = make_product(db, jewelry, name="Septum ring", price="29.99")
    return barbell, ring


def _order(user_id, lines, total="49.98", order_date=None):
    return OrderCreate(user_id=user_id, total=Decimal(total), date=order_date, lines=lines)


def test_create_order_with_lines(db, catalog):
    """User 7 orders two products for 49.98"""
    barbell, ring = catalog
    make_user(db, user_id=7)

    order = order_service.create_order(db, _order(7, [
        OrderLineCreate(product_id=barbell.id, color="Silver", quantity=1),
        OrderLineCreate(product_id=ring.id, color="Gold", quantity=1),
    ]))

    assert order.id is not None
    assert order.user_id == 7
    assert order.total == Decimal("49.98")
    assert order.date == date.today()
    assert len(order.lines) == 2
    assert all(line.order_id == order.id for line in order.lines)
    assert db.query(OrderLine).count() == 2


def test_create_order_snapshots_product_names(db, catalog):
    barbell, ring = catalog
    user = make_user(db)

    order = order_service.create_order(db, _order(user.id, [
        OrderLineCreate(product_id=barbell.id, color="Silver", quantity=2),
        OrderLineCreate(product_id=ring.id, color="Gold", quantity=1, name="Gift ring"),
    ]))

    names = sorted(line.name for line in order.lines)
    assert names == ["Gift ring", "Titanium barbell"]


def test_create_order_accepts_legacy_field_names(db, catalog):
    barbell, _ = catalog
    user = make_user(db)

    order_data = OrderCreate.model_validate({
        "iduser": user.id,
        "fecha": "2024-03-15",
        "total": "19.99",
        "lineas": [{"idprod": barbell.id, "color": "Black", "cant": 1}],
    })
    order = order_service.create_order(db, order_data)

    assert order.date == date(2024, 3, 15)
    assert order.lines[0].quantity == 1


def test_create_order_without_lines(db):
    user = make_user(db)

    with pytest.raises(ValidationFailedError):
        order_service.create_order(db, _order(user.id, []))

    assert db.query(Order).count() == 0


def test_failed_line_rolls_back_whole_order(db, catalog):
    """A line pointing at a missing product leaves no order and no lines behind"""
    barbell, _ = catalog
    user = make_user(db)

    with pytest.raises(StorageFailureError):
        order_service.create_order(db, _order(user.id, [
            OrderLineCreate(product_id=barbell.id, color="Silver", quantity=1),
            OrderLineCreate(product_id=9999, color="Gold", quantity=1),
        ]))

    assert db.query(Order).count() == 0
    assert db.query(OrderLine).count() == 0


def test_invalid_quantity_rolls_back_whole_order(db, catalog):
    """The database rejects a zero quantity even if validation was bypassed"""
    barbell, ring = catalog
    user = make_user(db)

    order_data = OrderCreate.model_construct(
        user_id=user.id,
        date=None,
        total=Decimal("19.99"),
        lines=[
            OrderLineCreate.model_construct(product_id=barbell.id, color="Silver", quantity=1, name=None),
            OrderLineCreate.model_construct(product_id=ring.id, color="Gold", quantity=0, name=None),
        ]
    )

    with pytest.raises(StorageFailureError):
        order_service.create_order(db, order_data)

    assert db.query(Order).count() == 0
    assert db.query(OrderLine).count() == 0


def test_list_user_orders_most_recent_first(db, catalog):
    barbell, _ = catalog
    user = make_user(db)
    line = OrderLineCreate(product_id=barbell.id, color="Silver", quantity=1)

    order_service.create_order(db, _order(user.id, [line], total="19.99", order_date=date(2024, 1, 1)))
    order_service.create_order(db, _order(user.id, [line], total="19.99", order_date=date(2024, 6, 1)))

    orders = order_service.list_user_orders(db, user.id)

    assert [o.date for o in orders] == [date(2024, 6, 1), date(2024, 1, 1)]


def test_list_orders_only_for_that_user(db, catalog):
    barbell, _ = catalog
    maria = make_user(db, username="maria")
    lucas = make_user(db, username="lucas")
    line = OrderLineCreate(product_id=barbell.id, color="Silver", quantity=1)

    order_service.create_order(db, _order(maria.id, [line], total="19.99"))

    assert len(order_service.list_user_orders(db, maria.id)) == 1
    assert order_service.list_user_orders(db, lucas.id) == []


def test_list_orders_for_missing_user(db):
    with pytest.raises(NotFoundError):
        order_service.list_user_orders(db, 404)


def test_get_order_loads_products_and_user(db, catalog):
    barbell, _ = catalog
    user = make_user(db)
    created = order_service.create_order(db, _order(user.id, [
        OrderLineCreate(product_id=barbell.id, color="Silver", quantity=3),
    ], total="59.97"))

    order = order_service.get_order(db, created.id)

    assert order.user.username == "maria"
    assert order.lines[0].product.name == "Titanium barbell"
    assert order.lines[0].quantity == 3


def test_get_missing_order(db):
    with pytest.raises(NotFoundError):
        order_service.get_order(db, 1)


def test_created_order_is_committed_with_its_lines(db, catalog):
    """The returned order matches what a fresh read of the database sees"""
    barbell, ring = catalog
    user = make_user(db)

    order = order_service.create_order(db, _order(user.id, [
        OrderLineCreate(product_id=barbell.id, color="Silver", quantity=1),
        OrderLineCreate(product_id=ring.id, color="Gold", quantity=2),
    ]))

    db.expire_all()
    stored = db.query(Order).filter(Order.id == order.id).one()
    assert [(line.product_id, line.quantity) for line in stored.lines] == [(barbell.id, 1), (ring.id, 2)]
    assert [line.id for line in order.lines] == [line.id for line in stored.lines]
