"""
Shared fixtures: an in-memory SQLite database per test and an API client bound to it
"""
import os

# Cheap hashes for tests; must be set before app.config is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models.category import Category, ROOT_PLACEHOLDER
from app.models.product import Product
from app.models.user import User, UserRole
from app.services.auth_service import create_token
from app.utils.security import get_password_hash

PASSWORD = "secret123"


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_user(db, username="maria", role=UserRole.USER, user_id=None, email=None):
    user = User(
        id=user_id,
        username=username,
        password_hash=get_password_hash(PASSWORD),
        name=username.title(),
        email=email or f"{username}@example.com",
        address="Calle Mayor 1",
        city="Madrid",
        postal_code="28001",
        role=role
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_category(db, name, parent_id=None):
    """Insert a category directly; without parent_id it becomes a root"""
    category = Category(name=name, parent_id=parent_id if parent_id is not None else ROOT_PLACEHOLDER)
    db.add(category)
    db.flush()
    if parent_id is None:
        category.parent_id = category.id
    db.commit()
    db.refresh(category)
    return category


def make_product(db, category, name="Titanium barbell", price="19.99", **extra):
    product = Product(name=name, price=Decimal(price), category_id=category.id, **extra)
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def auth_headers(user):
    return {"Authorization": f"Bearer {create_token(user)}"}


@pytest.fixture
def user(db):
    return make_user(db)


@pytest.fixture
def admin(db):
    return make_user(db, username="admin", role=UserRole.ADMIN)
