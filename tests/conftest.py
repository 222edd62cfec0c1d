"""Pytest configuration and fixtures."""

import os
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from stockroom.database import Base, get_db
from stockroom.main import app
from stockroom.models import Category, Customer, EmailVerification, Order, Product
from stockroom.models.enums import OrderStatus


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL when DATABASE_URL is set, SQLite locally
if os.getenv("DATABASE_URL", "").startswith("postgresql"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/stockroom", "/stockroom_test")
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def signup(client, db):
    """Sign up through the API with an already verified email."""

    def _signup(email: str, password: str = "testpass123", name: str = "Test User"):
        db.add(
            EmailVerification(
                email=email,
                otp="123456",
                expires_at=datetime.now(UTC) + timedelta(minutes=10),
                verified=True,
            )
        )
        db.commit()
        return client.post(
            "/api/v1/auth/signup",
            json={
                "name": name,
                "email": email,
                "password": password,
                "confirm_password": password,
            },
        )

    return _signup


@pytest.fixture
def auth_headers(signup):
    """Create a user and return auth headers with user info."""
    response = signup("test@example.com")
    assert response.status_code == 201
    data = response.json()

    return AuthHeaders(
        {"Authorization": f"Bearer {data['access_token']}"},
        user_id=data["user"]["id"],
        email=data["user"]["email"],
    )


@pytest.fixture
def make_product(db):
    """Factory that inserts a product directly."""
    categories: dict[str, Category] = {}

    def _make(name="WIDGET", category="Electronics", stock=10, min_stock=0, **kwargs):
        if category not in categories:
            existing = db.query(Category).filter(Category.name == category).first()
            categories[category] = existing or Category(name=category)
        kwargs.setdefault("price", 10.0)
        kwargs.setdefault("cost_price", 5.0)
        product = Product(
            name=name,
            category=categories[category],
            stock=stock,
            min_stock=min_stock,
            **kwargs,
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def make_order(db):
    """Factory that inserts an order for a named customer."""
    customers: dict[str, Customer] = {}

    def _make(order_no, amount=100.0, status=OrderStatus.COMPLETED, customer="Acme Corp", **kwargs):
        if customer not in customers:
            customers[customer] = Customer(name=customer)
        order = Order(
            order_no=order_no,
            amount=amount,
            status=status.value,
            customer=customers[customer],
            **kwargs,
        )
        db.add(order)
        db.commit()
        db.refresh(order)
        return order

    return _make
