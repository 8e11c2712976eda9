"""
Pytest configuration and fixtures for tests.

Every test gets a fresh in-memory SQLite database; the FastAPI app is pointed
at it by overriding the ``get_session`` dependency.
"""
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from app.main import app
from app.db.session import enforce_foreign_keys, get_session
from app.models.order import Order, OrderItem
from app.models.product import Product
from app.models.user import User
from app.services.auth import AuthService


@pytest.fixture(name="session")
def session_fixture():
    engine = enforce_foreign_keys(create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    ))
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def products(session: Session):
    """Two active stickers: #1 Laravel (5.99, 100 in stock), #2 React (4.99, 50 in stock)."""
    laravel = Product(
        id=1,
        name="Laravel Sticker",
        description="Cool Laravel sticker",
        price=Decimal("5.99"),
        stock_quantity=100,
        category="Framework",
        image_url="/images/products/laravel.png",
    )
    react = Product(
        id=2,
        name="React Sticker",
        description="Cool React sticker",
        price=Decimal("4.99"),
        stock_quantity=50,
        category="Library",
        image_url="/images/products/react.png",
    )
    session.add(laravel)
    session.add(react)
    session.commit()
    session.refresh(laravel)
    session.refresh(react)
    return laravel, react


@pytest.fixture
def inactive_product(session: Session):
    product = Product(
        id=3,
        name="Retired Sticker",
        description="No longer sold",
        price=Decimal("1.99"),
        stock_quantity=10,
        is_active=False,
    )
    session.add(product)
    session.commit()
    session.refresh(product)
    return product


def _create_user(session: Session, email: str, is_superuser: bool = False) -> User:
    service = AuthService(session)
    user = User(
        email=email,
        name=email.split("@")[0],
        password_hash=service.get_password_hash("SecurePassword123!"),
        is_superuser=is_superuser,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def _auth_headers(session: Session, user: User) -> dict:
    token = AuthService(session).create_access_token({"sub": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer(session: Session) -> User:
    return _create_user(session, "customer@example.com")


@pytest.fixture
def other_customer(session: Session) -> User:
    return _create_user(session, "other@example.com")


@pytest.fixture
def admin(session: Session) -> User:
    return _create_user(session, "admin@example.com", is_superuser=True)


@pytest.fixture
def customer_headers(session: Session, customer: User) -> dict:
    return _auth_headers(session, customer)


@pytest.fixture
def other_headers(session: Session, other_customer: User) -> dict:
    return _auth_headers(session, other_customer)


@pytest.fixture
def admin_headers(session: Session, admin: User) -> dict:
    return _auth_headers(session, admin)


@pytest.fixture
def shipping_address() -> dict:
    return {
        "street": "123 Main St",
        "city": "Springfield",
        "state": "IL",
        "zip": "62701",
        "country": "United States",
    }


@pytest.fixture
def make_order(session: Session):
    """Factory writing an order with a single item straight to the database."""
    def _make_order(user_id, product_id=1, quantity=1, price="5.99", created_at=None) -> Order:
        order = Order(
            user_id=user_id,
            total_amount=Decimal(price) * quantity,
            shipping_address={
                "street": "1 Test Way",
                "city": "Testville",
                "state": "TS",
                "zip": "12345",
                "country": "United States",
            },
            payment_method="credit_card",
            created_at=created_at or datetime.now(timezone.utc),
        )
        session.add(order)
        session.flush()
        session.add(OrderItem(order_id=order.id, product_id=product_id, quantity=quantity, price=Decimal(price)))
        session.commit()
        session.refresh(order)
        return order

    return _make_order
