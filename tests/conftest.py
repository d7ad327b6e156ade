"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides test database, client, member/catalog/cart and authentication
fixtures.

==============================================================================
"""

import os

# Settings are read once per process; point them at throwaway values first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-pytest-only")

import pytest
from typing import Callable, Dict, Generator, List
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.database import Base, get_db
from app.db.models import Cart, Item, Member
from app.core.security import get_security_manager
from app.services.order_service import OrderService


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

# In-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create test client with database override."""
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
def order_service(db: Session) -> OrderService:
    return OrderService(db)


# ============================================================================
# MEMBER FIXTURES
# ============================================================================

@pytest.fixture
def member(db: Session) -> Member:
    """Create a member who can log in with 'password123'."""
    security = get_security_manager()
    member = Member(
        email="kim@shop.kr",
        name="Kim",
        password_hash=security.hash_password("password123"),
    )
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


@pytest.fixture
def other_member(db: Session) -> Member:
    security = get_security_manager()
    member = Member(
        email="lee@shop.kr",
        name="Lee",
        password_hash=security.hash_password("password456"),
    )
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


@pytest.fixture
def mixed_case_member(db: Session) -> Member:
    """Create a member whose stored email keeps its capitals."""
    member = Member(
        email="Park@Shop.kr",
        name="Park",
        password_hash=get_security_manager().hash_password("password789"),
    )
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


# ============================================================================
# CATALOG & CART FIXTURES
# ============================================================================

@pytest.fixture
def make_item(db: Session) -> Callable[..., Item]:
    """Factory fixture creating catalog items."""
    def _make_item(name: str, price: int, stock_quantity: int) -> Item:
        item = Item(
            name=name,
            price=price,
            stock_quantity=stock_quantity,
            rep_img_url=f"/images/{name.lower().replace(' ', '-')}.png",
        )
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    return _make_item


@pytest.fixture
def items(make_item: Callable[..., Item]) -> Dict[str, Item]:
    """Three catalog items: A (stock 10), B (stock 5), C (stock 3)."""
    return {
        "A": make_item("Chicken Breast", 3000, 10),
        "B": make_item("Protein Bar", 1500, 5),
        "C": make_item("Salad Box", 5500, 3),
    }


@pytest.fixture
def fill_cart(db: Session) -> Callable[[Member, List[Item]], None]:
    """Factory fixture putting items into a member's cart."""
    def _fill_cart(owner: Member, cart_items: List[Item]) -> None:
        for item in cart_items:
            db.add(Cart(member_id=owner.id, item_id=item.id, quantity=1))
        db.commit()

    return _fill_cart


# ============================================================================
# TOKEN FIXTURES
# ============================================================================

@pytest.fixture
def access_token(member: Member) -> str:
    """Create access token for the member."""
    return get_security_manager().create_access_token({
        "sub": member.email,
        "member_id": member.id,
    })


@pytest.fixture
def refresh_token(member: Member) -> str:
    """Create refresh token for the member."""
    return get_security_manager().create_refresh_token({
        "sub": member.email,
        "member_id": member.id,
    })


@pytest.fixture
def member_headers(access_token: str) -> Dict[str, str]:
    """Authorization headers for the member."""
    return {"Authorization": f"Bearer {access_token}"}
