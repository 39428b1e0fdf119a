"""Shared fixtures: in-memory database, API client and users."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from designhub.api.deps import get_db
from designhub.core.security import create_user_token, get_password_hash
from designhub.database import Base
from designhub.main import app
from designhub.models import Product, User


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(name: str = "Test User", role: str = "user", email: str = None) -> User:
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@example.com",
            password_hash=get_password_hash("Password1"),
            name=name,
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user(name="Alice")


@pytest.fixture
def other_user(make_user):
    return make_user(name="Bob")


def _auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_user_token(user)}"}


@pytest.fixture
def auth_headers():
    return _auth_headers


@pytest.fixture
def headers(user):
    return _auth_headers(user)


@pytest.fixture
def product(db, make_user):
    seller = make_user(name="Seller")
    product = Product(
        seller_id=seller.id,
        title="Minimal Logo Pack",
        description="Fifty minimal logos in vector formats",
        price=19.0,
        category="logos",
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product
