"""Shared pytest fixtures: in-memory database, API client and seed data."""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

from datetime import date, datetime, timedelta  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from barbershop.database import Base, SessionLocal, engine, get_db  # noqa: E402
from barbershop.main import app  # noqa: E402
from barbershop.models import Product, Service, User  # noqa: E402
from barbershop.security_utils import create_jwt_token, hash_password  # noqa: E402

PASSWORD = "s3cret-pass"
VALID_CARD = {
    "cardName": "Jane Client",
    "cardNumber": "4242 4242 4242 4242",
    "cardExpiry": "12/35",
    "cardCVC": "123",
}


def fixed_clock(moment):
    """Clock returning a constant instant."""
    return lambda: moment


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
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


def _make_user(db, name, email, role="client"):
    user = User(
        name=name,
        email=email,
        phone="5551234567",
        password_hash=hash_password(PASSWORD),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def user(db):
    return _make_user(db, "Jane Client", "jane@example.com")


@pytest.fixture
def other_user(db):
    return _make_user(db, "John Other", "john@example.com")


@pytest.fixture
def admin(db):
    return _make_user(db, "Shop Owner", "owner@example.com", role="admin")


def _auth_headers(user):
    token = create_jwt_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(user):
    return _auth_headers(user)


@pytest.fixture
def other_headers(other_user):
    return _auth_headers(other_user)


@pytest.fixture
def admin_headers(admin):
    return _auth_headers(admin)


@pytest.fixture
def haircut(db):
    service = Service(
        name="Haircut",
        description="Classic cut",
        price=25.0,
        duration=30,
        image="/img/haircut.jpg",
        icon="scissors",
    )
    db.add(service)
    db.commit()
    db.refresh(service)
    return service


@pytest.fixture
def shave(db):
    service = Service(
        name="Shave",
        description="Hot towel shave",
        price=15.0,
        duration=45,
        image="/img/shave.jpg",
    )
    db.add(service)
    db.commit()
    db.refresh(service)
    return service


@pytest.fixture
def pomade(db):
    product = Product(
        name="Pomade",
        description="Strong hold",
        price=12.5,
        image="/img/pomade.jpg",
        quantity=5,
        sold_quantity=0,
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@pytest.fixture
def early_clock():
    """Fixed 'now' of 2025-06-01 08:00, before every slot used in unit tests."""
    return fixed_clock(datetime(2025, 6, 1, 8, 0))


@pytest.fixture
def future_day():
    """Factory for YYYY-MM-DD strings safely inside the booking window."""

    def _future_day(days_ahead=30):
        return (date.today() + timedelta(days=days_ahead)).isoformat()

    return _future_day


@pytest.fixture
def card():
    return dict(VALID_CARD)


@pytest.fixture
def password():
    return PASSWORD
