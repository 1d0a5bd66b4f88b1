# tests/conftest.py
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOCAL_UTC_OFFSET_HOURS", "1")

from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from deebank_admin.core.security import create_access_token
from deebank_admin.db.base_class import Base
from deebank_admin.db.session import get_db
from deebank_admin.main import app
from deebank_admin.models import Deposit, Profile, Withdrawal
from deebank_admin.services.admin_session import sessions
from deebank_admin.services.backend import BackendDataService

# Test database setup
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Fresh tables per test; commits are real so change notifications fire."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def reset_sessions():
    yield
    sessions.clear()


@pytest.fixture
def backend(db_session):
    return BackendDataService(db_session)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client that uses the override_get_db fixture."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    token = create_access_token({"sub": "admin-1", "name": "Admin Master"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_client(client, auth_headers):
    """Client whose admin already started a session."""
    response = client.post("/api/v1/session/start", headers=auth_headers)
    assert response.status_code == 200
    client.headers.update(auth_headers)
    return client


# ---------------- Row factories ---------------- #
def make_profile(db, phone="923456789", full_name="Maria Joana"):
    profile = Profile(phone=phone, full_name=full_name, saldo=Decimal("0"))
    db.add(profile)
    db.commit()
    return profile


def make_deposit(db, profile, valor="5000", estado="pendente", created_at=None, bank="BAI"):
    deposit = Deposit(
        user_id=profile.id,
        valor=Decimal(valor),
        estado=estado,
        nome_do_banco=bank,
        created_at=created_at or datetime.utcnow(),
    )
    db.add(deposit)
    db.commit()
    return deposit


def make_withdrawal(db, phone="923456789", valor="2000", status="pendente", profile=None,
                    created_at=None, iban="AO06004000010123456789012"):
    withdrawal = Withdrawal(
        user_id=profile.id if profile else None,
        telefone=phone,
        valor=Decimal(valor),
        status=status,
        nome_do_banco="BFA",
        iban=iban,
        created_at=created_at or datetime.utcnow(),
    )
    db.add(withdrawal)
    db.commit()
    return withdrawal
