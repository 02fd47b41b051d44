"""
Test configuration and fixtures.

Provides:
- An in-memory SQLite database, rebuilt for every test, with two companies
- Admin, nutritionist and client accounts plus bearer headers for each
- A TestClient whose requests share the test's database session
"""
import os
from datetime import timedelta
from typing import Generator

# Settings are read at import time, so the environment goes first
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "development"
os.environ["NUTRITIONIST_ALLOWLIST"] = "nutri@example.com, Second.Nutri@example.com"
os.environ["ALLOW_PUBLIC_ADMIN_REGISTRATION"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from wellness import crud
from wellness.api.deps import get_db
from wellness.db.base import Base
from wellness.db.session import SessionLocal, engine
from wellness.main import app
from wellness.models import Client, Followup, User
from wellness.models.user import Role
from wellness.schemas.auth import Principal
from wellness.utils.timezone import utcnow

NUTRITIONIST_NAME = "Priya Nair"


# =============================================================================
# Database
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    crud.company.seed(session, names=["Acme Corp", "Globex"])
    session.commit()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# =============================================================================
# Accounts
# =============================================================================

def _create_user(db: Session, **fields) -> User:
    user = crud.user.create(db, **fields)
    db.commit()
    return user


@pytest.fixture
def admin_user(db: Session) -> User:
    return _create_user(db, name="Admin", email="admin@example.com", password="admin-pass", role=Role.ADMIN)


@pytest.fixture
def nutritionist_user(db: Session) -> User:
    return _create_user(
        db, name=NUTRITIONIST_NAME, email="nutri@example.com", password="nutri-pass", role=Role.NUTRITIONIST
    )


@pytest.fixture
def client_user(db: Session) -> User:
    return _create_user(
        db,
        name="Carol Client",
        email="carol@example.com",
        password="client-pass",
        role=Role.CLIENT,
        client_id=1,
        company_id=1,
    )


def bearer(user: User) -> dict:
    token = app.state.access_gate.issue_token(user)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    return bearer(admin_user)


@pytest.fixture
def nutritionist_headers(nutritionist_user: User) -> dict:
    return bearer(nutritionist_user)


@pytest.fixture
def client_headers(client_user: User) -> dict:
    return bearer(client_user)


def principal_for(user: User) -> Principal:
    return Principal(id=user.id, role=user.role, name=user.name, email=user.email)


# =============================================================================
# Data builders
# =============================================================================

def add_client(db: Session, company_id: int, client_id: int, name: str, assigned: str = None) -> Client:
    record = Client(company_id=company_id, client_id=client_id, name=name, assigned_nutritionist=assigned)
    db.add(record)
    db.commit()
    return record


def add_followup(db: Session, company_id: int, client_id: int, *, hours_from_now: float = None,
                 at=None, status: str = "pending", assigned: str = None, legacy_date: bool = False) -> Followup:
    when = at if at is not None else (
        utcnow() + timedelta(hours=hours_from_now) if hours_from_now is not None else None
    )
    record = Followup(
        company_id=company_id,
        client_id=client_id,
        status=status,
        assigned_nutritionist=assigned,
        completed_at=utcnow() if status == "done" else None,
        **({"followup_date": when} if legacy_date else {"scheduled_at": when}),
    )
    db.add(record)
    db.commit()
    return record
