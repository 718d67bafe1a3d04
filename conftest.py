# conftest.py
# -------------------------------------------------------------------------------------
# Archivo: conftest.py (raíz del proyecto)
# Propósito: fixtures compartidas por toda la suite.
#            - BD SQLite en memoria (StaticPool: una sola conexión compartida).
#            - App FastAPI construida con ese engine (sin tocar DATABASE_URL).
#            - Operador de prueba y cliente ya logueado (cookie de sesión).
# Uso:
#   pytest                 --> corre tests/ (ver pyproject.toml)
# -------------------------------------------------------------------------------------

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from weddings import models  # noqa: F401  (registra las tablas en Base.metadata)
from weddings.crud import guests_crud, invitations_crud, users_crud
from weddings.db import Base, build_engine, build_session_factory
from weddings.main import create_app
from weddings.models import GuestStatusEnum

TEST_USERNAME = "novios"
TEST_PASSWORD = "s3cret-pw"


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(engine, monkeypatch):
    monkeypatch.delenv("MAINTENANCE_MODE", raising=False)
    return create_app(engine=engine)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def user(db):
    # rounds=4: bcrypt mínimo, la suite no necesita hashes lentos.
    return users_crud.create(db, username=TEST_USERNAME, password=TEST_PASSWORD, rounds=4)


@pytest.fixture
def auth_client(client, user):
    r = client.post("/api/sessions", json={"username": TEST_USERNAME, "password": TEST_PASSWORD})
    assert r.status_code == 200, r.text
    return client


@pytest.fixture
def invitation_with_guests(db):
    """Invitación con tres invitados en Pending."""
    invitation = invitations_crud.create(db, name="Familia Rossi", comment="")
    guests = [
        guests_crud.create(
            db,
            invitation_id=invitation.invitation_id,
            full_name=name,
            status=GuestStatusEnum.pending,
        )
        for name in ("Mario Rossi", "Anna Rossi", "Luca Rossi")
    ]
    db.refresh(invitation)
    return invitation, guests
