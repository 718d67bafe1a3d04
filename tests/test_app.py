# tests/test_app.py
# Arranque de la app: raíz, salud, metadatos, errores genéricos, mantenimiento y URL de BD.

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from weddings.crud import invitations_crud
from weddings.db import resolve_database_url
from weddings.exceptions import GuestNotFoundError
from weddings.main import create_app


def test_root_greeting(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.text == "Hello World, from your server"


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_meta_options(client):
    body = client.get("/api/meta/options").json()
    assert body["menuTypes"] == ["Standard", "Vegetarian", "Vegan", "Gluten-Free", "Lactose-Free"]
    assert body["needs"] == ["Autonomous", "Bus-Only", "Bus-And-Hotel", "Hotel-Only"]
    assert body["guestStatuses"] == ["Pending", "Accepted", "Declined"]
    assert body["nightsNeeded"] == ["Both", "21-Only", "22-Only", "None"]
    assert "Partially Accepted" in body["invitationStatuses"]


def test_unknown_route_is_404_envelope(client):
    r = client.get("/api/nope")
    assert r.status_code == 404
    assert r.json() == {"error": "Requested resource was not found!", "code": "NOT_FOUND"}


def test_storage_failure_is_500_envelope(app, monkeypatch, invitation_with_guests):
    invitation, _ = invitation_with_guests

    def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

    monkeypatch.setattr(invitations_crud, "get_by_id", broken)
    with TestClient(app, raise_server_exceptions=False) as c:
        r = c.get(f"/api/invitations/{invitation.invitation_id}")
    assert r.status_code == 500
    assert r.json() == {"error": "An error occurred", "code": "INTERNAL_ERROR", "description": "OperationalError"}


def test_maintenance_mode_answers_503(monkeypatch):
    monkeypatch.setenv("MAINTENANCE_MODE", "1")
    with TestClient(create_app()) as c:
        for method, path in (("GET", "/api/health"), ("POST", "/api/sessions"), ("PUT", "/api/invitations/123456")):
            r = c.request(method, path)
            assert r.status_code == 503
            assert r.json()["code"] == "SERVICE_UNAVAILABLE"


# =========================
# Política FORCE_DB
# =========================
def test_database_url_is_used_as_given(monkeypatch):
    monkeypatch.setenv("FORCE_DB", "postgres")
    assert resolve_database_url("postgresql://u:p@db/weddings") == "postgresql://u:p@db/weddings"


def test_missing_url_aborts_when_postgres_is_forced(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("FORCE_DB", "postgres")
    with pytest.raises(RuntimeError):
        resolve_database_url()


def test_missing_url_falls_back_to_sqlite(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "${{ Postgres.DATABASE_URL }}")
    monkeypatch.setenv("FORCE_DB", "sqlite")
    url = resolve_database_url()
    assert url.startswith("sqlite:///")
    assert url.endswith("weddings.db")


def test_guest_not_found_maps_to_404_with_guest_id(app):
    @app.get("/api/_boom")
    def boom():
        raise GuestNotFoundError(5)

    with TestClient(app) as c:
        r = c.get("/api/_boom")
    assert r.status_code == 404
    assert r.json() == {"error": "Guest not found", "code": "NOT_FOUND", "guestId": 5}
