# tests/test_create_db.py
# Script de preparación de la BD: parseo de SEED_USERS y alta idempotente.

from create_db import parse_seed_users, seed_users
from weddings.crud import users_crud


def test_parse_seed_users_skips_malformed_entries():
    raw = "ana:pw1, luis:pw:con:dospuntos ,sinclave, :vacío,carla:"
    assert parse_seed_users(raw) == [("ana", "pw1"), ("luis", "pw:con:dospuntos")]
    assert parse_seed_users("") == []


def test_seed_users_is_idempotent(db, session_factory, monkeypatch):
    monkeypatch.setattr("weddings.auth.BCRYPT_ROUNDS", 4)
    users = [("ana", "pw1"), ("luis", "pw2")]

    assert seed_users(session_factory, users) == 2
    assert seed_users(session_factory, users) == 0

    assert users_crud.verify_credentials(db, "ana", "pw1") is not None
    assert users_crud.verify_credentials(db, "luis", "pw1") is None
