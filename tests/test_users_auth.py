# tests/test_users_auth.py
# Operadores: hash bcrypt, verificación de credenciales y token de sesión (JWT).

from datetime import timedelta

import pytest
from jose import jwt
from sqlalchemy.exc import IntegrityError

from weddings import auth
from weddings.crud import users_crud


# =========================
# Contraseñas
# =========================
def test_hash_password_is_salted_and_verifiable():
    first = auth.hash_password("clave-larga", rounds=4)
    second = auth.hash_password("clave-larga", rounds=4)
    assert first != second
    assert first.startswith("$2")
    assert auth.verify_password("clave-larga", first)
    assert not auth.verify_password("otra-clave", first)


def test_verify_password_with_corrupt_hash_is_false():
    assert auth.verify_password("x", "no-es-un-hash") is False


# =========================
# CRUD de operadores
# =========================
def test_create_stores_hash_not_password(db, user):
    assert user.user_id is not None
    assert user.hash != "s3cret-pw"
    assert users_crud.get_by_username(db, "novios").user_id == user.user_id
    assert users_crud.get_by_id(db, user.user_id).username == "novios"


def test_username_is_unique(db, user):
    with pytest.raises(IntegrityError):
        users_crud.create(db, username="novios", password="otra", rounds=4)


@pytest.mark.parametrize(
    "username, password",
    [("novios", "mala"), ("nadie", "s3cret-pw"), ("", "s3cret-pw"), ("novios", "")],
)
def test_verify_credentials_rejects(db, user, username, password):
    assert users_crud.verify_credentials(db, username, password) is None


def test_verify_credentials_accepts(db, user):
    assert users_crud.verify_credentials(db, "novios", "s3cret-pw").user_id == user.user_id


# =========================
# Token de sesión
# =========================
def test_session_token_roundtrip():
    token = auth.create_session_token(42)
    assert auth.decode_session_token(token) == 42


def test_expired_session_token_is_rejected(monkeypatch):
    real_now = auth._utcnow()
    monkeypatch.setattr(auth, "_utcnow", lambda: real_now - timedelta(days=3))
    token = auth.create_session_token(7, expires_minutes=60)
    assert auth.decode_session_token(token) is None


def test_tampered_or_foreign_tokens_are_rejected():
    assert auth.decode_session_token("basura") is None

    forged = jwt.encode({"sub": "1", "type": "session"}, "otra-clave", algorithm=auth.ALGORITHM)
    assert auth.decode_session_token(forged) is None

    wrong_type = jwt.encode({"sub": "1", "type": "reset"}, auth.SECRET_KEY, algorithm=auth.ALGORITHM)
    assert auth.decode_session_token(wrong_type) is None

    bad_sub = jwt.encode({"sub": "abc", "type": "session"}, auth.SECRET_KEY, algorithm=auth.ALGORITHM)
    assert auth.decode_session_token(bad_sub) is None
