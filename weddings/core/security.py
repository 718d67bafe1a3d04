# weddings/core/security.py
# Dependencias de sesión: leen la cookie firmada y cargan al operador actual.
import os
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from weddings import auth
from weddings.crud import users_crud
from weddings.db import get_db
from weddings.models import User

SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "weddings_session")
SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "0") == "1"


def get_optional_user(request: Request, db: Session = Depends(get_db)) -> Optional[User]:
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if not token:
        return None
    user_id = auth.decode_session_token(token)
    if user_id is None:
        return None
    return users_crud.get_by_id(db, user_id)


def require_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User is not authenticated",
        )
    return user


def client_ip(request: Request) -> str:
    """IP real del cliente detrás de proxy/CDN (primera entrada de X-Forwarded-For)."""
    xff = request.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",")[0].strip()
    return request.client.host if request.client else "unknown"
