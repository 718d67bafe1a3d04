# weddings/crud/users_crud.py
# =================================================================================
# 🧩 CRUD de operadores (User): búsqueda, verificación de credenciales y alta.
# =================================================================================

from typing import Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from weddings import auth
from weddings.models import User


def get_by_username(db: Session, username: str) -> Optional[User]:
    """Devuelve el usuario por username exacto, o None si no existe."""
    if not username:
        return None
    return db.scalars(select(User).where(User.username == username.strip())).first()


def get_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def verify_credentials(db: Session, username: str, password: str) -> Optional[User]:
    """
    Devuelve el User si username y contraseña coinciden; None en cualquier otro caso.
    Usuario inexistente y contraseña incorrecta no se distinguen hacia fuera.
    """
    user = get_by_username(db, username)
    if user is None:
        logger.debug("CRUD/users.verify_credentials → usuario desconocido")
        return None
    if not auth.verify_password(password or "", user.hash):
        logger.debug("CRUD/users.verify_credentials → contraseña incorrecta | user_id={}", user.user_id)
        return None
    return user


def create(db: Session, *, username: str, password: str, rounds: Optional[int] = None) -> User:
    """Crea un operador con la contraseña hasheada (bcrypt)."""
    user = User(username=username.strip(), hash=auth.hash_password(password, rounds=rounds))
    db.add(user)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(user)
    logger.info("CRUD/users.create → user_id={} username={}", user.user_id, user.username)
    return user
