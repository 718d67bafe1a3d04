# weddings/auth.py

# =================================================================================
# 🔐 MÓDULO DE AUTENTICACIÓN (bcrypt + JWT de sesión)
# ---------------------------------------------------------------------------------
# - Hashea y verifica contraseñas de operadores con bcrypt (sal incluida en el hash).
# - Crea y verifica el token de sesión (JWT firmado con python-jose) que viaja en
#   una cookie HttpOnly. El payload solo lleva el user_id: la sesión es pequeña y
#   el usuario se relee de la BD en cada request.
# =================================================================================

import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt

# ⚙️ Configuración de seguridad (desde .env con defaults de desarrollo)
SECRET_KEY = os.getenv("SECRET_KEY", "dev_secret")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
SESSION_EXPIRE_MINUTES = int(os.getenv("SESSION_EXPIRE_MINUTES", "1440"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

SESSION_TOKEN_TYPE = "session"

if not SECRET_KEY:
    raise ValueError("SECRET_KEY no está configurado.")
if not ALGORITHM:
    raise ValueError("ALGORITHM no está configurado.")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =================================================================================
# 🔑 CONTRASEÑAS
# =================================================================================

def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Devuelve el hash bcrypt (texto) de la contraseña."""
    salt = bcrypt.gensalt(rounds=rounds or BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Compara en tiempo constante; un hash corrupto cuenta como no coincidente."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


# =================================================================================
# 🎫 TOKEN DE SESIÓN
# =================================================================================

def create_session_token(user_id: int, *, expires_minutes: Optional[int] = None) -> str:
    now = _utcnow()
    exp = now + timedelta(minutes=expires_minutes or SESSION_EXPIRE_MINUTES)
    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "type": SESSION_TOKEN_TYPE,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def decode_session_token(token: str) -> Optional[int]:
    """
    Verifica firma, expiración y tipo del token.
    Devuelve el user_id o None si el token no es válido.
    """
    try:
        data = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    if data.get("type") != SESSION_TOKEN_TYPE:
        return None
    try:
        return int(data.get("sub"))
    except (TypeError, ValueError):
        return None
