# weddings/routers/auth_routes.py                                                   # Ruta y nombre del archivo del router de sesiones.

# =================================================================================
# 🔑 ROUTER DE SESIONES (login / sesión actual / logout)
# ---------------------------------------------------------------------------------
# - Login de operadores (pareja/admin) con username + contraseña (bcrypt).
# - La sesión es un JWT firmado guardado en cookie HttpOnly.
# - Aplica rate-limit por IP en POST /api/sessions.
# =================================================================================

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from loguru import logger
from sqlalchemy.orm import Session

from weddings import auth, schemas
from weddings.core.security import (
    SESSION_COOKIE_NAME,
    SESSION_COOKIE_SECURE,
    client_ip,
    get_optional_user,
    require_user,
)
from weddings.crud import users_crud
from weddings.db import get_db
from weddings.models import User

router = APIRouter(
    prefix="/api/sessions",
    tags=["auth"],
)

# =================================================================================
# 🚪 POST /api/sessions: login
# =================================================================================
@router.post("", response_model=schemas.UserResponse)
def login(
    credentials: schemas.LoginRequest,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    """
    Valida username + contraseña y abre la sesión:
    - 429 si la IP superó el límite de intentos.
    - 401 con mensaje neutro si el usuario no existe o la contraseña no coincide.
    - 200 con {userId, username} y cookie de sesión si todo va bien.
    """
    ip = client_ip(request)
    limiter = request.app.state.login_limiter
    if not limiter.is_allowed(f"login:{ip}"):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many attempts. Please try again later.",
            headers={"Retry-After": str(limiter.window_s)},
        )

    user = users_crud.verify_credentials(db, credentials.username, credentials.password)
    if user is None:
        logger.info("Login failed for username='{}' ip={}", credentials.username, ip)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Username or password wrong",
        )

    token = auth.create_session_token(user.user_id)
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=auth.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    logger.info("Login success for user_id={} ip={}", user.user_id, ip)
    return user

# =================================================================================
# 👤 GET /api/sessions/current: ¿hay sesión?
# =================================================================================
@router.get("/current", response_model=schemas.UserResponse)
def current_session(user=Depends(get_optional_user)):
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthenticated user!",
        )
    return user

# =================================================================================
# 🚪 DELETE /api/sessions/current: logout
# =================================================================================
@router.delete("/current", status_code=status.HTTP_204_NO_CONTENT)
def logout(user: User = Depends(require_user)) -> Response:
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        httponly=True,
        secure=SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    logger.info("Logout user_id={}", user.user_id)
    return response
