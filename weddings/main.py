# weddings/main.py                                                                              # Punto de entrada de la API.

# =================================================================================
# 🧠 NÚCLEO DE LA APLICACIÓN API (FastAPI)
# ---------------------------------------------------------------------------------
# - create_app(): construye engine + fábrica de sesiones y los guarda en app.state
#   (sin conexión global de módulo).
# - Configura CORS, log de peticiones, manejadores de error y routers.
# - MAINTENANCE_MODE=1 devuelve una app mínima que responde 503 a todo.
# Arranque: uvicorn weddings.main:create_app --factory
# =================================================================================

import os
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger
from sqlalchemy.engine import Engine

env_path = Path(".") / ".env"
load_dotenv(dotenv_path=env_path)  # antes de importar módulos que leen os.getenv al cargarse

from weddings import models  # noqa: F401  (registra las tablas en Base.metadata)
from weddings.db import Base, build_engine, build_session_factory, log_db_path_on_startup, resolve_database_url
from weddings.errors import ErrorCode, register_exception_handlers
from weddings.rate_limit import SlidingWindowLimiter, get_limits_from_env
from weddings.routers import auth_routes, guests, invitations, meta

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173"


def _cors_origins() -> list:
    raw = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [o.strip() for o in raw.split(",") if o.strip()]


# =================================================================================
# 🧱 MODO MANTENIMIENTO
# =================================================================================
def _create_maintenance_app() -> FastAPI:
    app = FastAPI(title="API en mantenimiento")

    @app.api_route("/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
    async def maintenance_page(path: str):
        """Responde a cualquier ruta y método con mensaje neutro de mantenimiento."""
        return JSONResponse(
            status_code=503,
            content={
                "error": "The system is under maintenance. Please come back later.",
                "code": ErrorCode.SERVICE_UNAVAILABLE.value,
            },
        )

    logger.warning("🚧 API arrancada en MODO MANTENIMIENTO. Todos los endpoints reales están desactivados.")
    return app


# =================================================================================
# 🏗️ FÁBRICA DE LA APLICACIÓN
# =================================================================================
def create_app(database_url: Optional[str] = None, *, engine: Optional[Engine] = None) -> FastAPI:
    if os.getenv("MAINTENANCE_MODE") == "1":
        return _create_maintenance_app()

    owns_engine = engine is None  # un engine recibido lo cierra quien lo creó
    if owns_engine:
        engine = build_engine(resolve_database_url(database_url))

    logger.info(
        "[BOOT] DB={} | CORS={} | SESSION_COOKIE_SECURE={}",
        engine.url.drivername,
        _cors_origins(),
        os.getenv("SESSION_COOKIE_SECURE", "0"),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log_db_path_on_startup(engine)
        # En producción el esquema lo gestiona Alembic; esto es solo para desarrollo.
        if os.getenv("AUTO_CREATE_TABLES") == "1":
            Base.metadata.create_all(bind=engine)
            logger.info("Tablas creadas (AUTO_CREATE_TABLES=1)")
        yield
        if owns_engine:
            engine.dispose()
        logger.info("Application shutdown")

    app = FastAPI(
        title="Weddings RSVP API",
        description="Backend para gestionar invitaciones, invitados y sus RSVP",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    login_max, login_window = get_limits_from_env("LOGIN_RL", default_max=5, default_window=60)
    app.state.login_limiter = SlidingWindowLimiter(login_max, login_window)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,  # la sesión viaja en cookie
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "{} {} → {} ({:.1f} ms)", request.method, request.url.path, response.status_code, elapsed_ms
        )
        return response

    register_exception_handlers(app)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    def root() -> str:
        return "Hello World, from your server"

    app.include_router(auth_routes.router)
    app.include_router(invitations.router)
    app.include_router(guests.router)
    app.include_router(meta.router)
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "weddings.main:create_app",
        factory=True,
        host=os.getenv("SERVER_HOST", "127.0.0.1"),
        port=int(os.getenv("SERVER_PORT", "8000")),
    )
